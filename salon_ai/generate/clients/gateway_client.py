# Client for the hosted chat-completions gateway.
# One POST per call, bearer key, no retries, no pooled session.

from typing import Any, Callable, Dict, Optional, Union

import requests

from ..types import ErrorKind, ErrorResult, Prompt
from salon_ai.log import get_logger

logger = get_logger("gateway")

DEFAULT_URL = "https://ai.gateway.lovable.dev/v1/chat/completions"
DEFAULT_MODEL = "google/gemini-2.5-flash"


class GatewayClient:
    def __init__(
        self,
        api_key: Optional[str],
        url: str = DEFAULT_URL,
        model: str = DEFAULT_MODEL,
        timeout: Optional[float] = None,
        http_post: Callable[..., Any] = requests.post,
    ):
        self.api_key = api_key
        self.url = url
        self.model = model
        self.timeout = timeout
        self._post = http_post

    def build_body(self, prompt: Prompt) -> Dict[str, Any]:
        return {
            "model": self.model,
            "messages": prompt.as_payload(),
            "stream": prompt.stream,
        }

    def complete(self, prompt: Prompt) -> Union[requests.Response, ErrorResult]:
        """
        Send the prompt upstream and return the raw response.
        The caller owns the response: for streamed prompts the body has not
        been read yet and must be closed once relayed.
        """
        if not self.api_key:
            return ErrorResult(
                kind=ErrorKind.CONFIGURATION,
                message="AI_GATEWAY_API_KEY is not configured",
            )

        logger.info("Calling AI gateway: kind=%s model=%s stream=%s", prompt.kind.value, self.model, prompt.stream)
        return self._post(
            self.url,
            headers={
                "Authorization": f"Bearer {self.api_key}",
                "Content-Type": "application/json",
            },
            json=self.build_body(prompt),
            stream=prompt.stream,
            timeout=self.timeout,
        )
