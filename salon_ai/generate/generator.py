# ContentGenerator runs one request through the pipeline:
#   validate -> build prompt -> call gateway -> translate response
# Each stage returns either its value or an ErrorResult; the first
# ErrorResult short-circuits and is handed back to the HTTP layer.

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Iterator, Union

from .clients.gateway_client import GatewayClient
from .prompts import build_cast_prompt, build_chat_prompt, build_sms_prompt
from .types import ErrorKind, ErrorResult, Prompt, StreamResult, TextResult
from .validators import validate_cast_content, validate_chat, validate_sms
from salon_ai.log import get_logger

logger = get_logger("generator")


@dataclass(frozen=True)
class ErrorMessages:
    """User-facing texts per endpoint; the dashboard shows them verbatim."""
    rate_limited: str
    quota_exceeded: str
    upstream: str


RATE_LIMITED_JA = "レート制限に達しました。しばらく待ってから再度お試しください。"

CHAT_MESSAGES = ErrorMessages(
    rate_limited=RATE_LIMITED_JA,
    quota_exceeded="クレジットが不足しています。",
    upstream="AI API error",
)
CAST_MESSAGES = ErrorMessages(
    rate_limited=RATE_LIMITED_JA,
    quota_exceeded="クレジットが不足しています。ワークスペースに資金を追加してください。",
    upstream="AI API error",
)
SMS_MESSAGES = ErrorMessages(
    rate_limited="レート制限に達しました。しばらくしてから再試行してください。",
    quota_exceeded="クレジットが不足しています。Lovable AIワークスペースに資金を追加してください。",
    upstream="AI生成エラー",
)


def extract_content(data: Any) -> str:
    """choices[0].message.content, or "" when the field is absent."""
    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        return ""
    return content if isinstance(content, str) else ""


def relay(response) -> Iterator[bytes]:
    """Yield the upstream body unchanged, chunk by chunk, then close it."""
    try:
        for chunk in response.iter_content(chunk_size=None):
            if chunk:
                yield chunk
    finally:
        response.close()


def translate(response, prompt: Prompt, messages: ErrorMessages) -> Union[TextResult, StreamResult, ErrorResult]:
    status = response.status_code
    if status == 429:
        response.close()
        return ErrorResult(kind=ErrorKind.RATE_LIMITED, message=messages.rate_limited)
    if status == 402:
        response.close()
        return ErrorResult(kind=ErrorKind.QUOTA_EXCEEDED, message=messages.quota_exceeded)
    if not 200 <= status < 300:
        logger.error("AI gateway error: %s %s", status, response.text)
        response.close()
        return ErrorResult(kind=ErrorKind.UPSTREAM, message=messages.upstream)

    if prompt.stream:
        logger.info("Streaming response from AI gateway")
        return StreamResult(chunks=relay(response))

    content = extract_content(response.json())
    if not content:
        logger.warning("AI gateway returned no content for kind=%s", prompt.kind.value)
    return TextResult(text=content)


class ContentGenerator:
    def __init__(self, client: GatewayClient):
        self.client = client

    def _run(self, prompt: Prompt, messages: ErrorMessages):
        response = self.client.complete(prompt)
        if isinstance(response, ErrorResult):
            return response
        return translate(response, prompt, messages)

    def chat(self, body: Dict[str, Any]) -> Union[StreamResult, ErrorResult]:
        req = validate_chat(body)
        if isinstance(req, ErrorResult):
            return req
        logger.info("Received chat request with %d messages", len(req.messages))
        return self._run(build_chat_prompt(req), CHAT_MESSAGES)

    def cast_content(self, body: Dict[str, Any]) -> Union[TextResult, ErrorResult]:
        req = validate_cast_content(body)
        if isinstance(req, ErrorResult):
            return req
        prompt = build_cast_prompt(req)
        if isinstance(prompt, ErrorResult):
            return prompt
        logger.info("Generating cast content: type=%s cast=%s", req.type, req.cast_name)
        return self._run(prompt, CAST_MESSAGES)

    def sms_message(self, body: Dict[str, Any]) -> Union[TextResult, ErrorResult]:
        req = validate_sms(body)
        if isinstance(req, ErrorResult):
            return req
        logger.info("Generating reservation SMS for cast=%s", req.cast_name)
        return self._run(build_sms_prompt(req), SMS_MESSAGES)
