# Typed dataclasses shared across the generation pipeline:
# validated requests, prompts, results and the error taxonomy.

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional


@dataclass
class Message:
    """
    Single chat turn: system, user, or assistant.
    content is usually text but may be a list of parts; extra holds any
    other keys the caller sent with the turn (name, tool_call_id, ...).
    """
    role: str
    content: Any
    extra: Dict[str, Any] = field(default_factory=dict)


class ContentKind(str, Enum):
    PROFILE = "profile"
    ANNOUNCEMENT = "announcement"
    CATCHPHRASE = "catchphrase"
    CHAT = "chat"
    SMS = "sms-confirmation"


@dataclass
class CastContentRequest:
    type: str
    cast_name: str
    cast_type: str
    existing_profile: Optional[str] = None


@dataclass
class ChatRequest:
    messages: List[Message]


@dataclass
class SmsRequest:
    customer_name: str
    reservation_date: str
    start_time: str
    course_name: str
    duration: str
    cast_name: str
    shop_name: Optional[str] = None


@dataclass
class Prompt:
    """Messages sent upstream, system prompt first."""
    kind: ContentKind
    messages: List[Message]
    stream: bool = False

    @property
    def system(self) -> str:
        return self.messages[0].content

    def as_payload(self) -> List[Dict[str, Any]]:
        return [{**m.extra, "role": m.role, "content": m.content} for m in self.messages]


class ErrorKind(str, Enum):
    VALIDATION = "ValidationError"
    CONFIGURATION = "ConfigurationError"
    RATE_LIMITED = "RateLimited"
    QUOTA_EXCEEDED = "QuotaExceeded"
    UPSTREAM = "UpstreamError"
    UNKNOWN = "UnknownError"


@dataclass
class ErrorResult:
    kind: ErrorKind
    message: str


@dataclass
class TextResult:
    text: str


@dataclass
class StreamResult:
    chunks: Iterator[bytes]
