# Generator package

# Makes generate/ importable and exposes key interfaces.

from .generator import ContentGenerator, ErrorMessages
from .types import ErrorKind, ErrorResult, Message, Prompt, StreamResult, TextResult
from .clients.gateway_client import GatewayClient

__all__ = [
    "ContentGenerator",
    "ErrorMessages",
    "ErrorKind",
    "ErrorResult",
    "Message",
    "Prompt",
    "StreamResult",
    "TextResult",
    "GatewayClient",
]
