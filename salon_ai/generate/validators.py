# Request validation for the generation endpoints.
# Takes the raw JSON body and returns a typed request or an ErrorResult.
# Never touches the network.

from __future__ import annotations
from typing import Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .types import (
    CastContentRequest,
    ChatRequest,
    ErrorKind,
    ErrorResult,
    Message,
    SmsRequest,
)


class _ChatTurn(BaseModel):
    model_config = ConfigDict(extra="allow")

    role: str = Field(min_length=1)
    content: Any

    @field_validator("content")
    @classmethod
    def _content_present(cls, v: Any) -> Any:
        if v is None:
            raise ValueError("content is required")
        return v


class _ChatBody(BaseModel):
    messages: List[_ChatTurn] = Field(min_length=1)


class _CastContentBody(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    type: str = Field(min_length=1)
    cast_name: str = Field(min_length=1, alias="castName")
    cast_type: str = Field(min_length=1, alias="castType")
    existing_profile: Optional[str] = Field(default=None, alias="existingProfile")


class _SmsBody(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    customer_name: str = Field(min_length=1, alias="customerName")
    reservation_date: str = Field(min_length=1, alias="reservationDate")
    start_time: str = Field(min_length=1, alias="startTime")
    course_name: str = Field(min_length=1, alias="courseName")
    duration: str = Field(min_length=1)
    cast_name: str = Field(min_length=1, alias="castName")
    shop_name: Optional[str] = Field(default=None, alias="shopName")

    @field_validator("duration", mode="before")
    @classmethod
    def _duration_as_text(cls, v: Any) -> Any:
        # The booking form sends minutes as a number.
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v


def _describe(exc: ValidationError) -> str:
    """Collapse pydantic errors into one line: 'castName: ...; castType: ...'."""
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ())) or "body"
        parts.append(f"{loc}: {err.get('msg', 'invalid')}")
    return "; ".join(parts)


def _invalid(message: str) -> ErrorResult:
    return ErrorResult(kind=ErrorKind.VALIDATION, message=message)


def validate_chat(body: Any) -> Union[ChatRequest, ErrorResult]:
    if not isinstance(body, dict):
        return _invalid("Request body must be a JSON object")
    try:
        parsed = _ChatBody.model_validate(body)
    except ValidationError as e:
        return _invalid(_describe(e))
    return ChatRequest(messages=[
        Message(role=t.role, content=t.content, extra=dict(t.model_extra or {}))
        for t in parsed.messages
    ])


def validate_cast_content(body: Any) -> Union[CastContentRequest, ErrorResult]:
    if not isinstance(body, dict):
        return _invalid("Request body must be a JSON object")
    try:
        parsed = _CastContentBody.model_validate(body)
    except ValidationError as e:
        return _invalid(_describe(e))
    return CastContentRequest(
        type=parsed.type,
        cast_name=parsed.cast_name,
        cast_type=parsed.cast_type,
        existing_profile=parsed.existing_profile or None,
    )


def validate_sms(body: Any) -> Union[SmsRequest, ErrorResult]:
    if not isinstance(body, dict):
        return _invalid("Request body must be a JSON object")
    try:
        parsed = _SmsBody.model_validate(body)
    except ValidationError as e:
        return _invalid(_describe(e))
    return SmsRequest(
        customer_name=parsed.customer_name,
        reservation_date=parsed.reservation_date,
        start_time=parsed.start_time,
        course_name=parsed.course_name,
        duration=parsed.duration,
        cast_name=parsed.cast_name,
        shop_name=parsed.shop_name or None,
    )
