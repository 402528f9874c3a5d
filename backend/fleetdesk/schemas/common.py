"""
FleetDesk Backend — Shared Schema Building Blocks
==================================================

What:  Base model configuration, reusable validated field types, and the
       error response models used by every endpoint.
How:   Field types are `Annotated` aliases whose Before- or WrapValidator
       raises PydanticCustomError carrying the exact client-facing message. FastAPI
       collects every failing field into one RequestValidationError, which
       main.py turns into a 400 {"errors": [{"field", "message"}]} body.

JSON naming:
    Request and response bodies use camelCase (shipmentId, cargoWeight).
    Python attributes stay snake_case; the alias generator maps between them
    and populate_by_name=True lets services construct models by attribute.
"""

import math
from datetime import date, datetime, time, timezone
from typing import Annotated, Any, Callable, List, Optional, Sequence

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    TypeAdapter,
    ValidationError,
    ValidatorFunctionWrapHandler,
    WrapValidator,
)
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError


class CamelModel(BaseModel):
    """Base for every API schema: camelCase on the wire, ORM-readable."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# ══════════════════════════════════════════════════════════════════════════
# Validated field types
# ══════════════════════════════════════════════════════════════════════════


def reject(kind: str, message: str):
    """Raises a field error whose message is returned to the client as-is."""
    raise PydanticCustomError(kind, message)


def _allow_none(
    check: Callable[[Any], Any], optional: bool, message: str
) -> Callable[[Any], Any]:
    def validator(value: Any) -> Any:
        if value is None:
            if optional:
                return None
            reject("required", message)
        return check(value)
    return validator


# Numeric ids are stored in 32-bit INTEGER columns and start at 1
MAX_ID = 2**31 - 1


def RequiredText(message: str, optional: bool = False, max_length: Optional[int] = None):
    """
    Non-empty string. Whitespace-only strings are rejected.

    max_length matches the width of the backing VARCHAR column; longer
    values are refused here instead of failing at the database.
    """

    def check(value: Any) -> str:
        if not isinstance(value, str) or not value.strip():
            reject("text", message)
        text = value.strip()
        if max_length is not None and len(text) > max_length:
            reject("text_length", f"Must be at most {max_length} characters.")
        return text

    return Annotated[
        Optional[str] if optional else str,
        BeforeValidator(_allow_none(check, optional, message)),
    ]


def PositiveNumber(message: str, optional: bool = False, allow_zero: bool = False):
    """Float > 0 (or >= 0 with allow_zero). Numeric strings are accepted."""

    def check(value: Any) -> float:
        if isinstance(value, bool):
            reject("number", message)
        try:
            number = float(value)
        except (TypeError, ValueError):
            reject("number", message)
        if math.isnan(number) or math.isinf(number):
            reject("number", message)
        if number < 0 or (number == 0 and not allow_zero):
            reject("number", message)
        return number

    return Annotated[
        Optional[float] if optional else float,
        BeforeValidator(_allow_none(check, optional, message)),
    ]


def IntegerId(message: str, optional: bool = False):
    """Whole number in 1..MAX_ID. Accepts ints, integral floats and digit strings."""

    def to_int(value: Any) -> Optional[int]:
        if isinstance(value, bool):
            return None
        if isinstance(value, int):
            return value
        if isinstance(value, float) and value.is_integer():
            return int(value)
        if isinstance(value, str) and value.strip().isdigit():
            return int(value.strip())
        return None

    def check(value: Any) -> int:
        number = to_int(value)
        if number is None or not 1 <= number <= MAX_ID:
            reject("integer", message)
        return number

    return Annotated[
        Optional[int] if optional else int,
        BeforeValidator(_allow_none(check, optional, message)),
    ]


_DATE = TypeAdapter(date)


def DateTimeField(message: str, optional: bool = False):
    """
    ISO 8601 date-time, or a bare date (midnight UTC).

    Parsing is pydantic's own; only the error message is replaced. Naive
    values are taken as UTC.
    """

    def validate(value: Any, handler: ValidatorFunctionWrapHandler) -> Optional[datetime]:
        if value is None:
            if optional:
                return None
            reject("required", message)
        try:
            parsed = handler(value)
        except ValidationError:
            try:
                day = _DATE.validate_python(value)
            except ValidationError:
                reject("datetime", message)
            parsed = datetime.combine(day, time(), tzinfo=timezone.utc)
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed

    return Annotated[
        Optional[datetime] if optional else datetime,
        WrapValidator(validate),
    ]


def OneOf(choices: Sequence[str], message: str, optional: bool = False):
    """String restricted to a fixed vocabulary (exact match)."""

    def check(value: Any) -> str:
        if value not in choices:
            reject("enum", message)
        return value

    return Annotated[
        Optional[str] if optional else str,
        BeforeValidator(_allow_none(check, optional, message)),
    ]


# ══════════════════════════════════════════════════════════════════════════
# Error Response Models
# ══════════════════════════════════════════════════════════════════════════


class FieldError(BaseModel):
    field: str = Field(description="Request field that failed validation")
    message: str = Field(description="Why the value was rejected")


class ValidationErrorResponse(BaseModel):
    """400 — every field-level violation in the request."""
    errors: List[FieldError]
    request_id: Optional[str] = None


class BusinessErrorResponse(BaseModel):
    """400 — the first business rule the request violated."""
    success: bool = False
    message: str
    request_id: Optional[str] = None


class ErrorResponse(BaseModel):
    """404 / 500 — resource missing or unexpected failure."""
    error: str
    request_id: Optional[str] = None


class HealthResponse(BaseModel):
    status: str = Field(description="ok or unhealthy")
    message: str
    version: str
    database: str = Field(description="connected or disconnected")
    uptime_seconds: float
