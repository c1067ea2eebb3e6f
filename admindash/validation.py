"""
Request payload validation.

Stores trust their inputs, so every create/update body is validated here
first. Each record kind has a create model (required fields enforced)
and an update model (every field optional; only fields present in the
body are applied).

Invariants:
    - Validation is deterministic and never touches a store
    - The first error message is short and user-facing
    - Values leave this module already trimmed/normalized
"""

from __future__ import annotations

import math
import re
from typing import Any, ClassVar, Dict, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationInfo, field_validator
from pydantic import ValidationError as PydanticValidationError

from .errors import ValidationError
from .store.users import Role, normalize_email

EMAIL_REGEX = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

ROLE_VALUES = tuple(role.value for role in Role)

M = TypeVar("M", bound="PayloadModel")


# =============================================================================
# Field checks
# =============================================================================


def _required_text(value: Any, message: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValueError(message)
    return value.strip()


def _optional_text(value: Any, label: str) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError(f"{label} must be a string")
    return value.strip() or None


def _email(value: Any) -> str:
    email = _required_text(value, "Email is required")
    if not EMAIL_REGEX.match(email):
        raise ValueError("Invalid email format")
    return normalize_email(email)


def _role(value: Any) -> Optional[str]:
    if value is None or value == "":
        return None
    if isinstance(value, Role):
        return value.value
    if value not in ROLE_VALUES:
        raise ValueError(f"Invalid role. Expected one of: {', '.join(ROLE_VALUES)}")
    return value


def _price(value: Any) -> float:
    if isinstance(value, bool):
        raise ValueError("Valid price is required")
    if isinstance(value, str):
        value = value.strip()
    elif not isinstance(value, (int, float)):
        raise ValueError("Valid price is required")
    try:
        price = float(value)
    except (ValueError, OverflowError):
        raise ValueError("Valid price is required") from None
    if not math.isfinite(price) or price < 0:
        raise ValueError("Valid price is required")
    return price


# =============================================================================
# Models
# =============================================================================


class PayloadModel(BaseModel):
    """Base for request payload models."""

    model_config = ConfigDict(extra="ignore")

    # Messages for errors pydantic raises itself (e.g. a missing field)
    field_messages: ClassVar[Dict[str, str]] = {}

    def to_fields(self) -> Dict[str, Any]:
        """Fields present in the request, ready for the store."""
        return self.model_dump(exclude_unset=True)


class UserUpdate(PayloadModel):
    """Update any subset of a user's fields."""

    name: Optional[str] = None
    email: Optional[str] = None
    role: Optional[Role] = None

    @field_validator("name", mode="before")
    @classmethod
    def check_name(cls, value: Any) -> str:
        return _required_text(value, "Name is required")

    @field_validator("email", mode="before")
    @classmethod
    def check_email(cls, value: Any) -> str:
        return _email(value)

    @field_validator("role", mode="before")
    @classmethod
    def check_role(cls, value: Any) -> Optional[str]:
        return _role(value)


class UserCreate(UserUpdate):
    """Create a user. Name and email are required."""

    field_messages: ClassVar[Dict[str, str]] = {
        "name": "Name is required",
        "email": "Email is required",
    }

    name: str
    email: str

    def to_fields(self) -> Dict[str, Any]:
        return self.model_dump()


class ProductUpdate(PayloadModel):
    """Update any subset of a product's fields.

    An explicit null description or category clears it.
    """

    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = None
    category: Optional[str] = None

    @field_validator("name", mode="before")
    @classmethod
    def check_name(cls, value: Any) -> str:
        return _required_text(value, "Name is required")

    @field_validator("description", "category", mode="before")
    @classmethod
    def check_text(cls, value: Any, info: ValidationInfo) -> Optional[str]:
        return _optional_text(value, info.field_name.capitalize())

    @field_validator("price", mode="before")
    @classmethod
    def check_price(cls, value: Any) -> float:
        return _price(value)


class ProductCreate(ProductUpdate):
    """Create a product. Name and price are required."""

    field_messages: ClassVar[Dict[str, str]] = {
        "name": "Name is required",
        "price": "Valid price is required",
    }

    name: str
    price: float

    def to_fields(self) -> Dict[str, Any]:
        return self.model_dump()


# =============================================================================
# Entry point
# =============================================================================


def parse_payload(model: Type[M], body: Any) -> M:
    """Validate a decoded JSON body against a payload model.

    Args:
        model: Payload model class
        body: Decoded request body

    Returns:
        Validated model instance

    Raises:
        ValidationError: With the first error as message and all errors
            keyed by field name in .errors
    """
    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object")

    try:
        return model.model_validate(body)
    except PydanticValidationError as exc:
        errors: Dict[str, str] = {}
        for error in exc.errors():
            field_name = ".".join(str(part) for part in error["loc"]) or "body"
            errors.setdefault(field_name, _message_for(model, field_name, error))
        raise ValidationError(next(iter(errors.values())), errors=errors) from None


def _message_for(model: Type[PayloadModel], field_name: str, error: Dict[str, Any]) -> str:
    if error["type"] == "value_error":
        return str(error["ctx"]["error"])
    return model.field_messages.get(field_name, error["msg"])
