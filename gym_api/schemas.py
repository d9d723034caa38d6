"""
Request/record models.

Records are stored and returned with the camelCase field names the dashboards
use; Python code reads them through snake_case attributes.
"""
from __future__ import annotations

import json
from datetime import date, datetime
from typing import Any, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError as PydanticValidationError, field_validator, model_validator
from pydantic.alias_generators import to_camel

from gym_api.core.errors import ValidationError
from gym_api.domain.members import MembershipType, MemberStatus, Role

ModelT = TypeVar("ModelT", bound=BaseModel)


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_record(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class Profile(CamelModel):
    id: str
    email: str
    name: str
    role: Role
    created_at: datetime


class Member(CamelModel):
    id: str
    name: str
    email: str
    phone_number: str = ""
    subscription_start: Optional[date] = None
    subscription_end: Optional[date] = None
    status: MemberStatus = MemberStatus.ACTIVE
    membership_type: MembershipType = MembershipType.BASIC
    created_at: datetime
    updated_at: datetime


class MemberInput(CamelModel):
    """Body of POST /members. Unknown keys (createdAt, updatedAt...) are ignored."""

    id: Optional[str] = None
    name: Optional[str] = None
    email: Optional[str] = None
    phone_number: Optional[str] = None
    subscription_start: Optional[date] = None
    subscription_end: Optional[date] = None
    status: Optional[MemberStatus] = None
    membership_type: Optional[MembershipType] = None

    @field_validator("*", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Any) -> Any:
        # form inputs post "" for untouched fields
        if isinstance(value, str):
            value = value.strip()
            return value or None
        return value


class SignupRequest(CamelModel):
    email: str = ""
    password: str = ""
    name: str = ""
    role: Role = Role.MEMBER

    @field_validator("email", "name", mode="before")
    @classmethod
    def _strip(cls, value: Any) -> Any:
        return value.strip() if isinstance(value, str) else value

    @field_validator("role", mode="before")
    @classmethod
    def _default_role(cls, value: Any) -> Any:
        return value or Role.MEMBER

    @model_validator(mode="after")
    def _require_fields(self) -> "SignupRequest":
        if not (self.email and self.password and self.name):
            raise ValueError("Email, password, and name are required")
        return self


def parse_payload(model_cls: Type[ModelT], payload: Any) -> ModelT:
    """Build ``model_cls`` from a decoded JSON body, mapping failures to ValidationError."""
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object")
    try:
        return model_cls.model_validate(payload)
    except PydanticValidationError as exc:
        err = exc.errors()[0]
        ctx_error = (err.get("ctx") or {}).get("error")
        if err.get("type") == "value_error" and ctx_error is not None:
            raise ValidationError(str(ctx_error)) from exc
        field = ".".join(str(part) for part in err.get("loc", ())) or "body"
        raise ValidationError(f"Invalid value for {field}") from exc


def decode_json_body(raw: bytes | str | None) -> Any:
    """Decode a raw request body; an empty body decodes to None."""
    if raw is None or not raw.strip():
        return None
    try:
        return json.loads(raw)
    except ValueError as exc:
        raise ValidationError("Invalid request body") from exc
