"""Request payload schemas (Pydantic v2)."""
from __future__ import annotations

import re
from typing import Optional

from flask import request
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator, model_validator

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
MIN_PASSWORD_LEN = 6
MAX_NAME_LEN = 120  # users.full_name is String(120)


def _strip(v):
    return v.strip() if isinstance(v, str) else v


def _check_name_len(v):
    if v is not None and len(v) > MAX_NAME_LEN:
        raise ValueError(f"Full name must be at most {MAX_NAME_LEN} characters")
    return v


def request_payload() -> dict:
    """Body of the current request as a JSON object; anything else reads as ``{}``."""
    data = request.get_json(force=True)
    return data if isinstance(data, dict) else {}


class SignupSchema(BaseModel):
    full_name: str
    email: str
    password: str
    model_config = ConfigDict(extra="ignore")

    @field_validator("full_name", "email", mode="before")
    @classmethod
    def _trim(cls, v):
        return _strip(v)

    @field_validator("full_name")
    @classmethod
    def _name_required(cls, v: str) -> str:
        if not v:
            raise ValueError("All fields are required")
        return _check_name_len(v)

    @field_validator("email")
    @classmethod
    def _valid_email(cls, v: str) -> str:
        v = v.lower()
        if not EMAIL_RE.match(v):
            raise ValueError("Invalid email")
        return v

    @field_validator("password")
    @classmethod
    def _password_len(cls, v: str) -> str:
        if len(v) < MIN_PASSWORD_LEN:
            raise ValueError(f"Password must be at least {MIN_PASSWORD_LEN} characters")
        return v


class LoginSchema(BaseModel):
    email: str
    password: str
    model_config = ConfigDict(extra="ignore")

    @field_validator("email", mode="before")
    @classmethod
    def _normalize(cls, v):
        v = _strip(v)
        return v.lower() if isinstance(v, str) else v


class ProfileUpdateSchema(BaseModel):
    profile_pic: Optional[str] = None
    full_name: Optional[str] = None
    model_config = ConfigDict(extra="ignore")

    @field_validator("profile_pic", "full_name", mode="before")
    @classmethod
    def _blank_is_none(cls, v):
        v = _strip(v)
        return v or None

    @field_validator("full_name")
    @classmethod
    def _name_len(cls, v):
        return _check_name_len(v)

    @model_validator(mode="after")
    def _something_to_update(self):
        if self.profile_pic is None and self.full_name is None:
            raise ValueError("Profile pic is required")
        return self


class SendMessageSchema(BaseModel):
    text: Optional[str] = None
    image: Optional[str] = None
    model_config = ConfigDict(extra="ignore")

    @field_validator("text", "image", mode="before")
    @classmethod
    def _blank_is_none(cls, v):
        v = _strip(v)
        return v or None

    @model_validator(mode="after")
    def _not_empty(self):
        if self.text is None and self.image is None:
            raise ValueError("Message must have text or an image")
        return self


def first_error(exc: ValidationError) -> str:
    """Human-readable message for the first validation failure."""
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    err = errors[0]
    if err.get("type") == "missing":
        return "All fields are required"
    msg = err.get("msg", "Invalid request")
    # pydantic prefixes ValueError messages raised in validators
    return msg.removeprefix("Value error, ")
