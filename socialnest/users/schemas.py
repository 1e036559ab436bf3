"""
Users domain: Pydantic V2 request/response schemas.

  - *Request  models:  input from the client (strict extra="forbid")
  - *Response models:  output to the client (no password hash exposed)
"""
from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class _Base(BaseModel):
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)


# ── Requests ──────────────────────────────────────────────────────────────────

class RegisterRequest(_Base):
    """Body for POST /users."""

    name: str = Field(min_length=1, max_length=150)
    email: EmailStr
    password: str = Field(min_length=1, max_length=128)


class LoginRequest(_Base):
    """Body for POST /users/auth."""

    email: EmailStr
    password: str = Field(min_length=1)


class UpdateAccountRequest(_Base):
    """PUT /users/profile: all fields optional; only provided fields are written."""

    name: str | None = Field(None, min_length=1, max_length=150)
    email: EmailStr | None = None
    password: str | None = Field(None, min_length=1, max_length=128)


# ── Responses ─────────────────────────────────────────────────────────────────

class RegisterResponse(BaseModel):
    message: str
    name: str
    email: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int


class AccountResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    email: str
    created_at: datetime


class MessageResponse(BaseModel):
    message: str
