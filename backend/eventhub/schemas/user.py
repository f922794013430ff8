"""Pydantic schemas for Users and credentials."""
from __future__ import annotations
from datetime import datetime
from pydantic import BaseModel, Field

from eventhub.models.user import Role


class SignupRequest(BaseModel):
    email: str = Field(min_length=3, max_length=255)
    password: str = Field(min_length=1, max_length=72)
    role: Role = Role.attendee


class LoginRequest(BaseModel):
    email: str
    password: str


class UserOut(BaseModel):
    id: str
    email: str
    role: Role
    created_at: datetime

    model_config = {"from_attributes": True}


class TokenOut(BaseModel):
    user: UserOut
    token: str
