"""Pydantic schemas for user and authentication request/response contracts."""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class UserBase(BaseModel):
    name: str
    phone: Optional[str] = None
    email: str
    role: str


class RegisterRequest(UserBase):
    password: str = Field(min_length=1)


class UserUpdateRequest(BaseModel):
    name: str
    phone: Optional[str] = None
    email: str
    password: str = Field(min_length=1)
    role: str
    pin: Optional[str] = None


class UserOut(UserBase):
    user_id: int
    has_pin: bool = False
    last_login: Optional[datetime] = None
    recent_login: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class UserMessageOut(BaseModel):
    user: UserOut
    message: str


class LoginRequest(BaseModel):
    email: str
    password: str


class PinLoginRequest(BaseModel):
    email: str
    pin: str


class SignInResponse(BaseModel):
    user_role: str = Field(serialization_alias="userRole")
    message: str
