import re
from datetime import datetime

from pydantic import BaseModel, ConfigDict, field_validator

from app.schemas.validators import check_email, check_length


class LoginRequest(BaseModel):
    email: str
    password: str

    @field_validator("email", "password")
    @classmethod
    def _not_empty(cls, value):
        if not value:
            raise ValueError("This field is required")
        return value


class RegisterRequest(BaseModel):
    email: str
    password: str
    first_name: str
    last_name: str

    model_config = ConfigDict(str_strip_whitespace=True)

    @field_validator("email")
    @classmethod
    def _check_email(cls, value):
        if not value:
            raise ValueError("Email is required")
        return check_email(value)

    @field_validator("first_name")
    @classmethod
    def _check_first_name(cls, value):
        return check_length(value, "First name", 100)

    @field_validator("last_name")
    @classmethod
    def _check_last_name(cls, value):
        return check_length(value, "Last name", 100)

    @field_validator("password")
    @classmethod
    def _check_password(cls, value):
        if not value:
            raise ValueError("Password is required")
        if len(value) < 8:
            raise ValueError("Password must be at least 8 characters")
        if not re.search(r"[a-z]", value):
            raise ValueError("Password must contain lowercase letter")
        if not re.search(r"[A-Z]", value):
            raise ValueError("Password must contain uppercase letter")
        if not re.search(r"[0-9]", value):
            raise ValueError("Password must contain a number")
        if not re.search(r"[^a-zA-Z0-9]", value):
            raise ValueError("Password must contain a special character")
        return value


class UserResponse(BaseModel):
    id: int
    email: str
    first_name: str
    last_name: str
    created_at: datetime
    last_login: datetime | None = None

    model_config = {"from_attributes": True}


class LoginResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserResponse
