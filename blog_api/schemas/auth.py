from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from typing import Optional


def check_not_blank(v: str) -> str:
    if v is None or not v.strip():
        raise ValueError("Field cannot be empty")
    return v


def check_password(v: str) -> str:
    check_not_blank(v)
    # bcrypt only looks at the first 72 bytes
    if len(v.encode("utf-8")) > 72:
        raise ValueError("Password cannot be longer than 72 bytes")
    return v


class SignupRequest(BaseModel):
    email: EmailStr
    password: str
    role: Optional[str] = None
    display_name: Optional[str] = Field(default=None, alias="displayName")
    photo_url: Optional[str] = Field(default=None, alias="photoURL")

    @field_validator("password")
    @classmethod
    def password_must_be_valid(cls, v):
        return check_password(v)

    model_config = ConfigDict(populate_by_name=True)


class SignupResponse(BaseModel):
    uid: str
    email: str
    role: str
    isDisabled: bool


class LoginRequest(BaseModel):
    email: EmailStr
    password: str

    @field_validator("password")
    @classmethod
    def password_must_not_be_empty(cls, v):
        return check_not_blank(v)


class LoginResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int
    user: dict


class RefreshTokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int
