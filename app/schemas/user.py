"""
schemas/user.py
---------------
Pydantic models for registration, login, token claims and responses.

Security note:
  - password_hash is NEVER included in any response schema.
  - Login accepts any non-empty email string so that a malformed address
    fails exactly like an unknown one.
  - bcrypt only reads the first 72 bytes of a password, so longer ones
    (measured in UTF-8 bytes, not characters) are refused at registration.
"""

from typing import Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

MAX_PASSWORD_BYTES = 72


class UserRegister(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=MAX_PASSWORD_BYTES)
    full_name: Optional[str] = Field(default=None, max_length=255)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, v: str) -> str:
        if len(v.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
        return v


class LoginRequest(BaseModel):
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class UserRead(BaseModel):
    id: str
    email: str
    full_name: Optional[str] = None

    model_config = {"from_attributes": True}


class TokenClaims(BaseModel):
    """Identity carried by a verified bearer token."""
    user_id: str
    email: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "Bearer"
    expires_in: int  # seconds
    user: UserRead
