"""Login and token schemas."""

from pydantic import BaseModel, Field, field_validator


class LoginRequest(BaseModel):
    email: str = Field(..., min_length=1, max_length=320)
    password: str = Field(..., min_length=1, max_length=128)

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v):
        return v.strip().lower() if isinstance(v, str) else v


class TokenResponse(BaseModel):
    token: str


class TokenClaims(BaseModel):
    """Identity decoded from a verified access token."""

    id: str
    name: str | None = None
    email: str | None = None
