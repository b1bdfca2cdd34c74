"""User schemas."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from recipe_api.core.constants import NAME_MIN_LENGTH, PASSWORD_MIN_LENGTH, PHONE_MIN_LENGTH


def _strip(value):
    return value.strip() if isinstance(value, str) else value


def _lower(value):
    return value.strip().lower() if isinstance(value, str) else value


class UserCreate(BaseModel):
    name: str = Field(..., min_length=NAME_MIN_LENGTH, max_length=255)
    email: EmailStr
    phone: str | None = Field(None, min_length=PHONE_MIN_LENGTH, max_length=50)
    password: str = Field(..., min_length=PASSWORD_MIN_LENGTH, max_length=128)

    strip_name = field_validator("name", mode="before")(_strip)
    lower_email = field_validator("email", mode="before")(_lower)


class UserUpdate(BaseModel):
    name: str | None = Field(None, min_length=NAME_MIN_LENGTH, max_length=255)
    email: EmailStr | None = None
    phone: str | None = Field(None, min_length=PHONE_MIN_LENGTH, max_length=50)
    password: str | None = Field(None, min_length=PASSWORD_MIN_LENGTH, max_length=128)

    strip_name = field_validator("name", mode="before")(_strip)
    lower_email = field_validator("email", mode="before")(_lower)


class UserRead(BaseModel):
    """Public view of a user; the password hash is never part of it."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: UUID
    name: str
    email: str
    phone: str | None = None
    is_admin: bool = Field(False, serialization_alias="isAdmin")
