"""User model - registered accounts that can sign in and obtain tokens."""

from __future__ import annotations

import uuid

from sqlalchemy import Boolean, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from recipe_api.db.base import Base


class User(Base):
    """Account keyed by a generated UUID; email is the unique business key."""

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(320), nullable=False, unique=True, index=True)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    password: Mapped[str] = mapped_column(String(255), nullable=False)  # bcrypt hash
    is_admin: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    recipes: Mapped[list["Recipe"]] = relationship("Recipe", back_populates="owner")
