"""Canonical record identity shared by the stores and the access checks."""

from __future__ import annotations

import uuid
from typing import Any


def to_identifier(value: Any) -> uuid.UUID | None:
    """Normalize a path parameter, token claim or column value to a UUID.

    Returns None when the value cannot name a record, so callers treat it as
    "not found" or "not the same identity" rather than failing.
    """
    if value is None:
        return None
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value).strip())
    except ValueError:
        return None


def same_identity(left: Any, right: Any) -> bool:
    a = to_identifier(left)
    return a is not None and a == to_identifier(right)
