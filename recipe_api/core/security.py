"""Security utilities: bcrypt password hashing and JWT access tokens."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Any

import jwt
from passlib.context import CryptContext

from recipe_api.core.constants import JWT_ALGORITHM, PASSWORD_HASH_ROUNDS
from recipe_api.core.exceptions import InvalidTokenError, SigningError

logger = logging.getLogger(__name__)

# Claims carried by every access token
CLAIM_KEYS = ("id", "name", "email")


@lru_cache
def _password_context(rounds: int) -> CryptContext:
    return CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)


def hash_password(plain: str, rounds: int = PASSWORD_HASH_ROUNDS) -> str:
    if not plain:
        raise ValueError("password_blank")
    return _password_context(rounds).hash(plain)


def verify_password(plain: str, hashed: str) -> bool:
    """Check a plaintext password against a stored hash. Never raises."""
    if not plain or not hashed:
        return False
    try:
        return _password_context(PASSWORD_HASH_ROUNDS).verify(plain, hashed)
    except Exception:
        logger.warning("Password hash could not be verified", exc_info=True)
        return False


def issue_token(claims: Mapping[str, Any], secret: str, ttl: timedelta) -> str:
    """Sign ``claims`` ({id, name, email}) into a token that expires after ``ttl``."""
    if not secret:
        raise SigningError("jwt_secret_blank")

    now = datetime.now(timezone.utc)
    payload: dict[str, Any] = {key: claims.get(key) for key in CLAIM_KEYS}
    payload["id"] = str(payload["id"]) if payload["id"] is not None else None
    payload["iat"] = int(now.timestamp())
    payload["exp"] = int((now + ttl).timestamp())
    try:
        return jwt.encode(payload, secret, algorithm=JWT_ALGORITHM)
    except (jwt.PyJWTError, TypeError) as e:
        raise SigningError(f"token_signing_failed: {e}") from e


def verify_token(token: str, secret: str) -> dict[str, Any]:
    """Decode a token and return the identity claims it was issued with."""
    if not token:
        raise InvalidTokenError("missing_token")
    if not secret:
        raise SigningError("jwt_secret_blank")
    try:
        payload = jwt.decode(
            token,
            secret,
            algorithms=[JWT_ALGORITHM],
            options={"require": ["exp", "id"]},
        )
    except jwt.ExpiredSignatureError as e:
        raise InvalidTokenError("token_expired") from e
    except jwt.InvalidTokenError as e:
        raise InvalidTokenError("token_invalid") from e
    return {key: payload.get(key) for key in CLAIM_KEYS}
