"""Request dependencies: settings, stores and the access-control gates.

The gates are plain FastAPI dependencies. A router lists them in order and
each one either returns (the request continues) or raises an ``AppError``
(the request is answered with that error).
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import ValidationError as SchemaValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from recipe_api.core.config import Settings
from recipe_api.core.exceptions import AuthError, ForbiddenError, InternalError, InvalidTokenError
from recipe_api.core.identity import same_identity
from recipe_api.core.security import verify_token
from recipe_api.db.session import get_db
from recipe_api.schemas.auth import TokenClaims
from recipe_api.services.store import RecipeStore, UserStore

logger = logging.getLogger(__name__)

# auto_error=False: a missing or malformed header must become our own 401
_bearer = HTTPBearer(auto_error=False)


def get_app_settings(request: Request) -> Settings:
    settings = getattr(request.app.state, "settings", None)
    if settings is None:
        raise InternalError("server_config_missing")
    return settings


def get_user_store(db: AsyncSession = Depends(get_db)) -> UserStore:
    return UserStore(db)


def get_recipe_store(db: AsyncSession = Depends(get_db)) -> RecipeStore:
    return RecipeStore(db)


def require_auth(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer),
    settings: Settings = Depends(get_app_settings),
) -> TokenClaims:
    """Require ``Authorization: Bearer <token>`` carrying a valid token."""
    if credentials is None or not credentials.credentials:
        raise AuthError("No token provided")

    try:
        claims = verify_token(credentials.credentials, settings.secret_key)
    except InvalidTokenError as e:
        logger.info("Rejected token on %s %s: %s", request.method, request.url.path, e.detail)
        raise

    if not claims.get("id"):
        raise InvalidTokenError("token_missing_id")

    try:
        user = TokenClaims(**claims)
    except SchemaValidationError as e:
        # Signed by us but the claims do not have the expected types
        raise InvalidTokenError("token_invalid") from e
    request.state.user = user
    return user


def ensure_owner(user: TokenClaims, owner_id: Any) -> None:
    """Raise 403 unless ``owner_id`` names the same identity as ``user``."""
    if not same_identity(user.id, owner_id):
        logger.info("Identity %s denied access to resource owned by %s", user.id, owner_id)
        raise ForbiddenError()


def require_owner_or_auth(
    request: Request,
    user: TokenClaims = Depends(require_auth),
) -> TokenClaims:
    """Require a valid token whose identity matches the ``id`` path parameter."""
    ensure_owner(user, request.path_params.get("id"))
    return user
