"""Registration and login endpoints."""

import logging
from datetime import timedelta

from fastapi import APIRouter, Depends

from recipe_api.api.deps import get_app_settings, get_user_store
from recipe_api.core.config import Settings
from recipe_api.core.exceptions import AuthError, ConflictError
from recipe_api.core.security import hash_password, issue_token, verify_password
from recipe_api.schemas.auth import LoginRequest, TokenResponse
from recipe_api.schemas.user import UserCreate, UserRead
from recipe_api.services.store import DuplicateKeyError, UserStore

logger = logging.getLogger(__name__)

router = APIRouter()

_BAD_CREDENTIALS = "Username or Password is not correct!"


@router.post("/register", response_model=UserRead, status_code=201)
async def register(
    payload: UserCreate,
    users: UserStore = Depends(get_user_store),
    settings: Settings = Depends(get_app_settings),
):
    """Create an account; the password is stored as a bcrypt hash."""
    if await users.find_by_email(payload.email) is not None:
        raise ConflictError("User already exists")
    try:
        user = await users.insert(
            name=payload.name,
            email=payload.email,
            phone=payload.phone,
            password=hash_password(payload.password, settings.password_hash_rounds),
        )
    except DuplicateKeyError:
        # Lost a race with a concurrent registration of the same email
        raise ConflictError("User already exists")
    logger.info("Registered user %s", user.id)
    return user


@router.post("/login", response_model=TokenResponse)
async def login(
    payload: LoginRequest,
    users: UserStore = Depends(get_user_store),
    settings: Settings = Depends(get_app_settings),
):
    """Exchange email and password for a signed access token."""
    user = await users.find_by_email(payload.email)
    if user is None or not verify_password(payload.password, user.password):
        logger.warning("Failed login attempt for %s", payload.email)
        raise AuthError(_BAD_CREDENTIALS)

    token = issue_token(
        {"id": user.id, "name": user.name, "email": user.email},
        settings.secret_key,
        timedelta(minutes=settings.token_expire_minutes),
    )
    return {"token": token}
