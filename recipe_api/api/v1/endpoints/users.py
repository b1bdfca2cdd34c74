"""User profile endpoints (owner only)."""

import logging

from fastapi import APIRouter, Depends, Path

from recipe_api.api.deps import get_app_settings, get_user_store, require_owner_or_auth
from recipe_api.core.config import Settings
from recipe_api.core.exceptions import ConflictError, NotFoundError
from recipe_api.core.security import hash_password
from recipe_api.schemas.user import UserRead, UserUpdate
from recipe_api.services.store import DuplicateKeyError, UserStore

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_owner_or_auth)])


@router.put("/{id}", response_model=UserRead)
async def update_user(
    payload: UserUpdate,
    user_id: str = Path(..., alias="id"),
    users: UserStore = Depends(get_user_store),
    settings: Settings = Depends(get_app_settings),
):
    """Update the caller's own account (partial)."""
    user = await users.get(user_id)
    if user is None:
        raise NotFoundError("User not found")

    changes = payload.model_dump(exclude_unset=True, exclude_none=True)
    if "email" in changes and changes["email"] != user.email:
        if await users.find_by_email(changes["email"]) is not None:
            raise ConflictError("Email already in use")
    if "password" in changes:
        changes["password"] = hash_password(changes["password"], settings.password_hash_rounds)

    try:
        user = await users.update(user, changes)
    except DuplicateKeyError:
        raise ConflictError("Email already in use")
    logger.info("Updated user %s (%s)", user.id, ", ".join(sorted(changes)) or "no changes")
    return user
