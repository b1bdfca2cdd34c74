"""Recipe CRUD endpoints. Every route requires a valid access token."""

import logging

from fastapi import APIRouter, Depends, Path

from recipe_api.api.deps import ensure_owner, get_recipe_store, require_auth
from recipe_api.core.exceptions import AuthError, ConflictError, NotFoundError
from recipe_api.core.identity import to_identifier
from recipe_api.schemas.auth import TokenClaims
from recipe_api.schemas.recipe import RecipeCreate, RecipeDeleted, RecipeRead, RecipeUpdate
from recipe_api.services.store import DuplicateKeyError, MissingReferenceError, RecipeStore

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_auth)])

# Duplicate recipe names are answered with 400 rather than 409
_DUPLICATE_NAME = "Recipe already exists"


@router.get("", response_model=list[RecipeRead])
async def list_recipes(recipes: RecipeStore = Depends(get_recipe_store)):
    """List all recipes."""
    return await recipes.find_all()


@router.post("", response_model=RecipeRead, status_code=201)
async def create_recipe(
    payload: RecipeCreate,
    user: TokenClaims = Depends(require_auth),
    recipes: RecipeStore = Depends(get_recipe_store),
):
    """Create a recipe owned by the caller. Names are unique."""
    if await recipes.find_one(name=payload.name) is not None:
        raise ConflictError(_DUPLICATE_NAME, status_code=400)
    try:
        recipe = await recipes.insert(owner_id=to_identifier(user.id), **payload.model_dump())
    except DuplicateKeyError:
        raise ConflictError(_DUPLICATE_NAME, status_code=400)
    except MissingReferenceError:
        # Signed token for an account that is no longer in the store
        raise AuthError("user_not_found")
    logger.info("Recipe %s created by %s", recipe.id, user.id)
    return recipe


@router.delete("/{id}", response_model=RecipeDeleted)
async def delete_recipe(
    recipe_id: str = Path(..., alias="id"),
    user: TokenClaims = Depends(require_auth),
    recipes: RecipeStore = Depends(get_recipe_store),
):
    """Delete a recipe by id."""
    recipe = await recipes.get(recipe_id)
    if recipe is None:
        raise NotFoundError("Recipe does not exist")
    deleted_id = recipe.id
    await recipes.delete(deleted_id)
    logger.info("Recipe %s deleted by %s", deleted_id, user.id)
    return {"id": deleted_id, "deleted": True}


@router.put("/{id}", response_model=RecipeRead)
async def update_recipe(
    payload: RecipeUpdate,
    recipe_id: str = Path(..., alias="id"),
    user: TokenClaims = Depends(require_auth),
    recipes: RecipeStore = Depends(get_recipe_store),
):
    """Update a recipe (partial). Only the recipe's owner may update it."""
    recipe = await recipes.get(recipe_id)
    if recipe is None:
        raise NotFoundError("Recipe not found")
    ensure_owner(user, recipe.owner_id)

    changes = payload.model_dump(exclude_unset=True, exclude_none=True)
    if "name" in changes and changes["name"] != recipe.name:
        if await recipes.find_one(name=changes["name"]) is not None:
            raise ConflictError(_DUPLICATE_NAME, status_code=400)
    try:
        recipe = await recipes.update(recipe, changes)
    except DuplicateKeyError:
        raise ConflictError(_DUPLICATE_NAME, status_code=400)
    logger.info("Recipe %s updated by %s", recipe.id, user.id)
    return recipe
