"""ORM models - import all so Base.metadata is complete for migrations."""

from recipe_api.models.recipe import Recipe
from recipe_api.models.user import User

__all__ = [
    "Recipe",
    "User",
]
