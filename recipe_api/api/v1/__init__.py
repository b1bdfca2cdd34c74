"""API v1 router aggregation."""

from fastapi import APIRouter

from recipe_api.api.v1.endpoints import auth, health, recipes, users

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(auth.router, tags=["auth"])
api_router.include_router(users.router, prefix="/user", tags=["users"])
api_router.include_router(recipes.router, prefix="/recipes", tags=["recipes"])
