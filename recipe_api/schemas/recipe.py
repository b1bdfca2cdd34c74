"""Recipe schemas."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class RecipeBase(BaseModel):
    category: str = Field(..., min_length=1, max_length=255)
    name: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    ingredients: list[str] = Field(default_factory=list)
    instructions: list[str] = Field(default_factory=list)


class RecipeCreate(RecipeBase):
    pass


class RecipeUpdate(BaseModel):
    category: str | None = Field(None, min_length=1, max_length=255)
    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = Field(None, min_length=1)
    ingredients: list[str] | None = None
    instructions: list[str] | None = None


class RecipeRead(RecipeBase):
    model_config = ConfigDict(from_attributes=True)
    id: UUID
    owner_id: UUID | None = None


class RecipeDeleted(BaseModel):
    id: UUID
    deleted: bool = True
