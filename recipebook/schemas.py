"""Pydantic schemas for the recipebook API.

Request/response models for:
- Categories
- Ingredients (catalog)
- Recipes (with ordered ingredient lines)
- Shopping lists
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, Field

from .models import RecipeStatus


# --- Category ---

class CategoryCreate(BaseModel):
    name: str = Field(..., max_length=120)


class CategoryUpdate(BaseModel):
    name: Optional[str] = Field(None, max_length=120)


class CategoryOut(BaseModel):
    id: str
    name: str
    created_at: datetime

    class Config:
        from_attributes = True


# --- Ingredient ---

class IngredientCreate(BaseModel):
    name: str = Field(..., max_length=200)


class IngredientUpdate(BaseModel):
    name: Optional[str] = Field(None, max_length=200)


class IngredientOut(BaseModel):
    id: str
    name: str
    created_at: datetime

    class Config:
        from_attributes = True


# --- Recipe ---

class RecipeIngredientIn(BaseModel):
    """Free-form ingredient line; the service trims and validates it."""
    name: Optional[str] = ""
    quantity: Any = 0
    unit: Optional[str] = ""


class RecipeIngredientOut(BaseModel):
    ingredient_id: str
    quantity: float
    unit: str

    class Config:
        from_attributes = True


class RecipeCreate(BaseModel):
    title: str = Field("", max_length=200)
    description: Optional[str] = None
    ingredients: list[RecipeIngredientIn] = []
    steps: list[str] = []
    servings: float = 0
    category_id: str = Field("", validation_alias=AliasChoices("category_id", "categoryId"))


class RecipeUpdate(BaseModel):
    """Partial update; only fields present in the request body are applied."""
    title: Optional[str] = Field(None, max_length=200)
    description: Optional[str] = None
    ingredients: Optional[list[RecipeIngredientIn]] = None
    steps: Optional[list[str]] = None
    servings: Optional[float] = None
    category_id: Optional[str] = Field(
        None, validation_alias=AliasChoices("category_id", "categoryId")
    )


class RecipeOut(BaseModel):
    id: str
    title: str
    description: Optional[str]
    ingredients: list[RecipeIngredientOut] = []
    steps: list[str] = []
    servings: float
    category_id: str
    status: RecipeStatus
    created_at: datetime

    class Config:
        from_attributes = True


# --- Shopping list ---

class ShoppingListRequest(BaseModel):
    recipe_ids: list[str] = Field(
        ..., validation_alias=AliasChoices("recipe_ids", "recipeIds")
    )


class ShoppingListItem(BaseModel):
    ingredient_id: str
    name: str
    unit: str
    quantity: float


# --- Health ---

class ReadyOut(BaseModel):
    ok: bool
    database_ok: bool
