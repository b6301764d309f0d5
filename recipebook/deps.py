"""FastAPI dependencies for the recipebook API.

Each request gets its own session; services are built on top of it.
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from .db import get_db
from .services import CategoryService, IngredientService, RecipeService


def get_recipe_service(db: Session = Depends(get_db)) -> RecipeService:
    return RecipeService(db)


def get_category_service(db: Session = Depends(get_db)) -> CategoryService:
    return CategoryService(db)


def get_ingredient_service(db: Session = Depends(get_db)) -> IngredientService:
    return IngredientService(db)
