"""Category and ingredient CRUD.

Thin validation over the repositories: names are trimmed, required and
unique case-insensitively. Deletion refuses anything still referenced by a
recipe.
"""

from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy.orm import Session

from ..db import atomic
from ..exceptions import ConflictError, NotFoundError, ValidationError
from ..models import Category, Ingredient
from ..repositories import CategoryRepository, IngredientRepository, RecipeRepository

logger = logging.getLogger("recipebook.catalog")


def _clean_name(value: Optional[str]) -> str:
    name = (value or "").strip()
    if not name:
        raise ValidationError("name is required")
    return name


class CategoryService:
    def __init__(self, db: Session):
        self.db = db
        self.categories = CategoryRepository(db)
        self.recipes = RecipeRepository(db)

    def list(self) -> list[Category]:
        return self.categories.list()

    def get(self, category_id: str) -> Category:
        category = self.categories.find_by_id(category_id)
        if category is None:
            raise NotFoundError("category not found", category_id=category_id)
        return category

    def create(self, name: Optional[str]) -> Category:
        name = _clean_name(name)
        if self.categories.find_by_name(name):
            raise ConflictError("category name must be unique", name=name)
        with atomic(self.db):
            category = self.categories.create(name)
        logger.info("Category created: %s (%s)", category.name, category.id)
        return category

    def update(self, category_id: str, name: Optional[str]) -> Category:
        category = self.get(category_id)
        if name is None:
            return category
        name = _clean_name(name)
        existing = self.categories.find_by_name(name)
        if existing and existing.id != category_id:
            raise ConflictError("category name must be unique", name=name)
        with atomic(self.db):
            self.categories.update(category, name)
        return category

    def delete(self, category_id: str) -> None:
        category = self.get(category_id)
        if self.recipes.count_by_category(category_id) > 0:
            raise ConflictError("cannot delete category with recipes", category_id=category_id)
        with atomic(self.db):
            self.categories.delete(category)
        logger.info("Category deleted: %s", category_id)


class IngredientService:
    def __init__(self, db: Session):
        self.db = db
        self.ingredients = IngredientRepository(db)

    def list(self) -> list[Ingredient]:
        return self.ingredients.list()

    def get(self, ingredient_id: str) -> Ingredient:
        return self.ingredients.get(ingredient_id)

    def create(self, name: Optional[str]) -> Ingredient:
        name = _clean_name(name)
        if self.ingredients.find_by_name(name):
            raise ConflictError("ingredient name must be unique", name=name)
        with atomic(self.db):
            ingredient = self.ingredients.create(name)
        return ingredient

    def update(self, ingredient_id: str, name: Optional[str]) -> Ingredient:
        ingredient = self.get(ingredient_id)
        if name is None:
            return ingredient
        name = _clean_name(name)
        existing = self.ingredients.find_by_name(name)
        if existing and existing.id != ingredient_id:
            raise ConflictError("ingredient name must be unique", name=name)
        with atomic(self.db):
            self.ingredients.update(ingredient, name)
        return ingredient

    def delete(self, ingredient_id: str) -> None:
        ingredient = self.get(ingredient_id)
        if self.ingredients.is_referenced(ingredient_id):
            raise ConflictError(
                "cannot delete ingredient used by recipes", ingredient_id=ingredient_id
            )
        with atomic(self.db):
            self.ingredients.delete(ingredient)
        logger.info("Ingredient deleted: %s", ingredient_id)
