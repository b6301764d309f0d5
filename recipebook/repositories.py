"""Session-bound data access for categories, ingredients and recipes.

The services never touch the session's query API directly; they go through
these three classes. Repositories flush, the calling service commits.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from sqlalchemy import select, func
from sqlalchemy.orm import Session

from .exceptions import NotFoundError
from .models import (
    Category,
    Ingredient,
    Recipe,
    RecipeIngredient,
    RecipeStatus,
    name_key,
)

logger = logging.getLogger("recipebook.repositories")


class CategoryRepository:
    def __init__(self, db: Session):
        self.db = db

    def list(self) -> list[Category]:
        return list(self.db.scalars(select(Category).order_by(Category.created_at)))

    def find_by_id(self, category_id: str) -> Optional[Category]:
        return self.db.get(Category, category_id)

    def find_by_name(self, name: str) -> Optional[Category]:
        return self.db.scalar(select(Category).where(Category.name_key == name_key(name)))

    def create(self, name: str) -> Category:
        category = Category(name=name, name_key=name_key(name))
        self.db.add(category)
        self.db.flush()
        return category

    def update(self, category: Category, name: str) -> Category:
        category.name = name
        category.name_key = name_key(name)
        self.db.flush()
        return category

    def delete(self, category: Category) -> None:
        self.db.delete(category)
        self.db.flush()


class IngredientRepository:
    def __init__(self, db: Session):
        self.db = db

    def list(self) -> list[Ingredient]:
        return list(self.db.scalars(select(Ingredient).order_by(Ingredient.created_at)))

    def find_by_id(self, ingredient_id: str) -> Optional[Ingredient]:
        return self.db.get(Ingredient, ingredient_id)

    def find_by_name(self, name: str) -> Optional[Ingredient]:
        return self.db.scalar(
            select(Ingredient).where(Ingredient.name_key == name_key(name))
        )

    def get(self, ingredient_id: str) -> Ingredient:
        ingredient = self.find_by_id(ingredient_id)
        if ingredient is None:
            raise NotFoundError("ingredient not found", ingredient_id=ingredient_id)
        return ingredient

    def create(self, name: str) -> Ingredient:
        ingredient = Ingredient(name=name, name_key=name_key(name))
        self.db.add(ingredient)
        self.db.flush()
        logger.info("Catalog entry created: %s (%s)", ingredient.name, ingredient.id)
        return ingredient

    def update(self, ingredient: Ingredient, name: str) -> Ingredient:
        ingredient.name = name
        ingredient.name_key = name_key(name)
        self.db.flush()
        return ingredient

    def delete(self, ingredient: Ingredient) -> None:
        self.db.delete(ingredient)
        self.db.flush()

    def is_referenced(self, ingredient_id: str) -> bool:
        count = self.db.scalar(
            select(func.count(RecipeIngredient.id)).where(
                RecipeIngredient.ingredient_id == ingredient_id
            )
        )
        return bool(count)


class RecipeRepository:
    def __init__(self, db: Session):
        self.db = db

    def list(self, category_id: Optional[str] = None) -> list[Recipe]:
        stmt = select(Recipe)
        if category_id:
            stmt = stmt.where(Recipe.category_id == category_id)
        return list(self.db.scalars(stmt.order_by(Recipe.created_at, Recipe.id)))

    def find_by_id(self, recipe_id: str, for_update: bool = False) -> Optional[Recipe]:
        stmt = select(Recipe).where(Recipe.id == recipe_id)
        if for_update:
            # No-op on SQLite, row lock on PostgreSQL
            stmt = stmt.with_for_update()
        return self.db.scalar(stmt)

    def create(
        self,
        *,
        title: str,
        description: Optional[str],
        ingredients: list[dict],
        steps: list[str],
        servings: float,
        category_id: str,
    ) -> Recipe:
        recipe = Recipe(
            title=title,
            description=description,
            steps=list(steps),
            servings=servings,
            category_id=category_id,
            status=RecipeStatus.DRAFT.value,
            ingredients=_ingredient_rows(ingredients),
        )
        self.db.add(recipe)
        self.db.flush()
        return recipe

    def update(self, recipe: Recipe, changes: dict[str, Any]) -> Recipe:
        """Apply a partial change set to ``recipe`` as one replacement."""
        for field, value in changes.items():
            if field == "ingredients":
                recipe.ingredients = _ingredient_rows(value)
            elif field == "steps":
                recipe.steps = list(value)
            else:
                setattr(recipe, field, value)
        self.db.flush()
        return recipe

    def delete(self, recipe: Recipe) -> None:
        self.db.delete(recipe)
        self.db.flush()

    def count_by_category(self, category_id: str) -> int:
        return self.db.scalar(
            select(func.count(Recipe.id)).where(Recipe.category_id == category_id)
        ) or 0


def _ingredient_rows(lines: list[dict]) -> list[RecipeIngredient]:
    return [
        RecipeIngredient(
            ingredient_id=line["ingredient_id"],
            quantity=line["quantity"],
            unit=line["unit"],
            position=position,
        )
        for position, line in enumerate(lines)
    ]
