"""Recipe lifecycle and aggregation engine.

RecipeService is bound to one session per request. Every mutating call
reads the current row, validates, writes the full replacement and commits
while holding the recipe's lock; scaling and shopping lists only read.
"""

from __future__ import annotations

import logging
import math
from contextlib import ExitStack
from dataclasses import dataclass
from typing import Any, Optional

from sqlalchemy.orm import Session

from ..db import atomic
from ..exceptions import NotFoundError, ValidationError
from ..infra.locks import recipe_locks
from ..models import Recipe, RecipeStatus
from ..repositories import CategoryRepository, IngredientRepository, RecipeRepository
from ..schemas import RecipeOut, ShoppingListItem
from . import lifecycle
from .ingredient_resolution import resolve_ingredients
from .scaling import scale_recipe
from .shopping_list import build_shopping_list

logger = logging.getLogger("recipebook.recipes")

STATUS_ALL = "all"


@dataclass
class RecipeFilter:
    """Listing filter. ``status=None`` means published recipes only."""
    category_id: Optional[str] = None
    category_name: Optional[str] = None
    search: Optional[str] = None
    status: Optional[str] = None


def _clean_title(value: Any) -> str:
    title = str(value or "").strip()
    if not title:
        raise ValidationError("title is required")
    return title


def _clean_servings(value: Any) -> float:
    try:
        servings = float(value)
    except (TypeError, ValueError):
        servings = 0.0
    if not (math.isfinite(servings) and servings > 0):
        raise ValidationError("servings must be greater than 0")
    return servings


def _clean_steps(value: Any) -> list[str]:
    if not isinstance(value, (list, tuple)):
        return []
    return [str(step) for step in value]


class RecipeService:
    def __init__(
        self,
        db: Session,
        recipes: Optional[RecipeRepository] = None,
        categories: Optional[CategoryRepository] = None,
        ingredients: Optional[IngredientRepository] = None,
    ):
        self.db = db
        self.recipes = recipes or RecipeRepository(db)
        self.categories = categories or CategoryRepository(db)
        self.ingredients = ingredients or IngredientRepository(db)

    # --- Reads ---

    def list(self, filters: Optional[RecipeFilter] = None) -> list[Recipe]:
        filters = filters or RecipeFilter()
        category_id = filters.category_id

        if filters.category_name:
            category = self.categories.find_by_name(filters.category_name)
            if category is None:
                return []
            category_id = category.id

        items = self.recipes.list(category_id=category_id)

        if filters.search and filters.search.strip():
            query = filters.search.strip().lower()
            names = {ing.id: ing.name.lower() for ing in self.ingredients.list()}
            items = [r for r in items if _matches(r, query, names)]

        if filters.status is None:
            # Public default
            items = [r for r in items if r.status == RecipeStatus.PUBLISHED]
        elif filters.status != STATUS_ALL:
            items = [r for r in items if r.status == filters.status]

        return items

    def get(self, recipe_id: str) -> Recipe:
        recipe = self.recipes.find_by_id(recipe_id)
        if recipe is None:
            raise NotFoundError("recipe not found", recipe_id=recipe_id)
        return recipe

    # --- Writes ---

    def create(self, data: dict[str, Any]) -> Recipe:
        title = _clean_title(data.get("title"))
        category_id = str(data.get("category_id") or "")
        self._ensure_category(category_id)
        servings = _clean_servings(data.get("servings"))

        # Name locks are released only after the commit below
        with ExitStack() as held, atomic(self.db):
            ingredients = resolve_ingredients(self.ingredients, data.get("ingredients"), held)
            recipe = self.recipes.create(
                title=title,
                description=data.get("description"),
                ingredients=ingredients,
                steps=_clean_steps(data.get("steps")),
                servings=servings,
                category_id=category_id,
            )
        logger.info("Recipe created: %s (%s)", recipe.title, recipe.id)
        return recipe

    def update(self, recipe_id: str, data: dict[str, Any]) -> Recipe:
        """Apply the fields present in ``data``; absent keys are left alone."""
        with recipe_locks.hold(recipe_id), ExitStack() as held, atomic(self.db):
            recipe = self._get_for_update(recipe_id)
            lifecycle.ensure_editable(recipe)

            changes: dict[str, Any] = {}
            if data.get("category_id"):
                self._ensure_category(data["category_id"])
                changes["category_id"] = data["category_id"]
            if "title" in data and data["title"] is not None:
                changes["title"] = _clean_title(data["title"])
            if "description" in data:
                changes["description"] = data["description"]
            if "steps" in data and data["steps"] is not None:
                changes["steps"] = _clean_steps(data["steps"])
            if "servings" in data and data["servings"] is not None:
                changes["servings"] = _clean_servings(data["servings"])
            if "ingredients" in data and data["ingredients"] is not None:
                changes["ingredients"] = resolve_ingredients(
                    self.ingredients, data["ingredients"], held
                )

            self.recipes.update(recipe, changes)
        logger.info("Recipe updated: %s fields=%s", recipe_id, sorted(changes))
        return recipe

    def delete(self, recipe_id: str) -> None:
        with recipe_locks.hold(recipe_id), atomic(self.db):
            recipe = self._get_for_update(recipe_id)
            lifecycle.ensure_deletable(recipe)
            self.recipes.delete(recipe)
        logger.info("Recipe deleted: %s", recipe_id)

    def publish(self, recipe_id: str) -> Recipe:
        return self._transition(recipe_id, lifecycle.publish_target)

    def archive(self, recipe_id: str) -> Recipe:
        return self._transition(recipe_id, lifecycle.archive_target)

    # --- Projections ---

    def scale(self, recipe_id: str, servings: float) -> RecipeOut:
        """Recipe scaled to ``servings`` portions. Never persisted."""
        if not (math.isfinite(servings) and servings > 0):
            raise ValidationError("servings must be greater than 0")
        return scale_recipe(self.get(recipe_id), servings)

    def generate_shopping_list(self, recipe_ids: list[str]) -> list[ShoppingListItem]:
        if not isinstance(recipe_ids, (list, tuple)) or len(recipe_ids) == 0:
            raise ValidationError("recipe_ids must be a non-empty list")

        recipes = [self.recipes.find_by_id(rid) for rid in recipe_ids]
        missing = [rid for rid, recipe in zip(recipe_ids, recipes) if recipe is None]
        if missing:
            raise NotFoundError(
                f"recipe not found: {', '.join(missing)}", missing_ids=missing
            )

        return build_shopping_list(recipes, lambda iid: self.ingredients.get(iid).name)

    # --- Helpers ---

    def _get_for_update(self, recipe_id: str) -> Recipe:
        recipe = self.recipes.find_by_id(recipe_id, for_update=True)
        if recipe is None:
            raise NotFoundError("recipe not found", recipe_id=recipe_id)
        return recipe

    def _ensure_category(self, category_id: str) -> None:
        if not category_id or self.categories.find_by_id(category_id) is None:
            raise NotFoundError("category does not exist", category_id=category_id)

    def _transition(self, recipe_id: str, target_for) -> Recipe:
        with recipe_locks.hold(recipe_id), atomic(self.db):
            recipe = self._get_for_update(recipe_id)
            target = target_for(recipe)
            if target is not None:
                previous = recipe.status
                self.recipes.update(recipe, {"status": target.value})
                logger.info("Recipe %s: %s -> %s", recipe_id, previous, target.value)
        return recipe


def _matches(recipe: Recipe, query: str, names: dict[str, str]) -> bool:
    if query in recipe.title.lower():
        return True
    if recipe.description and query in recipe.description.lower():
        return True
    return any(query in names.get(line.ingredient_id, "") for line in recipe.ingredients)
