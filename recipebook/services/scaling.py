"""Portion scaling. Pure functions, nothing here writes to the database."""

from ..exceptions import ValidationError
from ..models import Recipe
from ..schemas import RecipeIngredientOut, RecipeOut


def round_quantity(value: float) -> float:
    """Round to two decimal places (adding 0.0 turns -0.0 into 0.0)."""
    return round(value, 2) + 0.0


def scale_recipe(recipe: Recipe, servings: float) -> RecipeOut:
    """Return a copy of ``recipe`` for ``servings`` portions.

    Every quantity is multiplied by ``servings / recipe.servings`` and
    rounded; id, status and created_at are kept. The ORM object itself is
    left untouched so no change can be flushed back.
    """
    if not (servings > 0):
        raise ValidationError("servings must be greater than 0")

    factor = servings / recipe.servings
    original = RecipeOut.model_validate(recipe)
    scaled_ingredients = [
        RecipeIngredientOut(
            ingredient_id=line.ingredient_id,
            quantity=round_quantity(line.quantity * factor),
            unit=line.unit,
        )
        for line in original.ingredients
    ]
    return original.model_copy(
        update={"servings": servings, "ingredients": scaled_ingredients}
    )
