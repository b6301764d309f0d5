"""Consolidated shopping list across several recipes.

Lines are merged per (ingredient_id, unit). Different units of the same
ingredient stay separate items: 200 g flour and 2 cup flour is two lines,
there is no unit conversion.
"""

from typing import Callable, Iterable

from ..models import Recipe
from ..schemas import ShoppingListItem
from .scaling import round_quantity


def aggregate_ingredients(recipes: Iterable[Recipe]) -> dict[tuple[str, str], float]:
    """Sum quantities per (ingredient_id, unit), first-seen order kept."""
    totals: dict[tuple[str, str], float] = {}
    for recipe in recipes:
        for line in recipe.ingredients:
            key = (line.ingredient_id, line.unit or "")
            totals[key] = totals.get(key, 0.0) + float(line.quantity or 0)
    return totals


def build_shopping_list(
    recipes: Iterable[Recipe],
    ingredient_name: Callable[[str], str],
) -> list[ShoppingListItem]:
    """Aggregate, name, round and sort the lines of ``recipes``.

    ``ingredient_name`` maps an ingredient id to its display name.
    """
    items = [
        ShoppingListItem(
            ingredient_id=ingredient_id,
            name=ingredient_name(ingredient_id),
            unit=unit,
            quantity=round_quantity(total),
        )
        for (ingredient_id, unit), total in aggregate_ingredients(recipes).items()
    ]
    # Plain code-point order on the display name
    items.sort(key=lambda item: item.name)
    return items
