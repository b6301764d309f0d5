"""Resolve free-text recipe ingredient lines against the ingredient catalog.

Used by both recipe creation and recipe updates that replace the
ingredient list, so the two paths cannot drift apart.
"""

import logging
import math
from contextlib import ExitStack
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Optional

from ..exceptions import ValidationError
from ..infra.locks import ingredient_locks
from ..models import name_key
from ..repositories import IngredientRepository

logger = logging.getLogger("recipebook.catalog")


@dataclass(frozen=True)
class IngredientLine:
    """A raw ingredient line after trimming and number coercion."""
    name: str
    quantity: float
    unit: str


def _field(entry: Any, key: str) -> Any:
    if isinstance(entry, Mapping):
        return entry.get(key)
    return getattr(entry, key, None)


def _coerce_quantity(value: Any) -> float:
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        quantity = float(value)
    except (TypeError, ValueError):
        return math.nan
    return quantity


def parse_ingredient_lines(raw: Iterable[Any] | None) -> list[IngredientLine]:
    """Trim and coerce raw entries, then validate them in input order.

    Fails on the first violation; nothing touches the catalog until every
    line is valid.
    """
    lines = [
        IngredientLine(
            name=str(_field(entry, "name") or "").strip(),
            quantity=_coerce_quantity(_field(entry, "quantity")),
            unit=str(_field(entry, "unit") or "").strip(),
        )
        for entry in (raw or [])
    ]

    if not lines:
        raise ValidationError("ingredients are required")

    for line in lines:
        if not line.name:
            raise ValidationError("ingredient name required")
        # NaN and inf never pass
        if not (math.isfinite(line.quantity) and line.quantity > 0):
            raise ValidationError("quantity must be > 0", ingredient=line.name)
        if not line.unit:
            raise ValidationError("unit required", ingredient=line.name)

    return lines


def resolve_ingredients(
    catalog: IngredientRepository,
    raw: Iterable[Any] | None,
    held: Optional[ExitStack] = None,
) -> list[dict]:
    """Map raw lines to ``{ingredient_id, quantity, unit}``.

    Catalog entries are looked up by trimmed, case-insensitive name and
    created on first use, in input order.

    A new entry only becomes visible to other sessions at commit, so the
    name locks must outlive the caller's transaction: pass the ExitStack
    that is unwound after the commit as ``held``. Without it the locks are
    released on return, which is only safe when the caller commits alone.
    """
    lines = parse_ingredient_lines(raw)

    with ExitStack() as local:
        stack = held if held is not None else local
        # Sorted, so two resolvers never wait on each other in a cycle
        for key in sorted({name_key(line.name) for line in lines}):
            stack.enter_context(ingredient_locks.hold(key))

        resolved = []
        for line in lines:
            ingredient = catalog.find_by_name(line.name)
            if ingredient is None:
                ingredient = catalog.create(line.name)
            resolved.append(
                {"ingredient_id": ingredient.id, "quantity": line.quantity, "unit": line.unit}
            )
    return resolved
