"""Recipe lifecycle: draft -> published -> archived.

Permission matrix (checked before any mutation):

    operation   draft        published    archived
    update      allowed      allowed      conflict
    delete      allowed      conflict     allowed
    publish     published    no-op        conflict
    archive     archived     archived     no-op

There is no way back to draft.
"""

import logging

from ..exceptions import ConflictError
from ..models import Recipe, RecipeStatus

logger = logging.getLogger("recipebook.recipes")


def _reject(recipe: Recipe, message: str) -> ConflictError:
    logger.warning("Rejected on recipe %s (%s): %s", recipe.id, recipe.status, message)
    return ConflictError(message, recipe_id=recipe.id, status=recipe.status)


def ensure_editable(recipe: Recipe) -> None:
    if recipe.status == RecipeStatus.ARCHIVED:
        raise _reject(recipe, "archived recipes cannot be edited")


def ensure_deletable(recipe: Recipe) -> None:
    if recipe.status == RecipeStatus.PUBLISHED:
        raise _reject(recipe, "published recipes cannot be deleted; archive them instead")


def publish_target(recipe: Recipe) -> RecipeStatus | None:
    """Status ``publish`` moves the recipe to, or None when it is already there."""
    if recipe.status == RecipeStatus.PUBLISHED:
        return None
    if recipe.status == RecipeStatus.ARCHIVED:
        raise _reject(recipe, "archived recipes cannot be published")
    return RecipeStatus.PUBLISHED


def archive_target(recipe: Recipe) -> RecipeStatus | None:
    if recipe.status == RecipeStatus.ARCHIVED:
        return None
    return RecipeStatus.ARCHIVED
