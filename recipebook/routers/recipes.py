"""Recipes API router.

Endpoints:
- GET /recipes - List recipes (published only unless status/all given)
- POST /recipes - Create a draft recipe
- POST /recipes/shopping-list - Consolidated shopping list
- GET /recipes/{id} - Get recipe
- GET /recipes/{id}/scale?servings=N - Scaled copy, not persisted
- PUT /recipes/{id} - Update recipe
- PATCH /recipes/{id}/publish - draft -> published
- PATCH /recipes/{id}/archive - draft/published -> archived
- DELETE /recipes/{id} - Delete (not while published)
"""

import logging
from typing import Literal, Optional

from fastapi import APIRouter, Depends, Query, Request, Response, status
from slowapi import Limiter
from slowapi.util import get_remote_address

from ..deps import get_recipe_service
from ..schemas import (
    RecipeCreate,
    RecipeOut,
    RecipeUpdate,
    ShoppingListItem,
    ShoppingListRequest,
)
from ..services import RecipeFilter, RecipeService
from ..settings import settings

router = APIRouter(prefix="/recipes", tags=["recipes"])
limiter = Limiter(key_func=get_remote_address)
logger = logging.getLogger("recipebook.recipes")


@router.get("", response_model=list[RecipeOut])
def list_recipes(
    category_id: Optional[str] = Query(None, alias="categoryId"),
    category_name: Optional[str] = Query(None, alias="categoryName"),
    search: Optional[str] = Query(None),
    status_filter: Optional[Literal["draft", "published", "archived", "all"]] = Query(
        None, alias="status"
    ),
    include_all: bool = Query(False, alias="all"),
    service: RecipeService = Depends(get_recipe_service),
):
    """List recipes. Without ``status`` or ``all=true`` only published ones."""
    return service.list(
        RecipeFilter(
            category_id=category_id,
            category_name=category_name,
            search=search,
            status="all" if include_all else status_filter,
        )
    )


@router.post("", response_model=RecipeOut, status_code=status.HTTP_201_CREATED)
def create_recipe(
    payload: RecipeCreate,
    service: RecipeService = Depends(get_recipe_service),
):
    """Create a recipe in draft state, resolving ingredient names."""
    return service.create(payload.model_dump())


@router.post("/shopping-list", response_model=list[ShoppingListItem])
@limiter.limit(settings.shopping_list_rate_limit)
def shopping_list(
    request: Request,  # Required for rate limiter
    payload: ShoppingListRequest,
    service: RecipeService = Depends(get_recipe_service),
):
    """Merge the ingredients of several recipes into one list."""
    return service.generate_shopping_list(payload.recipe_ids)


@router.get("/{recipe_id}/scale", response_model=RecipeOut)
def scale_recipe(
    recipe_id: str,
    servings: float = Query(..., gt=0),
    service: RecipeService = Depends(get_recipe_service),
):
    """Recipe with quantities scaled to ``servings``. Nothing is saved."""
    return service.scale(recipe_id, servings)


@router.get("/{recipe_id}", response_model=RecipeOut)
def get_recipe(
    recipe_id: str,
    service: RecipeService = Depends(get_recipe_service),
):
    return service.get(recipe_id)


@router.put("/{recipe_id}", response_model=RecipeOut)
def update_recipe(
    recipe_id: str,
    payload: RecipeUpdate,
    service: RecipeService = Depends(get_recipe_service),
):
    """Update the fields present in the body."""
    return service.update(recipe_id, payload.model_dump(exclude_unset=True))


@router.patch("/{recipe_id}/publish", response_model=RecipeOut)
def publish_recipe(
    recipe_id: str,
    service: RecipeService = Depends(get_recipe_service),
):
    return service.publish(recipe_id)


@router.patch("/{recipe_id}/archive", response_model=RecipeOut)
def archive_recipe(
    recipe_id: str,
    service: RecipeService = Depends(get_recipe_service),
):
    return service.archive(recipe_id)


@router.delete("/{recipe_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_recipe(
    recipe_id: str,
    service: RecipeService = Depends(get_recipe_service),
):
    service.delete(recipe_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
