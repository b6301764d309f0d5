from fastapi import APIRouter, Depends, Response, status

from ..deps import get_ingredient_service
from ..schemas import IngredientCreate, IngredientOut, IngredientUpdate
from ..services import IngredientService

router = APIRouter(prefix="/ingredients", tags=["ingredients"])


@router.get("", response_model=list[IngredientOut])
def list_ingredients(service: IngredientService = Depends(get_ingredient_service)):
    return service.list()


@router.post("", response_model=IngredientOut, status_code=status.HTTP_201_CREATED)
def create_ingredient(
    payload: IngredientCreate,
    service: IngredientService = Depends(get_ingredient_service),
):
    return service.create(payload.name)


@router.get("/{ingredient_id}", response_model=IngredientOut)
def get_ingredient(ingredient_id: str, service: IngredientService = Depends(get_ingredient_service)):
    return service.get(ingredient_id)


@router.put("/{ingredient_id}", response_model=IngredientOut)
def update_ingredient(
    ingredient_id: str,
    payload: IngredientUpdate,
    service: IngredientService = Depends(get_ingredient_service),
):
    return service.update(ingredient_id, payload.name)


@router.delete("/{ingredient_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_ingredient(ingredient_id: str, service: IngredientService = Depends(get_ingredient_service)):
    """Delete a catalog entry. Refused while any recipe references it."""
    service.delete(ingredient_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
