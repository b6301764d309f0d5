from fastapi import APIRouter, Depends, Response, status

from ..deps import get_category_service
from ..schemas import CategoryCreate, CategoryOut, CategoryUpdate
from ..services import CategoryService

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("", response_model=list[CategoryOut])
def list_categories(service: CategoryService = Depends(get_category_service)):
    return service.list()


@router.post("", response_model=CategoryOut, status_code=status.HTTP_201_CREATED)
def create_category(
    payload: CategoryCreate,
    service: CategoryService = Depends(get_category_service),
):
    return service.create(payload.name)


@router.get("/{category_id}", response_model=CategoryOut)
def get_category(category_id: str, service: CategoryService = Depends(get_category_service)):
    return service.get(category_id)


@router.put("/{category_id}", response_model=CategoryOut)
def update_category(
    category_id: str,
    payload: CategoryUpdate,
    service: CategoryService = Depends(get_category_service),
):
    return service.update(category_id, payload.name)


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_category(category_id: str, service: CategoryService = Depends(get_category_service)):
    """Delete a category. Refused while recipes still use it."""
    service.delete(category_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
