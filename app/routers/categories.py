import logging

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from app.core.dependencies import get_current_admin, get_db
from app.core.errors import storefront_errors
from app.models import User
from app.schemas import CategoryCreate, CategoryRead, CategoryUpdate, ErrorResponse, ProductRead
from app.services import CategoryService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/categories", tags=["categories"])

_ADMIN_RESPONSES = {
    401: {"model": ErrorResponse},
    403: {"model": ErrorResponse},
}


@router.get("", response_model=list[CategoryRead])
def list_categories(db: Session = Depends(get_db)):
    with storefront_errors("list categories"):
        categories = CategoryService(db).list_all()
        return [CategoryRead.from_orm(category) for category in categories]


@router.get("/{category_id}", response_model=CategoryRead, responses={404: {}})
def get_category(category_id: int, db: Session = Depends(get_db)):
    with storefront_errors("load category"):
        category = CategoryService(db).get_by_id(category_id)
        return CategoryRead.from_orm(category)


@router.get("/{category_id}/products", response_model=list[ProductRead], responses={404: {}})
def list_category_products(category_id: int, db: Session = Depends(get_db)):
    with storefront_errors("list category products"):
        products = CategoryService(db).list_products_of(category_id)
        return [ProductRead.from_orm(product) for product in products]


@router.post(
    "",
    response_model=CategoryRead,
    responses={**_ADMIN_RESPONSES, 409: {"model": ErrorResponse}},
)
def create_category(
    payload: CategoryCreate,
    admin: User = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    with storefront_errors("create category"):
        category = CategoryService(db).create(data=payload.dict())
        logger.info("Admin %s created category %s", admin.id, category.id)
        return CategoryRead.from_orm(category)


@router.put(
    "/{category_id}",
    response_class=Response,
    responses={**_ADMIN_RESPONSES, 404: {}, 409: {"model": ErrorResponse}},
)
def update_category(
    category_id: int,
    payload: CategoryUpdate,
    admin: User = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    with storefront_errors("update category"):
        CategoryService(db).update(category_id=category_id, data=payload.dict())
    return Response(status_code=status.HTTP_200_OK)


@router.delete(
    "/{category_id}",
    response_class=Response,
    responses={**_ADMIN_RESPONSES, 404: {}, 409: {"model": ErrorResponse}},
)
def delete_category(
    category_id: int,
    admin: User = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    with storefront_errors("delete category"):
        CategoryService(db).delete(category_id=category_id)
    logger.info("Admin %s deleted category %s", admin.id, category_id)
    return Response(status_code=status.HTTP_200_OK)
