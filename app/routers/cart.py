from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.dependencies import get_current_user, get_db
from app.core.errors import storefront_errors
from app.models import User
from app.schemas import CartItemUpdate, ShoppingCartRead
from app.services import CartService

router = APIRouter(prefix="/cart", tags=["cart"])


@router.get("", response_model=ShoppingCartRead)
def get_cart(current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    with storefront_errors("load cart"):
        return CartService(db).get_by_user(current_user.id)


@router.post("/products/{product_id}", response_model=ShoppingCartRead, responses={404: {}})
def add_to_cart(
    product_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    service = CartService(db)
    with storefront_errors("add to cart"):
        service.add_item(current_user.id, product_id)
        return service.get_by_user(current_user.id)


@router.put("/products/{product_id}", response_model=ShoppingCartRead)
def update_cart_item(
    product_id: int,
    payload: CartItemUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    service = CartService(db)
    with storefront_errors("update cart item"):
        service.update_item(current_user.id, product_id, payload.quantity)
        return service.get_by_user(current_user.id)


@router.delete("", response_model=ShoppingCartRead)
def clear_cart(current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    service = CartService(db)
    with storefront_errors("clear cart"):
        service.clear_cart(current_user.id)
        return service.get_by_user(current_user.id)
