from .auth_service import AuthService
from .cart_service import CartService
from .category_service import CategoryService

__all__ = [
    "AuthService",
    "CartService",
    "CategoryService",
]
