from .auth import ErrorResponse, LoginRequest, LoginResponse, RegisterRequest, UserRead
from .cart import CartItemRead, CartItemUpdate, ShoppingCartRead
from .catalog import CategoryCreate, CategoryRead, CategoryUpdate, ProductRead

__all__ = [
    "CartItemRead",
    "CartItemUpdate",
    "CategoryCreate",
    "CategoryRead",
    "CategoryUpdate",
    "ErrorResponse",
    "LoginRequest",
    "LoginResponse",
    "ProductRead",
    "RegisterRequest",
    "ShoppingCartRead",
    "UserRead",
]
