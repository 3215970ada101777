from .base import Base
from .cart_item import CartItem
from .category import Category
from .enums import UserRole
from .product import Product
from .user import User

__all__ = [
    "Base",
    "CartItem",
    "Category",
    "Product",
    "User",
    "UserRole",
]
