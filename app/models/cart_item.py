from __future__ import annotations

from sqlalchemy import CheckConstraint, ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class CartItem(Base):
    """One line of a user's shopping cart; (user_id, product_id) is unique."""

    __tablename__ = "shopping_cart"
    __table_args__ = (CheckConstraint("quantity > 0", name="ck_shopping_cart_quantity_positive"),)

    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    product_id: Mapped[int] = mapped_column(ForeignKey("products.product_id"), primary_key=True)
    quantity: Mapped[int] = mapped_column(Integer, default=1)
