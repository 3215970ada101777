from __future__ import annotations

from decimal import Decimal
from typing import Optional

from sqlalchemy import DECIMAL, Boolean, CheckConstraint, ForeignKey, Integer, String, false
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base


class Product(Base):
    __tablename__ = "products"
    __table_args__ = (CheckConstraint("stock >= 0", name="ck_products_stock_non_negative"),)

    product_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(200))
    price: Mapped[Decimal] = mapped_column(DECIMAL(10, 2))
    category_id: Mapped[int] = mapped_column(ForeignKey("categories.category_id"), index=True)
    description: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    subcategory: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    stock: Mapped[int] = mapped_column(Integer, default=0)
    featured: Mapped[bool] = mapped_column(Boolean, default=False, server_default=false())
    image_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    category: Mapped["Category"] = relationship("Category", back_populates="products")
