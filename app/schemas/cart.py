from decimal import Decimal

from pydantic import BaseModel, Field

from .catalog import ProductRead


class CartItemRead(BaseModel):
    product: ProductRead
    quantity: int = Field(..., ge=1)
    line_total: Decimal

    class Config:
        json_encoders = {Decimal: str}


class ShoppingCartRead(BaseModel):
    items: dict[int, CartItemRead] = Field(default_factory=dict)
    total: Decimal = Decimal("0.00")

    class Config:
        json_encoders = {Decimal: str}

    @classmethod
    def from_items(cls, items: list[CartItemRead]) -> "ShoppingCartRead":
        total = sum((item.line_total for item in items), Decimal("0.00"))
        return cls(items={item.product.product_id: item for item in items}, total=total)


class CartItemUpdate(BaseModel):
    quantity: int
