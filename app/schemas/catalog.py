from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field, validator


class CategoryBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)

    @validator("name")
    def name_not_blank(cls, value: str) -> str:
        normalized = value.strip()
        if not normalized:
            raise ValueError("name cannot be blank")
        return normalized


class CategoryCreate(CategoryBase):
    pass


class CategoryUpdate(CategoryBase):
    """Full replacement of the mutable fields; an ``id`` in the body is ignored."""


class CategoryRead(BaseModel):
    id: int
    name: str
    description: Optional[str] = None

    class Config:
        orm_mode = True


class ProductRead(BaseModel):
    product_id: int
    name: str
    price: Decimal
    category_id: int
    description: Optional[str] = None
    subcategory: Optional[str] = None
    stock: int = Field(default=0, ge=0)
    featured: bool = False
    image_url: Optional[str] = None

    class Config:
        orm_mode = True
        json_encoders = {Decimal: str}
