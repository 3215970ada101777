import logging

from sqlalchemy.orm import Session

from app.models import Category, Product

from . import exceptions
from .exceptions import translate_db_errors

logger = logging.getLogger(__name__)


class CategoryService:
    def __init__(self, db: Session):
        self.db = db

    def list_all(self) -> list[Category]:
        with translate_db_errors(self.db, "list categories"):
            return self.db.query(Category).order_by(Category.id).all()

    def get_by_id(self, category_id: int) -> Category:
        with translate_db_errors(self.db, "load category"):
            category = self.db.query(Category).filter(Category.id == category_id).first()
        if not category:
            raise exceptions.NotFoundError("Category not found")
        return category

    def create(self, *, data: dict) -> Category:
        data = {key: value for key, value in data.items() if key != "id"}
        category = Category(**data)
        with translate_db_errors(self.db, "create category"):
            self.db.add(category)
            self.db.commit()
            self.db.refresh(category)
        logger.info("Category %s created (%s)", category.id, category.name)
        return category

    def update(self, *, category_id: int, data: dict) -> None:
        category = self.get_by_id(category_id)
        with translate_db_errors(self.db, "update category"):
            category.name = data["name"]
            category.description = data.get("description")
            self.db.add(category)
            self.db.commit()
        logger.info("Category %s updated", category_id)

    def delete(self, *, category_id: int) -> None:
        category = self.get_by_id(category_id)
        with translate_db_errors(self.db, "delete category"):
            self.db.delete(category)
            self.db.commit()
        logger.info("Category %s deleted", category_id)

    def list_products_of(self, category_id: int) -> list[Product]:
        """Products of an existing category; raises ``NotFoundError`` for an unknown one."""

        self.get_by_id(category_id)
        with translate_db_errors(self.db, "list category products"):
            return (
                self.db.query(Product)
                .filter(Product.category_id == category_id)
                .order_by(Product.product_id)
                .all()
            )
