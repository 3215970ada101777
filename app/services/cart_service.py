import logging

from sqlalchemy.dialects.mysql import insert as mysql_insert
from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.orm import Session

from app.models import CartItem, Product
from app.schemas import CartItemRead, ProductRead, ShoppingCartRead

from . import exceptions
from .exceptions import translate_db_errors

logger = logging.getLogger(__name__)


class CartService:
    """Per-user shopping cart persisted in the ``shopping_cart`` table.

    Every operation is keyed by the authenticated user's id. A line only exists
    while its quantity is positive.
    """

    def __init__(self, db: Session):
        self.db = db

    def get_by_user(self, user_id: int) -> ShoppingCartRead:
        with translate_db_errors(self.db, "load cart"):
            rows = (
                self.db.query(Product, CartItem.quantity)
                .join(CartItem, CartItem.product_id == Product.product_id)
                .filter(CartItem.user_id == user_id)
                .order_by(CartItem.product_id)
                .all()
            )
        items = [
            CartItemRead(
                product=ProductRead.from_orm(product),
                quantity=quantity,
                line_total=product.price * quantity,
            )
            for product, quantity in rows
        ]
        return ShoppingCartRead.from_items(items)

    def add_item(self, user_id: int, product_id: int) -> None:
        """Insert the product with quantity 1, or add 1 to the existing line.

        The increment happens inside a single upsert statement so concurrent
        calls for the same line all take effect.
        """

        with translate_db_errors(self.db, "add cart item"):
            exists = self.db.query(Product.product_id).filter(Product.product_id == product_id).first()
            if not exists:
                raise exceptions.NotFoundError("Product not found")
            self.db.execute(self._increment_statement(user_id, product_id))
            self.db.commit()
        logger.info("User %s added product %s to cart", user_id, product_id)

    def update_item(self, user_id: int, product_id: int, quantity: int) -> None:
        """Set the quantity of an existing line; a quantity of zero or less removes it.

        A missing line is left missing.
        """

        with translate_db_errors(self.db, "update cart item"):
            query = self.db.query(CartItem).filter(
                CartItem.user_id == user_id, CartItem.product_id == product_id
            )
            if quantity <= 0:
                affected = query.delete(synchronize_session=False)
            else:
                affected = query.update({CartItem.quantity: quantity}, synchronize_session=False)
            self.db.commit()
        if not affected:
            logger.info("User %s has no cart line for product %s; nothing updated", user_id, product_id)

    def clear_cart(self, user_id: int) -> None:
        with translate_db_errors(self.db, "clear cart"):
            removed = (
                self.db.query(CartItem)
                .filter(CartItem.user_id == user_id)
                .delete(synchronize_session=False)
            )
            self.db.commit()
        logger.info("Cleared %s cart line(s) for user %s", removed, user_id)

    def _increment_statement(self, user_id: int, product_id: int):
        table = CartItem.__table__
        values = {"user_id": user_id, "product_id": product_id, "quantity": 1}
        dialect = self.db.get_bind().dialect.name

        if dialect == "postgresql":
            stmt = postgresql_insert(table).values(**values)
            return stmt.on_conflict_do_update(
                index_elements=[table.c.user_id, table.c.product_id],
                set_={"quantity": table.c.quantity + 1},
            )
        if dialect == "sqlite":
            stmt = sqlite_insert(table).values(**values)
            return stmt.on_conflict_do_update(
                index_elements=[table.c.user_id, table.c.product_id],
                set_={"quantity": table.c.quantity + 1},
            )
        if dialect in ("mysql", "mariadb"):
            stmt = mysql_insert(table).values(**values)
            return stmt.on_duplicate_key_update(quantity=table.c.quantity + 1)
        raise exceptions.InfrastructureError(f"Cart upsert is not supported on dialect {dialect!r}")
