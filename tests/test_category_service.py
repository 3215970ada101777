from decimal import Decimal

import pytest
from sqlalchemy.orm import Session

from app.core.db import create_db_engine
from app.models import Base, Product
from app.services import CategoryService
from app.services.exceptions import ConflictError, InfrastructureError, NotFoundError


def test_create_get_update_delete_round_trip(db_session):
    service = CategoryService(db_session)

    created = service.create(data={"name": "Books", "description": "paper"})
    assert created.id is not None

    fetched = service.get_by_id(created.id)
    assert (fetched.id, fetched.name, fetched.description) == (created.id, "Books", "paper")

    service.update(category_id=created.id, data={"name": "E-books", "description": None})
    db_session.expire_all()
    updated = service.get_by_id(created.id)
    assert (updated.name, updated.description) == ("E-books", None)

    service.delete(category_id=created.id)
    with pytest.raises(NotFoundError):
        service.get_by_id(created.id)


def test_create_ignores_client_supplied_id(db_session):
    created = CategoryService(db_session).create(data={"id": 900, "name": "Toys", "description": None})
    assert created.id != 900


def test_duplicate_name_raises_conflict(db_session, seeded_catalog):
    service = CategoryService(db_session)
    with pytest.raises(ConflictError):
        service.create(data={"name": "Electronics", "description": "dup"})
    assert [category.name for category in service.list_all()] == ["Electronics", "Fitness"]


@pytest.mark.parametrize("operation", ["update", "delete"])
def test_missing_category_raises_not_found(db_session, operation):
    service = CategoryService(db_session)
    with pytest.raises(NotFoundError):
        if operation == "update":
            service.update(category_id=404, data={"name": "x", "description": None})
        else:
            service.delete(category_id=404)


def test_list_products_distinguishes_unknown_from_empty(db_session, seeded_catalog):
    service = CategoryService(db_session)

    products = service.list_products_of(seeded_catalog["electronics"])
    assert [product.product_id for product in products] == [42, 99]
    assert all(isinstance(product.price, Decimal) for product in products)

    assert service.list_products_of(seeded_catalog["fitness"]) == []

    with pytest.raises(NotFoundError):
        service.list_products_of(999)


def test_products_only_from_requested_category(db_session, seeded_catalog):
    db_session.add(
        Product(name="Yoga Mat", price=Decimal("25.00"), category_id=seeded_catalog["fitness"], stock=3)
    )
    db_session.commit()

    names = [product.name for product in CategoryService(db_session).list_products_of(seeded_catalog["fitness"])]
    assert names == ["Yoga Mat"]


def test_exhausted_pool_surfaces_infrastructure_error(tmp_path):
    engine = create_db_engine(
        "sqlite:///" + str(tmp_path / "pool.db"),
        pool_size=1,
        max_overflow=0,
        pool_timeout=0.1,
    )
    Base.metadata.create_all(bind=engine)
    held = engine.connect()
    session = Session(bind=engine)
    try:
        with pytest.raises(InfrastructureError):
            CategoryService(session).list_all()
    finally:
        session.close()
        held.close()
        engine.dispose()
