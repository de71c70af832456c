from datetime import datetime
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import event

from app.config import Settings
from app.database import init_db
from app.main import create_app
from app.models.order import Order
from app.models.product import Product
from app.models.warehouse import Warehouse

T0 = datetime(2024, 1, 1, 12, 0, 0)


class FakeProcedure:
    """Stands in for AddProductToWarehouse as a SQLite user function."""

    def __init__(self):
        self.result = 1
        self.error = None
        self.calls = []

    def __call__(self, id_product, id_warehouse, amount, created_at):
        self.calls.append((id_product, id_warehouse, amount, created_at))
        if self.error:
            raise self.error
        return self.result


@pytest.fixture()
def procedure():
    return FakeProcedure()


@pytest.fixture()
def app(tmp_path, procedure):
    settings = Settings(
        DATABASE_URL=f"sqlite:///{(tmp_path / 'test.db').as_posix()}",
        ENVIRONMENT="test",
        LOG_LEVEL="DEBUG",
    )
    application = create_app(settings)
    engine = application.state.engine

    @event.listens_for(engine, "connect")
    def _register_procedure(dbapi_connection, _connection_record):
        dbapi_connection.create_function("AddProductToWarehouse", 4, procedure)

    init_db(engine)
    yield application
    engine.dispose()


@pytest.fixture()
def db(app):
    session = app.state.session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def scenario(db):
    """Product 1 at 10.00, warehouse 1, open order 7 for 5 units created at T0."""
    db.add(Product(id=1, name="Widget", description="", price=Decimal("10.00")))
    db.add(Warehouse(id=1, name="Main", address="Dock 1"))
    db.add(Order(id=7, product_id=1, amount=5, created_at=T0, fulfilled_at=None))
    db.commit()
    return {"product_id": 1, "warehouse_id": 1, "order_id": 7}


def request_body(product_id=1, warehouse_id=1, amount=5, created_at=T0):
    return {
        "IdProduct": product_id,
        "IdWarehouse": warehouse_id,
        "Amount": amount,
        "CreatedAt": created_at.isoformat(),
    }
