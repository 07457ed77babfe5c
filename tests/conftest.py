"""
Shared fixtures: an isolated SQLite database file per test
"""
from decimal import Decimal

import pytest

from order_fulfillment.database import Base, build_engine, build_session_factory
from order_fulfillment.models import Customer, Product
from order_fulfillment.schemas.order import OrderCreate, OrderItemCreate
from order_fulfillment.services.fulfillment_engine import OrderFulfillmentEngine
from order_fulfillment.services.order_service import OrderService


@pytest.fixture
def db_engine(tmp_path):
    engine = build_engine(f"sqlite:///{tmp_path / 'orders.db'}")
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return build_session_factory(db_engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def fulfillment_engine(session_factory):
    return OrderFulfillmentEngine(session_factory)


@pytest.fixture
def customer(db):
    customer = Customer(name="Alice", email="alice@example.com")
    db.add(customer)
    db.commit()
    return customer


@pytest.fixture
def make_product(db):
    def _make_product(stock: int, price: str = "10.00", name: str = "Widget") -> Product:
        product = Product(name=name, price=Decimal(price), stock=stock)
        db.add(product)
        db.commit()
        return product
    return _make_product


@pytest.fixture
def place_order(db, customer):
    """Create a Pending order the way the API does; items are (product_id, quantity)"""
    def _place_order(*items) -> int:
        order = OrderService(db).create_order(OrderCreate(
            customer_id=customer.id,
            items=[OrderItemCreate(product_id=pid, quantity=qty) for pid, qty in items]
        ))
        return order.id
    return _place_order


@pytest.fixture
def reload(db):
    """Fetch the current committed state of a row"""
    def _reload(model, entity_id):
        db.expire_all()
        return db.get(model, entity_id)
    return _reload
