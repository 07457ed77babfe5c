from decimal import Decimal

from sqlalchemy import text

from order_fulfillment.models import Order, OrderItem, OrderStatus, Product
from order_fulfillment.repositories import CustomerRepository, OrderRepository, ProductRepository


def test_generic_crud_round_trip(db):
    repository = ProductRepository(db)

    product = repository.add(Product(name="Widget", price=Decimal("9.99"), stock=100))
    assert repository.get(product.id).name == "Widget"
    assert repository.count() == 1

    product.stock = 90
    repository.update(product)
    assert repository.get(product.id).stock == 90

    assert [p.id for p in repository.list_all()] == [product.id]
    assert repository.delete(product.id) is True
    assert repository.get(product.id) is None
    assert repository.delete(product.id) is False


def test_customer_exists(db, customer):
    repository = CustomerRepository(db)

    assert repository.exists(customer.id)
    assert not repository.exists(customer.id + 100)


def test_pending_ids_ignore_other_statuses(db, make_product, place_order):
    product = make_product(stock=5)
    first = place_order((product.id, 1))
    second = place_order((product.id, 1))
    third = place_order((product.id, 1))

    repository = OrderRepository(db)
    order = repository.get(second)
    order.status = OrderStatus.CANCELLED
    db.commit()

    assert repository.get_pending_ids() == [first, third]
    assert repository.count_by_status(OrderStatus.PENDING) == 2
    assert [o.id for o in repository.get_by_status(OrderStatus.CANCELLED)] == [second]


def test_status_is_stored_as_its_ordinal(db, make_product, place_order):
    product = make_product(stock=5)
    order_id = place_order((product.id, 1))

    raw_status = db.execute(text("SELECT status FROM orders WHERE id = :id"), {"id": order_id}).scalar_one()
    assert raw_status == 0
    assert type(raw_status) is int
    assert [int(s) for s in OrderStatus] == [0, 1, 2, 3]


def test_deleting_an_order_removes_its_items(db, make_product, place_order):
    product = make_product(stock=5)
    order_id = place_order((product.id, 1), (product.id, 2))

    assert OrderRepository(db).delete(order_id) is True
    db.expire_all()
    assert db.query(Order).count() == 0
    assert db.execute(OrderItem.__table__.select()).all() == []


def test_deleting_a_product_leaves_order_items_dangling(db, make_product, place_order):
    product = make_product(stock=5)
    order_id = place_order((product.id, 1))

    assert ProductRepository(db).delete(product.id) is True

    order = OrderRepository(db).get(order_id)
    assert order.items[0].product_id == product.id
    assert ProductRepository(db).get_for_update(product.id) is None


def test_mark_pending_as_processing_ignores_stale_session_copies(db, session_factory, make_product, place_order, reload):
    product = make_product(stock=5)
    order_id = place_order((product.id, 1))

    # Another writer bumps the row's version while `db` still holds version 1
    with session_factory() as other:
        order = other.get(Order, order_id)
        order.status = OrderStatus.PROCESSING
        other.commit()
        order.status = OrderStatus.PENDING
        other.commit()

    assert OrderRepository(db).mark_pending_as_processing() == 1

    order = reload(Order, order_id)
    assert order.status == OrderStatus.PROCESSING
    assert order.version_id == 4
