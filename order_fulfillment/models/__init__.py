"""
SQLAlchemy models
"""
from order_fulfillment.models.customer import Customer
from order_fulfillment.models.product import Product
from order_fulfillment.models.order import Order, OrderItem, OrderStatus

__all__ = ["Customer", "Product", "Order", "OrderItem", "OrderStatus"]
