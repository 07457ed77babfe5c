"""
Repositories package
"""
from order_fulfillment.repositories.base import Repository
from order_fulfillment.repositories.customer_repository import CustomerRepository
from order_fulfillment.repositories.order_repository import OrderRepository
from order_fulfillment.repositories.product_repository import ProductRepository

__all__ = ["Repository", "CustomerRepository", "OrderRepository", "ProductRepository"]
