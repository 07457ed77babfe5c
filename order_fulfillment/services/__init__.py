"""
Services package
"""
from order_fulfillment.services.fulfillment_engine import OrderFulfillmentEngine, ReconciliationError
from order_fulfillment.services.order_service import OrderService, CustomerNotFoundError

__all__ = ["OrderFulfillmentEngine", "ReconciliationError", "OrderService", "CustomerNotFoundError"]
