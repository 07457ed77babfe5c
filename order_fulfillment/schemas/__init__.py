"""
Schemas package
"""
from order_fulfillment.schemas.order import (
    OrderItemCreate,
    OrderCreate,
    OrderItemResponse,
    OrderResponse,
    OrderListResponse,
    ReprocessResponse,
    ReconcileResponse
)

__all__ = [
    "OrderItemCreate",
    "OrderCreate",
    "OrderItemResponse",
    "OrderResponse",
    "OrderListResponse",
    "ReprocessResponse",
    "ReconcileResponse"
]
