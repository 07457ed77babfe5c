"""
Pydantic schemas for request/response validation
"""
from pydantic import BaseModel, Field, ConfigDict
from typing import List, Optional
from datetime import datetime
from decimal import Decimal

from order_fulfillment.models.order import OrderStatus


class OrderItemCreate(BaseModel):
    """Order line as submitted by the caller; price is assigned at fulfillment"""
    product_id: int = Field(..., gt=0, description="Product ID")
    quantity: int = Field(..., gt=0, description="Quantity to order")


class OrderCreate(BaseModel):
    """Schema for creating a new order"""
    customer_id: int = Field(..., gt=0, description="Customer ID")
    items: List[OrderItemCreate] = Field(..., min_length=1, description="Order lines, in fulfillment order")


class OrderItemResponse(BaseModel):
    """Schema for order item response"""
    id: int
    product_id: int
    quantity: int
    unit_price: Decimal
    line_total: Decimal
    
    model_config = ConfigDict(from_attributes=True)


class OrderResponse(BaseModel):
    """Schema for order response"""
    id: int
    customer_id: int
    status: OrderStatus = Field(..., description="0=Pending, 1=Processing, 2=Completed, 3=Cancelled")
    created_at: datetime
    items: List[OrderItemResponse]
    total_price: Decimal
    
    model_config = ConfigDict(from_attributes=True)


class OrderListResponse(BaseModel):
    """Schema for list of orders response"""
    orders: list[OrderResponse]
    total: int


class ReprocessResponse(BaseModel):
    """Result of flagging pending orders for reprocessing"""
    reprocessed_count: int


class ReconcileResponse(BaseModel):
    """Result of an on-demand reconciliation request"""
    started: bool
    pending_before: int
    message: Optional[str] = None
