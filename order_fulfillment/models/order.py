"""
SQLAlchemy Order and OrderItem models
"""
import enum
from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import Column, Integer, Numeric, DateTime, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.types import TypeDecorator

from order_fulfillment.database import Base


class OrderStatus(enum.IntEnum):
    """
    Order lifecycle states
    
    The integer values are stored as-is and are part of the external
    contract: 0=Pending, 1=Processing, 2=Completed, 3=Cancelled.
    """
    PENDING = 0
    PROCESSING = 1
    COMPLETED = 2
    CANCELLED = 3


class OrderStatusType(TypeDecorator):
    """Persists OrderStatus as its ordinal integer"""
    
    impl = Integer
    cache_ok = True
    
    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return int(value)
    
    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return OrderStatus(value)


class Order(Base):
    """Order database model"""
    
    __tablename__ = "orders"
    
    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=False, index=True)
    status = Column(OrderStatusType(), nullable=False, default=OrderStatus.PENDING, index=True)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False)
    version_id = Column(Integer, nullable=False)
    
    customer = relationship("Customer", back_populates="orders")
    items = relationship(
        "OrderItem",
        back_populates="order",
        order_by="OrderItem.line_no",
        cascade="all, delete-orphan"
    )
    
    # Constraints
    __table_args__ = (
        CheckConstraint("status IN (0, 1, 2, 3)", name='check_status_valid'),
    )
    
    __mapper_args__ = {"version_id_col": version_id}

    @property
    def total_price(self) -> Decimal:
        """Sum of fulfilled lines; unfulfilled lines contribute nothing"""
        return sum((item.line_total for item in self.items), Decimal("0.00"))

    def __repr__(self):
        return f"<Order(id={self.id}, customer_id={self.customer_id}, status={self.status!r}, items={len(self.items)})>"


class OrderItem(Base):
    """Order line; unit_price stays 0 until the item is fulfilled"""
    
    __tablename__ = "order_items"
    
    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    order_id = Column(Integer, ForeignKey("orders.id"), nullable=False, index=True)
    line_no = Column(Integer, nullable=False)
    # Not a foreign key: products have their own lifetime and may disappear
    product_id = Column(Integer, nullable=False, index=True)
    quantity = Column(Integer, nullable=False)
    unit_price = Column(Numeric(10, 2, asdecimal=True), nullable=False, default=Decimal("0.00"))
    
    order = relationship("Order", back_populates="items")
    
    # Constraints
    __table_args__ = (
        CheckConstraint('quantity > 0', name='check_quantity_positive'),
        CheckConstraint('unit_price >= 0', name='check_unit_price_non_negative'),
    )
    
    @property
    def line_total(self) -> Decimal:
        return (self.unit_price or Decimal("0.00")) * self.quantity
    
    def __repr__(self):
        return f"<OrderItem(id={self.id}, order_id={self.order_id}, product_id={self.product_id}, quantity={self.quantity}, unit_price={self.unit_price})>"
