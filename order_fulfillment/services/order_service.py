"""
Order Service - Business Logic Layer
"""
import logging
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from sqlalchemy.orm import Session

from order_fulfillment.models.order import Order, OrderItem, OrderStatus
from order_fulfillment.repositories.customer_repository import CustomerRepository
from order_fulfillment.repositories.order_repository import OrderRepository
from order_fulfillment.schemas.order import OrderCreate, OrderResponse, OrderListResponse

logger = logging.getLogger(__name__)


class CustomerNotFoundError(Exception):
    """Order placed for a customer that does not exist"""
    pass


class OrderService:
    """Service layer for order business logic"""

    def __init__(self, db: Session):
        self.repository = OrderRepository(db)
        self.customers = CustomerRepository(db)

    def get_all_orders(self, skip: int = 0, limit: int = 100) -> OrderListResponse:
        """Get all orders with pagination"""
        orders = self.repository.list_all(skip=skip, limit=limit)
        total = self.repository.count()

        return OrderListResponse(
            orders=[OrderResponse.model_validate(o) for o in orders],
            total=total
        )

    def get_order_by_id(self, order_id: int) -> Optional[OrderResponse]:
        """Get order by ID"""
        order = self.repository.get(order_id)
        if not order:
            return None
        return OrderResponse.model_validate(order)

    def get_orders_by_customer(self, customer_id: int) -> List[OrderResponse]:
        """Get orders placed by a customer"""
        orders = self.repository.get_by_customer(customer_id)
        return [OrderResponse.model_validate(o) for o in orders]

    def get_orders_by_date_range(
        self,
        start: datetime,
        end: datetime,
        skip: int = 0,
        limit: int = 100
    ) -> List[OrderResponse]:
        """Get orders created within an inclusive date range"""
        if start > end:
            raise ValueError("start_date must not be after end_date")
        orders = self.repository.get_by_date_range(start, end, skip=skip, limit=limit)
        return [OrderResponse.model_validate(o) for o in orders]

    def create_order(self, order_data: OrderCreate) -> OrderResponse:
        """
        Create new order in Pending state

        Stock is not checked here. The fulfillment engine decides the
        outcome on its next pass, so callers poll the order to learn it.

        Args:
            order_data: Order creation data

        Returns:
            Created order

        Raises:
            CustomerNotFoundError: If the customer does not exist
        """
        if not self.customers.exists(order_data.customer_id):
            raise CustomerNotFoundError(f"Customer {order_data.customer_id} not found")

        order = Order(
            customer_id=order_data.customer_id,
            status=OrderStatus.PENDING,
            items=[
                OrderItem(
                    line_no=line_no,
                    product_id=item.product_id,
                    quantity=item.quantity,
                    unit_price=Decimal("0.00")
                )
                for line_no, item in enumerate(order_data.items, start=1)
            ]
        )
        order = self.repository.add(order)

        logger.info(
            "Order %s created for customer %s with %d item(s)",
            order.id, order.customer_id, len(order.items)
        )
        return OrderResponse.model_validate(order)

    def reprocess_pending_orders(self) -> int:
        """
        Mark every Pending order as Processing

        This only flips the status flag. It does not run the stock
        checks, and orders moved out of Pending here are no longer
        picked up by reconciliation.

        Returns:
            Number of orders marked
        """
        count = self.repository.mark_pending_as_processing()
        logger.info("Marked %d pending order(s) as processing", count)
        return count

    def count_pending(self) -> int:
        return self.repository.count_by_status(OrderStatus.PENDING)
