"""
Order Repository - Data Access Layer
"""
from datetime import datetime
from typing import List, Optional

from sqlalchemy import desc
from sqlalchemy.orm import selectinload

from order_fulfillment.models.order import Order, OrderStatus
from order_fulfillment.repositories.base import Repository


class OrderRepository(Repository[Order]):
    """Repository for Order CRUD operations"""
    
    model = Order
    
    def get(self, order_id: int) -> Optional[Order]:
        """Get order by ID with its items"""
        return self.db.query(Order).options(
            selectinload(Order.items)
        ).filter(Order.id == order_id).first()
    
    def list_all(self, skip: int = 0, limit: Optional[int] = None) -> List[Order]:
        """Get all orders, newest first"""
        query = self.db.query(Order).options(
            selectinload(Order.items)
        ).order_by(desc(Order.created_at), desc(Order.id)).offset(skip)
        if limit is not None:
            query = query.limit(limit)
        return query.all()
    
    def get_for_update(self, order_id: int) -> Optional[Order]:
        """Load an order and its items for reconciliation, refreshing any cached copy"""
        return (
            self.db.query(Order)
            .options(selectinload(Order.items))
            .filter(Order.id == order_id)
            .with_for_update(of=Order)
            .populate_existing()
            .first()
        )
    
    def get_pending_ids(self) -> List[int]:
        """
        IDs of every Pending order, oldest first
        
        Ties on created_at are broken by ID so a batch always runs in
        the same order.
        """
        rows = self.db.query(Order.id).filter(
            Order.status == OrderStatus.PENDING
        ).order_by(Order.created_at, Order.id).all()
        return [row.id for row in rows]
    
    def get_by_status(self, status: OrderStatus) -> List[Order]:
        """Get orders by status"""
        return self.db.query(Order).options(
            selectinload(Order.items)
        ).filter(
            Order.status == status
        ).order_by(Order.created_at, Order.id).all()
    
    def get_by_customer(self, customer_id: int) -> List[Order]:
        """Get orders placed by a customer"""
        return self.db.query(Order).options(
            selectinload(Order.items)
        ).filter(
            Order.customer_id == customer_id
        ).order_by(desc(Order.created_at), desc(Order.id)).all()
    
    def get_by_date_range(
        self,
        start: datetime,
        end: datetime,
        skip: int = 0,
        limit: int = 100
    ) -> List[Order]:
        """Get orders created within [start, end]"""
        return self.db.query(Order).options(
            selectinload(Order.items)
        ).filter(
            Order.created_at >= start,
            Order.created_at <= end
        ).order_by(Order.created_at, Order.id).offset(skip).limit(limit).all()
    
    def mark_pending_as_processing(self) -> int:
        """
        Flip every Pending order to Processing without touching stock
        
        Single UPDATE on the current rows, so it never conflicts with
        stale copies held in the session. The version bump makes an
        in-flight reconciliation of the same order fail its commit.

        Returns:
            Number of orders updated
        """
        count = self.db.query(Order).filter(
            Order.status == OrderStatus.PENDING
        ).update(
            {
                Order.status: OrderStatus.PROCESSING,
                Order.version_id: Order.version_id + 1
            },
            synchronize_session=False
        )
        self.db.commit()
        return count
    
    def count_by_status(self, status: OrderStatus) -> int:
        """Get count of orders by status"""
        return self.db.query(Order).filter(Order.status == status).count()
