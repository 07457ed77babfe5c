"""
Order Fulfillment Engine - reconciles Pending orders against stock
"""
import logging
import threading
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from order_fulfillment.models.order import OrderStatus
from order_fulfillment.repositories.order_repository import OrderRepository
from order_fulfillment.repositories.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class ReconciliationError(Exception):
    """One or more orders could not be persisted during a pass"""

    def __init__(self, failed_order_ids: List[int]):
        self.failed_order_ids = list(failed_order_ids)
        super().__init__(
            f"{len(self.failed_order_ids)} order(s) failed to reconcile: {self.failed_order_ids}"
        )


class OrderFulfillmentEngine:
    """
    Converts Pending orders into Completed or Cancelled ones

    Each order is handled in its own transaction: the order, its items
    and every product it touched are committed together or not at all.
    Orders are processed one at a time, oldest first.
    """

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    def reconcile_pending_orders(self, stop_event: Optional[threading.Event] = None) -> None:
        """
        Run one reconciliation pass over every Pending order

        Args:
            stop_event: When set, the pass finishes the current order
                and does not start another one

        Raises:
            ReconciliationError: If any order failed to persist; the
                rest of the batch is still processed
            SQLAlchemyError: If the pending orders cannot be listed
        """
        with self.session_factory() as session:
            pending_ids = OrderRepository(session).get_pending_ids()

        if not pending_ids:
            logger.debug("No pending orders")
            return

        logger.info("Reconciling %d pending order(s)", len(pending_ids))
        failed = []

        for index, order_id in enumerate(pending_ids):
            if stop_event is not None and stop_event.is_set():
                logger.info(
                    "Stop requested, leaving %d order(s) for the next pass",
                    len(pending_ids) - index
                )
                break

            try:
                self.reconcile_order(order_id)
            except SQLAlchemyError:
                logger.exception("Failed to persist order %s, changes rolled back", order_id)
                failed.append(order_id)

        if failed:
            raise ReconciliationError(failed)

    def reconcile_order(self, order_id: int) -> Optional[OrderStatus]:
        """
        Fulfil or cancel a single order atomically

        Items are visited in line order. A missing product is skipped.
        The first item whose product lacks stock cancels the order and
        leaves the remaining items untouched; items already visited
        keep their stock decrement and price snapshot.

        Returns:
            The terminal status committed, or None if the order was
            no longer Pending when it was loaded
        """
        with self.session_factory() as session, session.begin():
            orders = OrderRepository(session)
            products = ProductRepository(session)

            order = orders.get_for_update(order_id)
            if order is None or order.status != OrderStatus.PENDING:
                logger.info("Order %s is no longer pending, skipping", order_id)
                return None

            logger.info("Processing order %s", order.id)
            order.status = OrderStatus.PROCESSING

            for item in order.items:
                product = products.get_for_update(item.product_id)
                if product is None:
                    logger.debug(
                        "Order %s item %s references missing product %s, skipping item",
                        order.id, item.id, item.product_id
                    )
                    continue

                if product.has_stock_for(item.quantity):
                    product.stock -= item.quantity
                    item.unit_price = product.price
                else:
                    order.status = OrderStatus.CANCELLED
                    logger.warning(
                        "Order %s cancelled due to insufficient stock for product %s "
                        "(requested %d, available %d)",
                        order.id, product.id, item.quantity, product.stock
                    )
                    break

            if order.status != OrderStatus.CANCELLED:
                order.status = OrderStatus.COMPLETED

            outcome = order.status

        logger.info("Order %s %s", order_id, outcome.name.lower())
        return outcome
