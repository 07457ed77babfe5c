"""
Periodic driver for the Order Fulfillment Engine
"""
import asyncio
import logging
import threading
from datetime import datetime, timezone
from typing import Optional

from order_fulfillment.services.fulfillment_engine import OrderFulfillmentEngine

logger = logging.getLogger(__name__)


class ReconciliationScheduler:
    """
    Runs reconciliation passes on a fixed interval and on demand

    Passes never overlap: a pass requested while another is in flight
    is skipped, whether it came from the timer or from a manual
    trigger. The engine is synchronous and runs in a worker thread.
    """

    def __init__(self, engine: OrderFulfillmentEngine, interval_seconds: float = 10.0):
        self.engine = engine
        self.interval_seconds = interval_seconds
        self._lock = asyncio.Lock()
        self._stopping = asyncio.Event()
        self._engine_stop = threading.Event()
        self._task: Optional[asyncio.Task] = None
        self.last_run_at: Optional[datetime] = None
        self.last_error: Optional[str] = None
        self.passes = 0

    @property
    def is_busy(self) -> bool:
        return self._lock.locked()

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def is_stopping(self) -> bool:
        return self._stopping.is_set()

    async def run_once(self) -> bool:
        """
        Run a single pass unless one is already in flight

        Errors are logged and recorded; the next tick retries.

        Returns:
            True if a pass ran, False if it was skipped because one
            is in flight or a stop was requested
        """
        if self._stopping.is_set():
            logger.info("Scheduler is stopping, not starting a reconciliation pass")
            return False

        if self._lock.locked():
            logger.info("Reconciliation pass already in progress, skipping")
            return False

        async with self._lock:
            try:
                await asyncio.to_thread(self.engine.reconcile_pending_orders, self._engine_stop)
                self.last_error = None
            except Exception as e:
                logger.exception("Error processing orders")
                self.last_error = str(e)
            finally:
                self.passes += 1
                self.last_run_at = datetime.now(timezone.utc)
        return True

    async def run_forever(self) -> None:
        """Run passes until stop() is called"""
        logger.info("Reconciliation scheduler started (interval: %ss)", self.interval_seconds)
        while not self._stopping.is_set():
            await self.run_once()
            try:
                await asyncio.wait_for(self._stopping.wait(), timeout=self.interval_seconds)
            except asyncio.TimeoutError:
                pass
        logger.info("Reconciliation scheduler stopped")

    def start(self) -> asyncio.Task:
        """Start the periodic loop on the running event loop"""
        if self.is_running:
            return self._task
        self._stopping.clear()
        self._engine_stop.clear()
        self._task = asyncio.create_task(self.run_forever())
        return self._task

    def request_stop(self) -> None:
        """
        Ask the loop to stop without waiting for it

        The pass in flight finishes its current order and starts no
        new one; it is never interrupted mid-order.
        """
        self._stopping.set()
        self._engine_stop.set()

    async def stop(self) -> None:
        """Request a stop and wait for the loop to exit"""
        self.request_stop()
        if self._task is not None:
            await self._task
            self._task = None
