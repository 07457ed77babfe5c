#!/usr/bin/env python
"""
Script to run the reconciliation worker without the HTTP API
"""
import asyncio
import logging
import signal

from order_fulfillment.config import settings
from order_fulfillment.database import SessionLocal, init_db
from order_fulfillment.logging_config import setup_logging
from order_fulfillment.services.fulfillment_engine import OrderFulfillmentEngine
from order_fulfillment.workers.reconciliation_scheduler import ReconciliationScheduler

logger = logging.getLogger("run_worker")


async def main():
    init_db()
    scheduler = ReconciliationScheduler(
        OrderFulfillmentEngine(SessionLocal),
        interval_seconds=settings.RECONCILE_INTERVAL_SECONDS
    )

    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, scheduler.request_stop)

    await scheduler.start()


if __name__ == "__main__":
    setup_logging(settings.LOG_LEVEL)
    logger.info("Starting reconciliation worker, press CTRL+C to exit")
    asyncio.run(main())
    logger.info("Worker stopped")
