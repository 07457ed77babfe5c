"""
FastAPI Application Entry Point - Order Fulfillment Service
"""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_fastapi_instrumentator import Instrumentator

from order_fulfillment import __version__
from order_fulfillment.config import settings
from order_fulfillment.database import SessionLocal, init_db
from order_fulfillment.logging_config import setup_logging
from order_fulfillment.services.fulfillment_engine import OrderFulfillmentEngine
from order_fulfillment.workers.reconciliation_scheduler import ReconciliationScheduler
from order_fulfillment.api import orders, health

logger = logging.getLogger(__name__)

# Create FastAPI application
app = FastAPI(
    title="Order Fulfillment Service",
    description="Order intake with asynchronous stock reconciliation",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc"
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(health.router)
app.include_router(orders.router)

# Prometheus metrics
Instrumentator().instrument(app).expose(app)


@app.on_event("startup")
async def startup_event():
    """Initialize database and start the reconciliation loop"""
    setup_logging(settings.LOG_LEVEL)
    logger.info("Starting %s...", settings.SERVICE_NAME)
    init_db()

    scheduler = ReconciliationScheduler(
        OrderFulfillmentEngine(SessionLocal),
        interval_seconds=settings.RECONCILE_INTERVAL_SECONDS
    )
    app.state.scheduler = scheduler
    if settings.RECONCILE_ENABLED:
        scheduler.start()
    else:
        logger.info("Periodic reconciliation disabled; use POST /orders/reconcile")

    logger.info("%s is running on port %s", settings.SERVICE_NAME, settings.SERVICE_PORT)


@app.on_event("shutdown")
async def shutdown_event():
    """Let the in-flight order finish, then stop the loop"""
    logger.info("Shutting down %s...", settings.SERVICE_NAME)
    scheduler = getattr(app.state, "scheduler", None)
    if scheduler is not None:
        await scheduler.stop()
