"""
Order API endpoints
"""
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status, Query
from sqlalchemy.orm import Session
from typing import List

from order_fulfillment.database import get_db
from order_fulfillment.services.order_service import OrderService, CustomerNotFoundError
from order_fulfillment.workers.reconciliation_scheduler import ReconciliationScheduler
from order_fulfillment.schemas.order import (
    OrderCreate,
    OrderResponse,
    OrderListResponse,
    ReprocessResponse,
    ReconcileResponse
)

router = APIRouter(prefix="/orders", tags=["orders"])


def get_order_service(db: Session = Depends(get_db)) -> OrderService:
    """Dependency to get OrderService instance"""
    return OrderService(db)


def get_scheduler(request: Request) -> ReconciliationScheduler:
    """Dependency to get the scheduler created at startup"""
    scheduler = getattr(request.app.state, "scheduler", None)
    if scheduler is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Reconciliation scheduler is not initialised"
        )
    return scheduler


@router.get("", response_model=OrderListResponse, summary="Get all orders")
def get_orders(
    skip: int = Query(0, ge=0, description="Number of orders to skip"),
    limit: int = Query(100, ge=1, le=1000, description="Maximum number of orders to return"),
    service: OrderService = Depends(get_order_service)
):
    """
    Retrieve all orders with pagination, newest first

    - **skip**: Number of orders to skip (default: 0)
    - **limit**: Maximum number of orders to return (default: 100, max: 1000)
    """
    return service.get_all_orders(skip=skip, limit=limit)


@router.get("/daterange", response_model=List[OrderResponse], summary="Get orders by date range")
def get_orders_by_date_range(
    start_date: datetime = Query(..., description="Inclusive start (ISO-8601)"),
    end_date: datetime = Query(..., description="Inclusive end (ISO-8601)"),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
    service: OrderService = Depends(get_order_service)
):
    """
    Get orders created within an inclusive date range
    """
    try:
        return service.get_orders_by_date_range(start_date, end_date, skip=skip, limit=limit)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )


@router.get("/customer/{customer_id}", response_model=List[OrderResponse], summary="Get orders by customer")
def get_orders_by_customer(
    customer_id: int,
    service: OrderService = Depends(get_order_service)
):
    """
    Get all orders for a specific customer

    - **customer_id**: Customer ID
    """
    return service.get_orders_by_customer(customer_id)


@router.get("/{order_id}", response_model=OrderResponse, summary="Get order by ID")
def get_order(
    order_id: int,
    service: OrderService = Depends(get_order_service)
):
    """
    Retrieve a specific order by ID

    Poll this endpoint to learn whether a Pending order was completed
    or cancelled.
    """
    order = service.get_order_by_id(order_id)
    if not order:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Order with id={order_id} not found"
        )
    return order


@router.post("", response_model=OrderResponse, status_code=status.HTTP_201_CREATED, summary="Create order")
def create_order(
    order_data: OrderCreate,
    service: OrderService = Depends(get_order_service)
):
    """
    Create a new order

    The order is stored as Pending with unpriced items and returned
    immediately. Stock is checked asynchronously by the reconciliation
    worker.

    - **customer_id**: Customer ID (required)
    - **items**: List of {product_id, quantity}, at least one
    """
    try:
        return service.create_order(order_data)
    except CustomerNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )


@router.post("/reprocess-pending", response_model=ReprocessResponse, summary="Mark pending orders as processing")
def reprocess_pending_orders(service: OrderService = Depends(get_order_service)):
    """
    Flag every Pending order as Processing

    Status change only: stock is not checked and prices are not
    snapshotted. Use /orders/reconcile to run fulfillment.
    """
    return ReprocessResponse(reprocessed_count=service.reprocess_pending_orders())


@router.post("/reconcile", response_model=ReconcileResponse, status_code=status.HTTP_202_ACCEPTED, summary="Run reconciliation now")
async def reconcile_orders(
    response: Response,
    service: OrderService = Depends(get_order_service),
    scheduler: ReconciliationScheduler = Depends(get_scheduler)
):
    """
    Run one reconciliation pass now

    Returns 409 if a pass is already running and 503 while the
    service is shutting down.
    """
    if scheduler.is_stopping:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Reconciliation scheduler is shutting down"
        )
    pending_before = service.count_pending()
    started = await scheduler.run_once()
    if not started:
        response.status_code = status.HTTP_409_CONFLICT
        return ReconcileResponse(
            started=False,
            pending_before=pending_before,
            message="Scheduler is shutting down" if scheduler.is_stopping else "Reconciliation pass already in progress"
        )
    return ReconcileResponse(
        started=True,
        pending_before=pending_before,
        message=scheduler.last_error
    )
