"""
Background workers
"""
from order_fulfillment.workers.reconciliation_scheduler import ReconciliationScheduler

__all__ = ["ReconciliationScheduler"]
