"""
Engine stand-ins for driving the scheduler without a database
"""
import threading


class BlockingEngine:
    """Engine double whose pass blocks until released"""

    def __init__(self):
        self.started = threading.Event()
        self.release = threading.Event()
        self.calls = 0

    def reconcile_pending_orders(self, stop_event=None):
        self.calls += 1
        self.started.set()
        self.release.wait(timeout=5)


class FailingEngine:
    def __init__(self):
        self.calls = 0

    def reconcile_pending_orders(self, stop_event=None):
        self.calls += 1
        raise RuntimeError("database unavailable")
