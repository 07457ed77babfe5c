import asyncio

from order_fulfillment.models import Order, OrderStatus
from order_fulfillment.workers.reconciliation_scheduler import ReconciliationScheduler
from tests.doubles import BlockingEngine, FailingEngine


def test_overlapping_pass_is_skipped():
    engine = BlockingEngine()

    async def scenario():
        scheduler = ReconciliationScheduler(engine, interval_seconds=60)
        first = asyncio.create_task(scheduler.run_once())
        await asyncio.to_thread(engine.started.wait, 5)
        assert scheduler.is_busy
        second = await scheduler.run_once()
        engine.release.set()
        return await first, second

    assert asyncio.run(scenario()) == (True, False)
    assert engine.calls == 1


def test_pass_errors_are_recorded_and_do_not_escape():
    engine = FailingEngine()

    async def scenario():
        scheduler = ReconciliationScheduler(engine, interval_seconds=60)
        ran = await scheduler.run_once()
        return ran, scheduler

    ran, scheduler = asyncio.run(scenario())
    assert ran is True
    assert scheduler.last_error == "database unavailable"
    assert scheduler.passes == 1
    assert not scheduler.is_busy


def test_loop_keeps_running_after_a_failed_pass():
    engine = FailingEngine()

    async def scenario():
        scheduler = ReconciliationScheduler(engine, interval_seconds=0.01)
        scheduler.start()
        while engine.calls < 3:
            await asyncio.sleep(0.01)
        await scheduler.stop()
        return scheduler

    scheduler = asyncio.run(scenario())
    assert engine.calls >= 3
    assert not scheduler.is_running


def test_stop_waits_for_the_pass_in_flight():
    engine = BlockingEngine()

    async def scenario():
        scheduler = ReconciliationScheduler(engine, interval_seconds=60)
        scheduler.start()
        await asyncio.to_thread(engine.started.wait, 5)
        stopping = asyncio.create_task(scheduler.stop())
        await asyncio.sleep(0.05)
        assert not stopping.done()
        engine.release.set()
        await stopping
        return scheduler

    scheduler = asyncio.run(scenario())
    assert engine.calls == 1
    assert scheduler.passes == 1


def test_scheduler_drives_the_real_engine(fulfillment_engine, make_product, place_order, reload):
    product = make_product(stock=5)
    order_id = place_order((product.id, 2))

    async def scenario():
        scheduler = ReconciliationScheduler(fulfillment_engine, interval_seconds=60)
        return await scheduler.run_once()

    assert asyncio.run(scenario()) is True
    assert reload(Order, order_id).status == OrderStatus.COMPLETED


def test_run_once_refuses_to_start_after_stop():
    engine = BlockingEngine()
    engine.release.set()

    async def scenario():
        scheduler = ReconciliationScheduler(engine, interval_seconds=60)
        scheduler.request_stop()
        return await scheduler.run_once(), scheduler

    ran, scheduler = asyncio.run(scenario())
    assert ran is False
    assert scheduler.is_stopping
    assert engine.calls == 0
    assert scheduler.passes == 0
