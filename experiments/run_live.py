# experiments/run_live.py
"""Live run on the wall clock: a few orders, real 3 s / 10 s transitions."""
from __future__ import annotations
import logging
import time

from config import LOG_LEVEL, LOG_FORMAT, Timings
from dispatch.engine import DispatchEngine
from dispatch.errors import NoCapacity
from dispatch.scheduling import ThreadingScheduler

logger = logging.getLogger(__name__)

DEMO_ORDERS = [
    ("Ana", "chocolate"),
    ("Bruno", "vanilla"),
    ("Carla", "strawberry"),
    ("Diego", "red-velvet"),  # fleet of 3: rejected
]


def run_live(timings: Timings = None, poll_s: float = 1.0, timeout_s: float = 15.0) -> DispatchEngine:
    engine = DispatchEngine(scheduler=ThreadingScheduler(), timings=timings)
    for customer, flavor in DEMO_ORDERS:
        try:
            engine.create_order(customer, flavor)
        except NoCapacity as e:
            logger.warning("%s: %s", customer, e)

    deadline = time.monotonic() + timeout_s
    while engine.active_orders() and time.monotonic() < deadline:
        time.sleep(poll_s)
        print(" | ".join(f"#{o.id} {o.status}" for o in engine.get_all_orders()))

    engine.scheduler.cancel_all()
    return engine


if __name__ == "__main__":
    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)
    run_live()
