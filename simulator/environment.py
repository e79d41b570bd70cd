# simulator/environment.py
from __future__ import annotations
import csv
import logging
import os
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Sequence

from config import Timings
from dispatch.engine import DispatchEngine
from dispatch.errors import NoCapacity
from dispatch.registry import DroneRegistry, SeedEntry
from dispatch.scheduling import SimulatedScheduler
from model.order import Order, OrderRequest

logger = logging.getLogger(__name__)

@dataclass
class StepInfo:
    time_s: float
    accepted_now: int
    rejected_now: int
    delivered_now: int

class Environment:
    """Drives a DispatchEngine on simulated time with a fixed request stream."""

    def __init__(self, drone_seed: Sequence[SeedEntry], requests: List[OrderRequest],
                 timings: Optional[Timings] = None):
        self.drone_seed = list(drone_seed)
        self.scheduler = SimulatedScheduler()
        self.registry = DroneRegistry(self.drone_seed)
        self.engine = DispatchEngine(self.registry, self.scheduler, timings)
        self.requests = sorted(requests, key=lambda r: r.release_time)
        self.rejected: List[OrderRequest] = []
        self.trace = []  # list of snapshots per step
        self._next_request = 0

    @property
    def t(self) -> float:
        return self.scheduler.t

    def _seconds(self, ts: datetime) -> float:
        return (ts - self.scheduler.start).total_seconds()

    def _submit_due(self) -> int:
        accepted = 0
        while (self._next_request < len(self.requests)
               and self.requests[self._next_request].release_time <= self.t):
            r = self.requests[self._next_request]
            self._next_request += 1
            try:
                self.engine.create_order(r.customer, r.flavor)
                accepted += 1
            except NoCapacity:
                self.rejected.append(r)
        return accepted

    def _delivered_count(self) -> int:
        return sum(1 for o in self.engine.get_all_orders() if o.is_delivered)

    def step(self) -> StepInfo:
        rejected_before = len(self.rejected)
        delivered_before = self._delivered_count()

        # 1) new orders whose time has come
        accepted_now = self._submit_due()

        # 2) let scheduled transitions fire
        self.scheduler.step()

        # record snapshot for visualization
        self.trace.append({
            "t": self.t,
            "drones": [(d.id, d.name, d.available) for d in self.engine.list_drones()],
            "orders": [(o.id, o.drone_id, o.status) for o in self.engine.get_all_orders()],
        })

        return StepInfo(
            time_s=self.t,
            accepted_now=accepted_now,
            rejected_now=len(self.rejected) - rejected_before,
            delivered_now=self._delivered_count() - delivered_before,
        )

    def run(self, duration_s: float) -> None:
        while self.t < duration_s:
            self.step()
        logger.info("Simulation finished at t=%ss: %d orders, %d rejected",
                    self.t, len(self.engine.get_all_orders()), len(self.rejected))

    # ----------------- evaluation -----------------
    def delivery_time_s(self, o: Order) -> Optional[float]:
        if o.delivered_at is None:
            return None
        return (o.delivered_at - o.created_at).total_seconds()

    def metrics(self) -> dict:
        orders = self.engine.get_all_orders()
        delivered = [o for o in orders if o.is_delivered]
        attempted = len(orders) + len(self.rejected)

        avg_delivery = None
        if delivered:
            avg_delivery = sum(self.delivery_time_s(o) for o in delivered) / len(delivered)

        busy_steps = sum(1 for snap in self.trace for (_, _, available) in snap["drones"] if not available)
        drone_steps = len(self.registry) * len(self.trace)

        return {
            "time_s": self.t,
            "requests_total": len(self.requests),
            "orders_accepted": len(orders),
            "orders_rejected": len(self.rejected),
            "orders_delivered": len(delivered),
            "orders_active": len(orders) - len(delivered),
            "rejection_rate": len(self.rejected) / max(1, attempted),
            "avg_delivery_time_s": avg_delivery,
            "drone_utilization": busy_steps / max(1, drone_steps),
        }

    def export_order_table(self, out_csv: str) -> None:
        os.makedirs(os.path.dirname(out_csv) or ".", exist_ok=True)

        with open(out_csv, "w", newline="", encoding="utf-8") as f:
            w = csv.writer(f)
            w.writerow([
                "order_id", "customer", "flavor", "drone_id", "drone",
                "status", "created_s", "delivered_s", "delivery_time_s"
            ])
            for o in self.engine.get_all_orders():
                w.writerow([
                    o.id, o.customer, o.flavor, o.drone_id, o.drone_name,
                    o.status, self._seconds(o.created_at),
                    self._seconds(o.delivered_at) if o.delivered_at else None,
                    self.delivery_time_s(o),
                ])
