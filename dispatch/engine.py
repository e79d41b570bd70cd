# dispatch/engine.py
from __future__ import annotations
import logging
import threading
from dataclasses import replace
from datetime import timedelta
from typing import Dict, List, Optional

from config import SEED_DRONES, Timings
from dispatch.errors import (
    AlreadyDelivered, DroneBusy, InvalidInput, InvalidStatus,
    InvalidTransition, NoCapacity, OrderNotFound, DispatchError
)
from dispatch.registry import DroneRegistry
from dispatch.scheduling import ScheduledTask, SimulatedScheduler
from model.drone import Drone
from model.order import DELIVERED, IN_FLIGHT, STATUSES, Order, status_rank

logger = logging.getLogger(__name__)


def _require_text(field: str, value) -> str:
    if not isinstance(value, str) or not value.strip():
        raise InvalidInput(field, "must be a non-empty string")
    return value


class DispatchEngine:
    """Binds orders to free drones and walks each order through
    preparing -> in-flight -> delivered.

    The scheduler doubles as the clock (``now()``) and fires the two
    automatic transitions per order. All state changes happen under one
    lock so timer threads and callers never interleave inside an operation.
    """

    def __init__(self, registry: Optional[DroneRegistry] = None, scheduler=None,
                 timings: Optional[Timings] = None):
        self.registry = registry if registry is not None else DroneRegistry(SEED_DRONES)
        self.scheduler = scheduler if scheduler is not None else SimulatedScheduler()
        self.timings = timings if timings is not None else Timings()

        self._lock = threading.RLock()
        self._orders: Dict[int, Order] = {}
        self._timers: Dict[int, List[ScheduledTask]] = {}
        self._next_id = 1

    # ----------------- orders -----------------
    def create_order(self, customer: str, flavor: str) -> Order:
        customer = _require_text("customer", customer)
        flavor = _require_text("flavor", flavor)

        with self._lock:
            drone = self.registry.find_available()
            if drone is None:
                logger.warning("Rejected order for %s: no drones available", customer)
                raise NoCapacity()

            self.registry.set_availability(drone.id, False)
            now = self.scheduler.now()
            order = Order(
                id=self._next_id,
                customer=customer,
                flavor=flavor,
                drone_id=drone.id,
                drone_name=drone.name,
                created_at=now,
                estimated_delivery_at=now + timedelta(minutes=self.timings.lead_time_min),
            )
            self._next_id += 1
            self._orders[order.id] = order
            self._timers[order.id] = [
                self.scheduler.call_later(self.timings.in_flight_after_s,
                                          self._auto_advance, order.id, IN_FLIGHT),
                self.scheduler.call_later(self.timings.delivered_after_s,
                                          self._auto_advance, order.id, DELIVERED),
            ]

        logger.info("Order %d (%s, %s) assigned to drone %d %r",
                    order.id, customer, flavor, drone.id, drone.name)
        return order

    def get_all_orders(self) -> List[Order]:
        with self._lock:
            return list(self._orders.values())

    def active_orders(self) -> List[Order]:
        with self._lock:
            return [o for o in self._orders.values() if not o.is_delivered]

    def get_order(self, order_id: int) -> Order:
        with self._lock:
            o = self._orders.get(order_id)
            if o is None:
                raise OrderNotFound(order_id)
            return o

    def update_order_status(self, order_id: int, status: str) -> Order:
        with self._lock:
            order = self.get_order(order_id)
            if status not in STATUSES:
                raise InvalidStatus(status)
            if order.is_delivered:
                raise AlreadyDelivered(order.id, status)
            if status_rank(status) < status_rank(order.status):
                raise InvalidTransition(order.id, order.status, status)
            self._apply(order, status)
            return order

    def complete_order(self, order_id: int) -> Order:
        return self.update_order_status(order_id, DELIVERED)

    def _apply(self, order: Order, status: str) -> None:
        if order.status == status:
            return
        previous, order.status = order.status, status
        logger.info("Order %d: %s -> %s", order.id, previous, status)
        if status == DELIVERED:
            order.delivered_at = self.scheduler.now()
            self.registry.set_availability(order.drone_id, True)
            for task in self._timers.pop(order.id, []):
                task.cancel()
            logger.info("Drone %d released by order %d", order.drone_id, order.id)

    def _auto_advance(self, order_id: int, status: str) -> None:
        # timer callback: only ever moves an order forward
        try:
            with self._lock:
                order = self.get_order(order_id)
                if status_rank(order.status) >= status_rank(status):
                    logger.debug("Order %d already %s, skipping scheduled %s",
                                 order_id, order.status, status)
                    return
                self._apply(order, status)
        except DispatchError as e:
            logger.warning("Scheduled transition of order %s to %s failed: %s",
                           order_id, status, e)

    # ----------------- drones -----------------
    # callers get copies; availability only changes through the engine
    def list_drones(self) -> List[Drone]:
        with self._lock:
            return [replace(d) for d in self.registry.list_drones()]

    def get_drone(self, drone_id: int) -> Drone:
        with self._lock:
            return replace(self.registry.get(drone_id))

    def set_drone_availability(self, drone_id: int, value: bool) -> Drone:
        if not isinstance(value, bool):
            raise InvalidInput("available", "must be true or false")
        with self._lock:
            self.registry.get(drone_id)
            if value:
                holder = self._holder_of(drone_id)
                if holder is not None:
                    raise DroneBusy(drone_id, holder.id)
            drone = replace(self.registry.set_availability(drone_id, value))
        logger.info("Drone %d marked %s", drone_id, "available" if value else "unavailable")
        return drone

    def _holder_of(self, drone_id: int) -> Optional[Order]:
        for o in self._orders.values():
            if o.drone_id == drone_id and not o.is_delivered:
                return o
        return None

    # ----------------- housekeeping -----------------
    def reset(self) -> None:
        with self._lock:
            for tasks in self._timers.values():
                for task in tasks:
                    task.cancel()
            self._timers.clear()
            self._orders.clear()
            # ids keep counting so a timer already past its scheduler cannot
            # match an order created after the reset
            self.registry.reset()
        logger.info("Dispatch state reset")

    def pending_transitions(self) -> int:
        with self._lock:
            return sum(1 for tasks in self._timers.values() for t in tasks if t.pending)
