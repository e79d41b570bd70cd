"""Exceptions raised by the dispatch core.

Exception Hierarchy:
    DispatchError
    ├── NoCapacity
    ├── InvalidInput
    ├── OrderNotFound
    ├── DroneNotFound
    ├── DroneBusy
    └── InvalidStatus
        └── InvalidTransition
            └── AlreadyDelivered
"""
from __future__ import annotations


class DispatchError(Exception):
    """Base exception for all dispatch errors."""

    pass


class NoCapacity(DispatchError):
    """Raised when an order arrives and every drone is busy."""

    def __init__(self):
        super().__init__("No delivery drones available")


class InvalidInput(DispatchError):
    """Raised when a caller passes a missing or malformed argument."""

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(f"{field}: {message}")


class OrderNotFound(DispatchError):
    """Raised when an order cannot be found by ID."""

    def __init__(self, order_id):
        self.order_id = order_id
        super().__init__(f"Order with ID {order_id} not found")


class DroneNotFound(DispatchError):
    """Raised when a drone cannot be found by ID."""

    def __init__(self, drone_id):
        self.drone_id = drone_id
        super().__init__(f"Drone with ID {drone_id} not found")


class DroneBusy(DispatchError):
    """Raised when releasing a drone that an undelivered order still holds."""

    def __init__(self, drone_id: int, order_id: int):
        self.drone_id = drone_id
        self.order_id = order_id
        super().__init__(f"Drone {drone_id} is assigned to undelivered order {order_id}")


class InvalidStatus(DispatchError):
    """Raised for a status value outside the order lifecycle."""

    def __init__(self, status, message: str = None):
        self.status = status
        super().__init__(message or f"Invalid order status: {status!r}")


class InvalidTransition(InvalidStatus):
    """Raised when a status change would move an order backwards."""

    def __init__(self, order_id: int, current: str, status: str):
        self.order_id = order_id
        self.current = current
        super().__init__(
            status, f"Order {order_id} cannot move from {current!r} to {status!r}"
        )


class AlreadyDelivered(InvalidTransition):
    """Raised for any status change on an order that was already delivered."""

    def __init__(self, order_id: int, status: str):
        super().__init__(order_id, "delivered", status)
