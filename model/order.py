# model/order.py
from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

PREPARING = "preparing"
IN_FLIGHT = "in-flight"
DELIVERED = "delivered"

# lifecycle order; an order only ever moves to a later entry
STATUSES = (PREPARING, IN_FLIGHT, DELIVERED)


def status_rank(status: str) -> int:
    return STATUSES.index(status)


@dataclass
class Order:
    id: int
    customer: str
    flavor: str
    drone_id: int
    drone_name: str            # snapshot taken at creation
    created_at: datetime
    estimated_delivery_at: datetime

    status: str = PREPARING
    delivered_at: Optional[datetime] = None

    @property
    def is_delivered(self) -> bool:
        return self.status == DELIVERED

    def to_dict(self) -> dict:
        d = {
            "id": self.id,
            "customer": self.customer,
            "flavor": self.flavor,
            "drone": self.drone_name,
            "droneId": self.drone_id,
            "status": self.status,
            "createdAt": self.created_at.isoformat(),
            "estimatedDelivery": self.estimated_delivery_at.isoformat(),
        }
        if self.delivered_at is not None:
            d["deliveredAt"] = self.delivered_at.isoformat()
        return d


@dataclass
class OrderRequest:
    release_time: float        # seconds of simulated time
    customer: str
    flavor: str
