# model/drone.py
from __future__ import annotations
from dataclasses import dataclass

@dataclass
class Drone:
    id: int
    name: str
    available: bool = True     # false while bound to an order, or out of service

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name, "available": self.available}
