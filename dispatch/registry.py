# dispatch/registry.py
from __future__ import annotations
from typing import Dict, List, Optional, Sequence, Tuple, Union

from dispatch.errors import DroneNotFound
from model.drone import Drone

# (id, name) or (id, name, available)
SeedEntry = Union[Tuple[int, str], Tuple[int, str, bool]]

class DroneRegistry:
    """Fixed fleet of drones and their availability flags.

    Drones keep their seed order; lookups are by id.
    """

    def __init__(self, seed: Sequence[SeedEntry]):
        self._seed: List[SeedEntry] = list(seed)
        ids = [entry[0] for entry in self._seed]
        if len(set(ids)) != len(ids):
            raise ValueError(f"duplicate drone ids in seed: {ids}")
        self.drones: Dict[int, Drone] = {}
        self._load(initial=True)

    def _load(self, initial: bool) -> None:
        self.drones = {}
        for entry in self._seed:
            drone_id, name = entry[0], entry[1]
            available = entry[2] if (initial and len(entry) > 2) else True
            self.drones[drone_id] = Drone(id=drone_id, name=name, available=available)

    def reset(self) -> None:
        # every seed drone comes back free
        self._load(initial=False)

    def list_drones(self) -> List[Drone]:
        return list(self.drones.values())

    def get(self, drone_id: int) -> Drone:
        d = self.drones.get(drone_id)
        if d is None:
            raise DroneNotFound(drone_id)
        return d

    def find_available(self) -> Optional[Drone]:
        free = [d for d in self.drones.values() if d.available]
        if not free:
            return None
        return min(free, key=lambda d: d.id)

    def set_availability(self, drone_id: int, value: bool) -> Drone:
        d = self.get(drone_id)
        d.available = value
        return d

    def __len__(self) -> int:
        return len(self.drones)
