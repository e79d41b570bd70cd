"""Tests for DroneRegistry."""

import pytest

from dispatch.errors import DroneNotFound
from dispatch.registry import DroneRegistry


class TestListDrones:
    def test_keeps_seed_order(self):
        reg = DroneRegistry([(3, "C"), (1, "A"), (2, "B")])
        assert [d.id for d in reg.list_drones()] == [3, 1, 2]

    def test_all_available_by_default(self, registry):
        assert all(d.available for d in registry.list_drones())
        assert len(registry) == 3

    def test_explicit_seed_availability(self):
        reg = DroneRegistry([(1, "A", True), (2, "B", False)])
        assert [d.available for d in reg.list_drones()] == [True, False]

    def test_duplicate_ids_rejected(self):
        with pytest.raises(ValueError):
            DroneRegistry([(1, "A"), (1, "B")])


class TestFindAvailable:
    def test_lowest_id_wins(self):
        reg = DroneRegistry([(3, "C"), (1, "A"), (2, "B")])
        assert reg.find_available().id == 1

    def test_skips_unavailable(self, registry):
        registry.set_availability(1, False)
        assert registry.find_available().id == 2

    def test_none_when_all_busy(self, registry):
        for d in registry.list_drones():
            registry.set_availability(d.id, False)
        assert registry.find_available() is None


class TestSetAvailability:
    def test_sets_flag(self, registry):
        drone = registry.set_availability(2, False)
        assert drone.id == 2
        assert registry.get(2).available is False

    def test_idempotent(self, registry):
        registry.set_availability(2, False)
        registry.set_availability(2, False)
        assert registry.get(2).available is False

    def test_unknown_drone(self, registry):
        with pytest.raises(DroneNotFound) as exc_info:
            registry.set_availability(99, True)
        assert exc_info.value.drone_id == 99

    def test_get_unknown_drone(self, registry):
        with pytest.raises(DroneNotFound):
            registry.get(42)


def test_reset_frees_every_seed_drone():
    reg = DroneRegistry([(1, "A"), (2, "B", False)])
    reg.set_availability(1, False)
    reg.reset()
    assert all(d.available for d in reg.list_drones())
