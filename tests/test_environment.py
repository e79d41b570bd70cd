"""Tests for the simulation environment and data generation."""

import csv

from data.generate_data import generate_drones, generate_requests, save_generated_data, set_seed
from data.scenarios import SCENARIOS
from experiments.run_simulation import build_environment, run_scenario, save_metrics
from model.order import DELIVERED, OrderRequest
from simulator.environment import Environment


def requests_at(*times):
    return [OrderRequest(release_time=t, customer=f"C{i}", flavor="chocolate")
            for i, t in enumerate(times)]


def test_generation_is_deterministic():
    set_seed(7)
    first = generate_requests(30, 100)
    set_seed(7)
    second = generate_requests(30, 100)
    assert first == second
    assert [r.release_time for r in first] == sorted(r.release_time for r in first)
    assert all(0 <= r.release_time <= 100 for r in first)


def test_generate_drones():
    assert generate_drones(2) == [(1, "Drone 1"), (2, "Drone 2")]


def test_single_drone_rejects_overlap():
    env = Environment([(1, "Solo")], requests_at(0, 5, 10))
    info = env.step()
    assert info.accepted_now == 1
    env.run(30)

    m = env.metrics()
    # request at 5 s arrives while the drone is out; at 10 s it is back
    assert m["orders_accepted"] == 2
    assert m["orders_rejected"] == 1
    assert m["orders_delivered"] == 2
    assert m["avg_delivery_time_s"] == 10
    assert env.rejected[0].release_time == 5


def test_step_counts_deliveries():
    env = Environment([(1, "A"), (2, "B")], requests_at(0, 0))
    delivered = 0
    for _ in range(10):
        delivered += env.step().delivered_now
    assert delivered == 2
    assert all(available for (_, _, available) in env.trace[-1]["drones"])


def test_utilization():
    env = Environment([(1, "A"), (2, "B")], requests_at(0))
    env.run(20)
    # snapshots are taken after each step; drone 1 shows busy at t=1..9
    assert env.metrics()["drone_utilization"] == 9 / 40


def test_export_order_table(tmp_path):
    env = Environment([(1, "A")], requests_at(0))
    env.run(15)
    out = tmp_path / "tables" / "orders.csv"
    env.export_order_table(str(out))

    with open(out, newline="", encoding="utf-8") as f:
        rows = list(csv.DictReader(f))
    assert len(rows) == 1
    assert rows[0]["status"] == DELIVERED
    assert float(rows[0]["delivery_time_s"]) == 10.0


def test_scenarios_run(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    m = run_scenario("low", duration_s=400, save_data=True, tables_dir=str(tmp_path / "tables"))
    sc = SCENARIOS["low"]

    assert m["scenario"] == "low"
    assert m["requests_total"] == sc["orders"]
    assert m["orders_accepted"] + m["orders_rejected"] == sc["orders"]
    assert m["orders_active"] == 0
    assert (tmp_path / "data" / "saved" / "requests.csv").exists()

    out_csv = str(tmp_path / "results" / "runs.csv")
    save_metrics(m, out_csv)
    save_metrics(m, out_csv)
    with open(out_csv, newline="", encoding="utf-8") as f:
        assert len(list(csv.DictReader(f))) == 2


def test_active_orders_bounded_by_fleet():
    env = build_environment("high")
    fleet = len(env.registry)
    for _ in range(200):
        env.step()
        assert len(env.engine.active_orders()) <= fleet


def test_save_generated_data(tmp_path):
    save_generated_data([(1, "A", True)], requests_at(3), folder=str(tmp_path))
    with open(tmp_path / "drones.csv", newline="") as f:
        assert list(csv.reader(f)) == [["id", "name"], ["1", "A"]]
