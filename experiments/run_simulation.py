# experiments/run_simulation.py
from __future__ import annotations
import csv
import logging
import os

from config import SIM_DURATION_S, RANDOM_SEED, Timings, LOG_LEVEL, LOG_FORMAT
from data.generate_data import set_seed, generate_drones, generate_requests, save_generated_data
from data.scenarios import SCENARIOS
from simulator.environment import Environment


def build_environment(scenario_name: str, timings: Timings = None) -> Environment:
    if scenario_name not in SCENARIOS:
        raise ValueError(f"Unknown scenario: {scenario_name}")

    set_seed(RANDOM_SEED)
    sc = SCENARIOS[scenario_name]

    drones = generate_drones(sc["drones"])
    requests = generate_requests(sc["orders"], sc["horizon_s"])
    return Environment(drone_seed=drones, requests=requests, timings=timings)


def run_scenario(scenario_name: str, duration_s: int = SIM_DURATION_S,
                 save_data: bool = True, tables_dir: str = os.path.join("results", "tables")) -> dict:
    env = build_environment(scenario_name)
    if save_data:
        save_generated_data(env.drone_seed, env.requests)

    env.run(duration_s)
    env.export_order_table(os.path.join(tables_dir, f"orders_{scenario_name}.csv"))

    metrics = env.metrics()
    metrics["scenario"] = scenario_name
    return metrics


def save_metrics(metrics: dict, out_csv: str) -> None:
    os.makedirs(os.path.dirname(out_csv), exist_ok=True)
    write_header = not os.path.exists(out_csv)
    with open(out_csv, "a", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=list(metrics.keys()))
        if write_header:
            w.writeheader()
        w.writerow(metrics)


if __name__ == "__main__":
    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)
    out_csv = os.path.join("results", "tables", "runs.csv")
    for scenario_name in SCENARIOS.keys():
        m = run_scenario(scenario_name)
        save_metrics(m, out_csv)
        print(scenario_name, m)
