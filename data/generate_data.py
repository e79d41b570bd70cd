# data/generate_data.py
from __future__ import annotations
import csv
import os
import random
from typing import List, Tuple

from config import RANDOM_SEED
from model.order import OrderRequest

CUSTOMERS = ["Ana", "Bruno", "Carla", "Diego", "Elena", "Fabio", "Gina", "Hugo", "Ines", "Jorge"]
FLAVORS = ["chocolate", "vanilla", "strawberry", "red-velvet", "carrot", "tres-leches"]

def save_generated_data(drones, requests, folder="data/saved"):
    os.makedirs(folder, exist_ok=True)

    with open(os.path.join(folder, "drones.csv"), "w", newline="") as f:
        w = csv.writer(f)
        w.writerow(["id", "name"])
        for entry in drones:
            w.writerow([entry[0], entry[1]])

    with open(os.path.join(folder, "requests.csv"), "w", newline="") as f:
        w = csv.writer(f)
        w.writerow(["release_time", "customer", "flavor"])
        for r in requests:
            w.writerow([r.release_time, r.customer, r.flavor])


def set_seed(seed: int = RANDOM_SEED) -> None:
    random.seed(seed)

def generate_drones(n: int) -> List[Tuple[int, str]]:
    # ids start at 1 so the lowest-id tie-break matches the seed order
    return [(i, f"Drone {i}") for i in range(1, n + 1)]

def generate_requests(n: int, horizon_s: int = 300) -> List[OrderRequest]:
    requests: List[OrderRequest] = []
    for i in range(n):
        requests.append(
            OrderRequest(
                release_time=random.randint(0, horizon_s),
                customer=f"{random.choice(CUSTOMERS)} {i}",
                flavor=random.choice(FLAVORS),
            )
        )
    # stable sort keeps generation order among equal release times
    requests.sort(key=lambda r: r.release_time)
    return requests
