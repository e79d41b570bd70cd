# data/scenarios.py
# drones: fleet size, orders: requests generated, horizon_s: window requests arrive in
SCENARIOS = {
    "low": {"drones": 3, "orders": 20, "horizon_s": 300},
    "medium": {"drones": 3, "orders": 60, "horizon_s": 300},
    "high": {"drones": 5, "orders": 150, "horizon_s": 300},
}
