# experiments/analyze_results.py
from __future__ import annotations
import os
import csv
from collections import defaultdict

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

def load_metrics(csv_path: str):
    rows = []
    with open(csv_path, "r", encoding="utf-8") as f:
        r = csv.DictReader(f)
        for row in r:
            # convert numeric fields where possible
            for k, v in list(row.items()):
                if v is None or v == "":
                    row[k] = None
                    continue
                try:
                    if "." in v or "e" in v:
                        row[k] = float(v)
                    else:
                        row[k] = int(v)
                except ValueError:
                    pass
            rows.append(row)
    return rows

def summarize(rows):
    groups = defaultdict(list)
    for row in rows:
        groups[row["scenario"]].append(row)

    summary = []
    for scenario, items in groups.items():
        def avg(key):
            vals = [x[key] for x in items if x.get(key) is not None]
            return sum(vals) / len(vals) if vals else None

        summary.append({
            "scenario": scenario,
            "runs": len(items),
            "orders_accepted_avg": avg("orders_accepted"),
            "orders_rejected_avg": avg("orders_rejected"),
            "orders_delivered_avg": avg("orders_delivered"),
            "rejection_rate_avg": avg("rejection_rate"),
            "avg_delivery_time_s_avg": avg("avg_delivery_time_s"),
            "drone_utilization_avg": avg("drone_utilization"),
        })
    return summary

def save_summary(summary, out_csv):
    os.makedirs(os.path.dirname(out_csv), exist_ok=True)
    with open(out_csv, "w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=list(summary[0].keys()))
        w.writeheader()
        w.writerows(summary)

def plot_metric(summary, metric_key, out_path):
    # one bar per scenario; no manual colors (default)
    scenarios = [s["scenario"] for s in summary]
    y = [s[metric_key] if s[metric_key] is not None else 0 for s in summary]

    plt.figure()
    plt.bar(range(len(scenarios)), y)
    plt.xticks(range(len(scenarios)), scenarios)
    plt.ylabel(metric_key)
    os.makedirs(os.path.dirname(out_path), exist_ok=True)
    plt.savefig(out_path, dpi=150, bbox_inches="tight")
    plt.close()
