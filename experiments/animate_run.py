# experiments/animate_run.py
from __future__ import annotations
import numpy as np

import matplotlib.pyplot as plt
from matplotlib.animation import FuncAnimation

from config import SIM_DURATION_S
from experiments.run_simulation import build_environment

FREE_COLOR = "tab:green"
BUSY_COLOR = "tab:red"


def drone_frame(snap) -> tuple:
    """Positions and colours for one trace snapshot: one marker per drone in a row."""
    n = len(snap["drones"])
    offsets = np.column_stack([np.arange(n), np.zeros(n)])
    colors = [FREE_COLOR if available else BUSY_COLOR for (_, _, available) in snap["drones"]]
    return offsets, colors


def run_and_animate(scenario_name: str = "high", duration_s: int = SIM_DURATION_S):
    env = build_environment(scenario_name)

    # Run simulation (collects env.trace)
    env.run(duration_s)
    trace = env.trace
    n = len(env.registry)

    fig, ax = plt.subplots()
    ax.set_xlim(-1, n)
    ax.set_ylim(-1, 1)
    ax.set_yticks([])
    ax.set_xticks(range(n))
    ax.set_xticklabels([d.name for d in env.registry.list_drones()], rotation=45, ha="right")
    ax.set_title(f"Scenario: {scenario_name}")

    drones_sc = ax.scatter([], [], s=400)
    time_text = ax.text(0.02, 0.98, "", transform=ax.transAxes, va="top")

    def init():
        drones_sc.set_offsets(np.empty((0, 2)))
        time_text.set_text("")
        return drones_sc, time_text

    def update(frame):
        snap = trace[frame]
        offsets, colors = drone_frame(snap)
        drones_sc.set_offsets(offsets)
        drones_sc.set_color(colors)

        active = sum(1 for (_, _, status) in snap["orders"] if status != "delivered")
        time_text.set_text(f"t = {snap['t']:.0f} s   active orders = {active}")
        return drones_sc, time_text

    ani = FuncAnimation(fig, update, frames=len(trace), init_func=init, interval=50, blit=True)
    plt.show()
    return ani


if __name__ == "__main__":
    run_and_animate("high")
