# config.py
from dataclasses import dataclass

# Reproducibility
RANDOM_SEED = 42

# Simulation
DT_S = 1
SIM_DURATION_S = 600  # 10 minutes

# Order lifecycle
IN_FLIGHT_AFTER_S = 3      # preparing -> in-flight
DELIVERED_AFTER_S = 10     # in-flight -> delivered (total, from creation)
LEAD_TIME_MIN = 15         # estimated delivery shown to the customer

# Fleet at process start: (id, display name)
SEED_DRONES = (
    (1, "Droncito 1"),
    (2, "PastelExpress"),
    (3, "SweetFly"),
)

# Logging
LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

@dataclass
class Timings:
    in_flight_after_s: float = IN_FLIGHT_AFTER_S
    delivered_after_s: float = DELIVERED_AFTER_S
    lead_time_min: float = LEAD_TIME_MIN

    def __post_init__(self) -> None:
        if not 0 < self.in_flight_after_s < self.delivered_after_s:
            raise ValueError(
                f"need 0 < in_flight_after_s < delivered_after_s, "
                f"got {self.in_flight_after_s} and {self.delivered_after_s}"
            )
        if self.lead_time_min <= 0:
            raise ValueError(f"lead_time_min must be positive, got {self.lead_time_min}")
