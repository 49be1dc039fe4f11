import os
from dataclasses import dataclass

import psutil  # pip install psutil


# -------------------------------------------------
# SETTINGS
# -------------------------------------------------

DEFAULT_START = 2    # first exponent magnitude considered
RANGE_SIZE = 100     # magnitudes handed to a worker per assignment
FILTER_ROUNDS = 1    # probabilistic rounds before Lucas-Lehmer
POLL_INTERVAL = 0.5  # seconds the arbiter waits before re-checking the stop flag

MODES = ("ranged", "cursor")


def detect_thread_count():
    """One worker per logical CPU."""
    count = psutil.cpu_count(logical=True) or os.cpu_count()
    return max(count or 1, 1)


@dataclass
class SearchConfig:
    start: int = DEFAULT_START
    threads: int = 1
    mode: str = "ranged"
    range_size: int = RANGE_SIZE
    rounds: int = FILTER_ROUNDS
    poll_interval: float = POLL_INTERVAL

    def __post_init__(self):
        if self.start < 0:
            raise ValueError(f"starting exponent must be non-negative, got {self.start}")
        if self.threads < 1:
            raise ValueError(f"worker count must be positive, got {self.threads}")
        if self.mode not in MODES:
            raise ValueError(f"unknown mode {self.mode!r}, expected one of {MODES}")
        if self.range_size < 1:
            raise ValueError(f"range size must be positive, got {self.range_size}")
        if self.rounds < 1:
            raise ValueError(f"filter rounds must be positive, got {self.rounds}")
