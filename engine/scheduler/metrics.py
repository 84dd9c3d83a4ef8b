import time
from collections import defaultdict
from typing import Dict


class RunMetrics:
    """
    Runner-owned metrics collector.

    Used for the CLI run summary.
    """

    def __init__(self):
        self.counters: Dict[str, int] = defaultdict(int)
        self.timestamps: Dict[str, float] = {}

    # ---- counters ----
    def inc(self, name: str, value: int = 1) -> None:
        self.counters[name] += value

    # ---- timestamps ----
    def mark_time(self, key: str) -> None:
        self.timestamps[key] = time.monotonic()

    def elapsed_since(self, key: str) -> float:
        start = self.timestamps.get(key)
        if start is None:
            return 0.0
        return time.monotonic() - start
