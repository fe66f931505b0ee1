#!filepath: exercise_quality/observability/timer.py
import time
from typing import Dict


class Timer:
    """
    Wall-clock timer
    - start(name)
    - end(name) -> elapsed seconds
    """

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self._start: Dict[str, float] = {}

    def start(self, name: str):
        if not self.enabled:
            return
        self._start[name] = time.perf_counter()

    def end(self, name: str) -> float:
        if not self.enabled:
            return 0.0
        if name not in self._start:
            return 0.0
        return time.perf_counter() - self._start.pop(name)
