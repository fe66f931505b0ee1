#!filepath: exercise_quality/observability/instrumentation.py
from __future__ import annotations

from collections import OrderedDict
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Dict

from exercise_quality.observability.metrics import MetricRecorder
from exercise_quality.observability.timeline_reporter import TimelineReporter
from exercise_quality.observability.timer import Timer


@dataclass
class Instrumentation:
    """
    Instrumentation (leaf-only accounting + parent scope).

    Rules:
    1. Timeline records leaf timers only (record=True)
    2. Parent timers (record=False) only bound wall-time
    3. record=False never has side effects
    """

    enabled: bool = True

    def __post_init__(self):
        self._timer = Timer(enabled=self.enabled)
        self.metrics = MetricRecorder(enabled=self.enabled)

        # timeline: OrderedDict[leaf_name, elapsed_seconds]
        self.timeline: Dict[str, float] = OrderedDict()

    def timer(self, name: str, *, record: bool = True):
        """
        Context-manager timer.

        Parameters
        ----------
        name : str
            timer name
        record : bool
            - True  : leaf, written to timeline
            - False : parent scope, no side effects
        """
        inst = self

        @contextmanager
        def _ctx():
            if not inst.enabled:
                yield
                return

            inst._timer.start(name)
            try:
                yield
            finally:
                elapsed = inst._timer.end(name)

                if record:
                    inst.timeline[name] = elapsed

        return _ctx()

    def generate_timeline_report(self, run_id: str):
        reporter = TimelineReporter(self.timeline, run_id)
        reporter.print()


class NoOpInstrumentation:
    """Used when observability is disabled."""

    def __init__(self):
        self.metrics = MetricRecorder(enabled=False)

    def timer(self, name: str, *, record: bool = True):
        return _NoOpTimer()

    def generate_timeline_report(self, run_id: str):
        pass


class _NoOpTimer:
    def __enter__(self):
        pass

    def __exit__(self, exc_type, exc, tb):
        pass
