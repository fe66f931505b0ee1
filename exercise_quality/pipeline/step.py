# exercise_quality/pipeline/step.py
from __future__ import annotations

from typing import Any

from exercise_quality.observability.instrumentation import (
    Instrumentation,
    NoOpInstrumentation,
)
from exercise_quality.utils.errors import PipelineError


class PipelineStep:
    """
    Pipeline Step base class (FINAL / FROZEN)

    Responsibility (only):
      1. orchestration: read ctx, call engine, write ctx
      2. step-level time boundary

    Rules:
      - engines own semantics, steps never compute
      - Instrumentation is an optional cross-cutting concern
      - step behaviour never depends on whether inst exists
    """

    stage: str = ''  # e.g. "feature_clean"

    def __init__(self, inst: Instrumentation | None = None):
        # inst is always usable (no-op semantics)
        self.inst: Instrumentation | NoOpInstrumentation = (
            inst if inst is not None else NoOpInstrumentation()
        )

    @property
    def step_name(self) -> str:
        """Class name is the step name."""
        return self.__class__.__name__

    def timed(self):
        """
        Leaf timer wrapping the whole body of `run`.
        """
        return self.inst.timer(self.step_name)

    def require(self, ctx: Any, *slots: str) -> None:
        """Upstream slots must be filled; a gap means the step order is broken."""
        empty = [s for s in slots if getattr(ctx, s, None) is None]
        if empty:
            raise PipelineError(
                f"[{self.step_name}] upstream slot(s) not set: {empty}"
            )

    def run(self, ctx: Any) -> Any:
        raise NotImplementedError
