# exercise_quality/training/pipeline.py
from __future__ import annotations

from typing import List

from exercise_quality import logs
from exercise_quality.config.app_config import AppConfig
from exercise_quality.observability.instrumentation import Instrumentation
from exercise_quality.pipeline.step import PipelineStep
from exercise_quality.training.context import TrainingContext
from exercise_quality.utils.path import PathManager


class TrainingPipeline:
    """
    TrainingPipeline (FINAL / FROZEN)

    Semantics:
    - Pipeline owns ordering, steps own semantics
    - strictly sequential, each step consumes the previous one's output
    - any exception aborts the run, there is no partial result
    """

    def __init__(
            self,
            *,
            steps: List[PipelineStep],
            pm: PathManager,
            inst: Instrumentation,
            cfg: AppConfig,
    ):
        self.steps = steps
        self.pm = pm
        self.inst = inst
        self.cfg = cfg

    def run(self, run_id: str) -> TrainingContext:
        logs.info(f"[TrainingPipeline] START run_id={run_id}")

        ctx = TrainingContext(
            run_id=run_id,
            cfg=self.cfg,
            inst=self.inst,
            run_dir=self.pm.run_dir(run_id),
        )

        for step in self.steps:
            logs.debug(f"[TrainingPipeline] -> {step.step_name}")
            ctx = step.run(ctx)

        self.inst.generate_timeline_report(run_id)

        logs.info(
            f"[TrainingPipeline] DONE run_id={run_id} "
            f"accuracy={ctx.metrics.get('accuracy', float('nan')):.4f}"
        )
        return ctx
