# exercise_quality/training/steps/partition_step.py
from __future__ import annotations

from exercise_quality import logs
from exercise_quality.pipeline.step import PipelineStep
from exercise_quality.training.context import TrainingContext
from exercise_quality.training.engines.partition_engine import PartitionEngine


class PartitionStep(PipelineStep):
    """
    PartitionStep (FINAL / FROZEN)

    Contract:
    - consumes ctx.clean_train, ctx.schema
    - produces ctx.train_X / train_y / valid_X / valid_y
    - seed comes from cfg.training.seed, passed explicitly to the engine
    """

    stage = "partition"

    def __init__(self, *, engine: PartitionEngine, inst=None) -> None:
        super().__init__(inst=inst)
        self.engine = engine

    def run(self, ctx: TrainingContext) -> TrainingContext:
        self.require(ctx, "clean_train", "schema")
        cfg = ctx.cfg.training
        label = ctx.schema.label
        features = list(ctx.schema.features)

        with self.timed():
            part = self.engine.split(
                ctx.clean_train,
                label=label,
                train_fraction=cfg.train_fraction,
                seed=cfg.seed,
            )

        ctx.train_X = part.train[features]
        ctx.train_y = part.train[label]
        ctx.valid_X = part.validation[features]
        ctx.valid_y = part.validation[label]

        logs.info(
            f"[PartitionStep] train={len(part.train)} "
            f"validation={len(part.validation)} seed={cfg.seed}"
        )
        return ctx
