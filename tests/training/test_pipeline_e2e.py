#!filepath: tests/training/test_pipeline_e2e.py
import urllib.request

import pytest

from exercise_quality.config.app_config import AppConfig
from exercise_quality.config.log_config import LogConfig
from exercise_quality.config.training_config import TrainingConfig
from exercise_quality.observability.instrumentation import Instrumentation
from exercise_quality.utils.errors import DatasetFetchError
from exercise_quality.workflows.offline_training import build_offline_training


@pytest.fixture
def offline(monkeypatch):
    def _no_network(*args, **kwargs):
        raise OSError("network disabled in tests")

    monkeypatch.setattr(urllib.request, "urlopen", _no_network)


@pytest.fixture
def cfg() -> AppConfig:
    return AppConfig(
        log=LogConfig(dir=None),
        training=TrainingConfig(n_trees=50, n_jobs=1, write_prediction_files=True),
    )


@pytest.fixture
def seeded_cache(write_pml_csv, sensor_frame, unlabelled_frame):
    test, _ = unlabelled_frame
    write_pml_csv(sensor_frame, "pml-training.csv")
    write_pml_csv(test, "pml-testing.csv")
    return sensor_frame, test


def test_full_run(cfg, offline, seeded_cache, isolated_root):
    train, test = seeded_cache
    inst = Instrumentation()

    ctx = build_offline_training(cfg, inst=inst).run("e2e")

    # cleaning
    assert "classe" in ctx.clean_train.columns
    assert "classe" not in ctx.aligned_test.columns
    assert set(ctx.clean_train.columns) - {"classe"} == set(ctx.aligned_test.columns)
    assert len(ctx.schema.features) == 20

    # partition
    assert len(ctx.train_X) == 700
    assert len(ctx.valid_X) == 300
    assert set(ctx.train_X.index).isdisjoint(ctx.valid_X.index)

    # model
    assert len(ctx.model.cv_scores) == 5
    assert int(ctx.evaluation.confusion.values.sum()) == 300
    assert ctx.evaluation.accuracy > 0.9
    assert ctx.evaluation.out_of_sample_error == pytest.approx(1.0 - ctx.evaluation.accuracy)
    assert ctx.metrics["accuracy"] == ctx.evaluation.accuracy

    # predictions
    assert len(ctx.predictions) == len(test) == 20
    assert set(ctx.predictions) <= {"A", "B", "C", "D", "E"}
    assert list(ctx.predictions.index) == list(test.index)

    # outputs
    reports = isolated_root / "runs" / "e2e" / "reports"
    assert ctx.report_path == reports / "report.md"
    for name in (
        "report.md",
        "class_distribution.png",
        "missingness.png",
        "correlation.png",
        "variable_importance.png",
    ):
        assert (reports / name).exists()
    assert len(ctx.prediction_files) == 20

    recorded = inst.metrics.metrics
    assert recorded["raw_train_rows"] == len(train) == 1000
    assert recorded["raw_test_rows"] == 20
    assert recorded["n_features"] == 20
    assert recorded["cv_accuracy_mean"] == pytest.approx(ctx.model.cv_mean, abs=1e-6)
    assert recorded["accuracy"] == pytest.approx(ctx.evaluation.accuracy, abs=1e-6)

    assert list(inst.timeline) == [
        "DatasetLoadStep",
        "FeatureCleanStep",
        "SchemaAlignStep",
        "PartitionStep",
        "ModelTrainStep",
        "ModelEvaluateStep",
        "PredictStep",
        "ReportStep",
        "PredictionWriteStep",
    ]


def test_predictions_follow_the_sensor_signal(
    cfg, offline, write_pml_csv, sensor_frame, sensor_frame_factory
):
    test, truth = sensor_frame_factory(40, seed=9, labelled=False)
    write_pml_csv(sensor_frame, "pml-training.csv")
    write_pml_csv(test, "pml-testing.csv")

    ctx = build_offline_training(cfg).run("signal")

    hits = sum(p == t for p, t in zip(ctx.predictions.tolist(), truth.tolist()))
    assert hits >= 36


def test_same_seed_same_run(cfg, offline, seeded_cache):
    a = build_offline_training(cfg).run("a")
    b = build_offline_training(cfg).run("b")

    assert a.model.cv_scores == b.model.cv_scores
    assert a.evaluation.accuracy == b.evaluation.accuracy
    assert a.predictions.tolist() == b.predictions.tolist()


def test_missing_cache_without_network_aborts(cfg, offline):
    with pytest.raises(DatasetFetchError):
        build_offline_training(cfg).run("offline")
