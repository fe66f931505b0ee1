#!filepath: tests/conftest.py
from __future__ import annotations

from pathlib import Path
from typing import Tuple

import matplotlib
import numpy as np
import pandas as pd
import pytest
from loguru import logger

from exercise_quality.config.app_config import AppConfig
from exercise_quality.config.log_config import LogConfig
from exercise_quality.config.training_config import TrainingConfig
from exercise_quality.utils.path import PathManager

matplotlib.use("Agg")

CLASSES = ["A", "B", "C", "D", "E"]
SUBJECTS = ["adelmo", "carlitos", "charles", "eurico", "jeremy", "pedro"]
BOOKKEEPING = [
    "Unnamed: 0",
    "user_name",
    "raw_timestamp_part_1",
    "raw_timestamp_part_2",
    "cvtd_timestamp",
    "new_window",
    "num_window",
]
SPARSE = ["kurtosis_roll_belt", "skewness_yaw_arm", "max_picth_dumbbell"]


@pytest.fixture(autouse=True)
def disable_file_logger():
    logger.remove()
    logger.add(lambda msg: None)
    yield


@pytest.fixture(autouse=True)
def isolated_root(tmp_path: Path):
    PathManager.set_root(tmp_path)
    yield tmp_path
    PathManager.set_root(None)


def make_sensor_frame(
    n_rows: int,
    *,
    n_features: int = 20,
    seed: int = 0,
    labelled: bool = True,
) -> Tuple[pd.DataFrame, np.ndarray]:
    """
    Layout of pml-*.csv in miniature:
        7 bookkeeping columns, 3 sparse summary columns,
        `n_features` sensor readings, then classe (train) / problem_id (test).

    sensor_0 / sensor_1 separate the classes linearly, the rest is noise.
    Returns (frame, true labels).
    """
    rng = np.random.default_rng(seed)
    labels = rng.permutation(np.resize(CLASSES, n_rows))
    k = np.array([CLASSES.index(c) for c in labels], dtype=float)

    data = {
        "Unnamed: 0": np.arange(1, n_rows + 1),
        "user_name": rng.choice(SUBJECTS, n_rows),
        "raw_timestamp_part_1": 1322489600 + np.arange(n_rows),
        "raw_timestamp_part_2": rng.integers(0, 999999, n_rows),
        "cvtd_timestamp": ["05/12/2011 11:23"] * n_rows,
        "new_window": np.where(np.arange(n_rows) % 50 == 0, "yes", "no"),
        "num_window": np.arange(n_rows) // 25 + 1,
    }

    for name in SPARSE:
        col = np.full(n_rows, np.nan)
        summary_rows = np.arange(n_rows) % 50 == 0
        col[summary_rows] = rng.normal(size=int(summary_rows.sum()))
        data[name] = col

    for i in range(n_features):
        if i == 0:
            data[f"sensor_{i}"] = k * 10.0 + rng.normal(0.0, 1.0, n_rows)
        elif i == 1:
            data[f"sensor_{i}"] = -k * 5.0 + rng.normal(0.0, 1.0, n_rows)
        else:
            data[f"sensor_{i}"] = rng.normal(0.0, 1.0, n_rows)

    df = pd.DataFrame(data)
    if labelled:
        df["classe"] = labels
    else:
        df["problem_id"] = np.arange(1, n_rows + 1)

    return df, labels


@pytest.fixture
def sensor_frame() -> pd.DataFrame:
    df, _ = make_sensor_frame(1000, seed=1)
    return df


@pytest.fixture
def unlabelled_frame() -> Tuple[pd.DataFrame, np.ndarray]:
    return make_sensor_frame(20, seed=2, labelled=False)


@pytest.fixture
def app_config() -> AppConfig:
    return AppConfig(
        log=LogConfig(dir=None),
        training=TrainingConfig(n_jobs=1),
    )


@pytest.fixture
def write_pml_csv(isolated_root: Path):
    """
    Seed the data cache so the loader never goes to the network.
    Sparse columns are written with the raw missing tokens.
    """

    def _write(frame: pd.DataFrame, filename: str) -> Path:
        out = frame.copy()
        for name in SPARSE:
            raw = out[name].map(lambda v: "" if pd.isna(v) else f"{v:.4f}").astype(object)
            raw.iloc[1::7] = "#DIV/0!"
            raw.iloc[2::7] = "NA"
            out[name] = raw

        data_dir = isolated_root / "data"
        data_dir.mkdir(parents=True, exist_ok=True)
        path = data_dir / filename
        out.to_csv(path, index=False)
        return path

    return _write


@pytest.fixture
def sensor_frame_factory():
    return make_sensor_frame
