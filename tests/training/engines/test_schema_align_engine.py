#!filepath: tests/training/engines/test_schema_align_engine.py
import numpy as np
import pandas as pd
import pytest

from exercise_quality.training.engines.feature_clean_engine import FeatureCleanEngine
from exercise_quality.training.engines.schema_align_engine import SchemaAlignEngine
from exercise_quality.training.schema import DropReason, FeatureSchema
from exercise_quality.utils.errors import SchemaMismatchError


@pytest.fixture
def schema() -> FeatureSchema:
    return FeatureSchema(
        label="classe",
        features=("roll_belt", "pitch_belt", "yaw_belt"),
        dropped={"user_name": DropReason.IDENTIFIER},
    )


def test_keeps_only_schema_features(schema):
    test = pd.DataFrame(
        {
            "user_name": ["pedro", "jeremy"],
            "yaw_belt": [1.0, 2.0],
            "roll_belt": [3.0, 4.0],
            "pitch_belt": [5.0, 6.0],
            "problem_id": [1, 2],
        }
    )

    aligned, missing = SchemaAlignEngine().align(test, schema)

    assert set(aligned.columns) == set(schema.features)
    assert missing == []
    assert "classe" not in aligned.columns
    assert "problem_id" not in aligned.columns


def test_reports_absent_features_without_filling(schema):
    test = pd.DataFrame({"roll_belt": [1.0], "yaw_belt": [2.0]})

    aligned, missing = SchemaAlignEngine().align(test, schema)

    assert missing == ["pitch_belt"]
    assert "pitch_belt" not in aligned.columns


def test_all_missing_test_column_is_still_kept(schema):
    # missingness is judged on train only
    test = pd.DataFrame(
        {
            "roll_belt": [np.nan, np.nan],
            "pitch_belt": [1.0, 2.0],
            "yaw_belt": [3.0, 4.0],
        }
    )

    aligned, missing = SchemaAlignEngine().align(test, schema)

    assert "roll_belt" in aligned.columns
    assert missing == []


def test_text_numbers_are_coerced(schema):
    test = pd.DataFrame(
        {
            "roll_belt": ["1.5", "2.5"],
            "pitch_belt": [1.0, 2.0],
            "yaw_belt": [3, 4],
        }
    )

    aligned, _ = SchemaAlignEngine().align(test, schema)

    assert aligned["roll_belt"].tolist() == [1.5, 2.5]


def test_non_numeric_feature_is_rejected(schema):
    test = pd.DataFrame(
        {
            "roll_belt": ["left", "right"],
            "pitch_belt": [1.0, 2.0],
            "yaw_belt": [3.0, 4.0],
        }
    )

    with pytest.raises(SchemaMismatchError):
        SchemaAlignEngine().align(test, schema)


def test_train_and_test_share_the_feature_set(sensor_frame, unlabelled_frame):
    test, _ = unlabelled_frame
    schema, _ = FeatureCleanEngine().clean(sensor_frame, label="classe")

    aligned, missing = SchemaAlignEngine().align(test, schema)
    clean_train = schema.project(sensor_frame)

    assert missing == []
    assert set(aligned.columns) == set(clean_train.columns) - {"classe"}
    assert len(aligned) == len(test)
