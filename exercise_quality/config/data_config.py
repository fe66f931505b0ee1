#!filepath: exercise_quality/config/data_config.py
from __future__ import annotations

from enum import Enum
from typing import List

from pydantic import BaseModel, Field


TRAIN_URL = "https://d396qusza40orc.cloudfront.net/predmachlearn/pml-training.csv"
TEST_URL = "https://d396qusza40orc.cloudfront.net/predmachlearn/pml-testing.csv"


class DownloadBackend(str, Enum):
    URLLIB = "urllib"
    CURL = "curl"


class DataConfig(BaseModel):
    """
    DataConfig (FINAL / FROZEN)

    Semantics:
      - where the two csv datasets come from
      - where they are cached
      - how missing values are spelled in them
    """

    train_url: str = TRAIN_URL
    test_url: str = TEST_URL

    # cache dir, relative paths anchored at project root
    data_dir: str = "data"

    # the three missingness tokens of the source csv
    na_values: List[str] = Field(
        default_factory=lambda: ["NA", "#DIV/0!", ""]
    )

    label_column: str = "classe"

    download_backend: DownloadBackend = DownloadBackend.URLLIB
    timeout: int = 60
