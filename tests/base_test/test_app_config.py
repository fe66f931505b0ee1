#!filepath: tests/base_test/test_app_config.py
import pytest
import yaml
from pydantic import ValidationError

from exercise_quality.config import AppConfig, DataConfig, DownloadBackend, LogConfig, TrainingConfig
from exercise_quality.config.app_config import default_config_path


@pytest.fixture
def sample_config_file(tmp_path):
    data = {
        "log": {"dir": None, "level": "DEBUG"},
        "data": {"label_column": "classe", "download_backend": "curl"},
        "training": {
            "seed": 7,
            "cv_folds": 3,
            "max_features_grid": ["sqrt", 8],
        },
    }
    config_file = tmp_path / "config.yml"
    config_file.write_text(yaml.safe_dump(data), encoding="utf-8")
    return config_file


def test_packaged_defaults():
    """base.yml carries the reference analysis constants"""
    cfg = AppConfig.load()

    assert isinstance(cfg.log, LogConfig)
    assert isinstance(cfg.data, DataConfig)
    assert isinstance(cfg.training, TrainingConfig)

    assert cfg.data.train_url.endswith("pml-training.csv")
    assert cfg.data.test_url.endswith("pml-testing.csv")
    assert cfg.data.na_values == ["NA", "#DIV/0!", ""]
    assert cfg.data.label_column == "classe"

    t = cfg.training
    assert t.missing_threshold == 0.6
    assert t.id_prefix_columns == 7
    assert t.freq_cut == pytest.approx(95 / 5)
    assert t.unique_cut == 10.0
    assert t.train_fraction == 0.7
    assert t.cv_folds == 5
    assert t.n_trees == 100
    assert t.seed == 12345


def test_packaged_defaults_match_model_defaults():
    assert AppConfig.load().training == TrainingConfig()
    assert AppConfig.load().data == DataConfig()


def test_load_overrides(sample_config_file):
    cfg = AppConfig.load(path=str(sample_config_file))

    assert cfg.log.level == "DEBUG"
    assert cfg.log.dir is None
    assert cfg.data.download_backend == DownloadBackend.CURL
    assert cfg.training.seed == 7
    assert cfg.training.cv_folds == 3
    assert cfg.training.max_features_grid == ["sqrt", 8]
    # untouched keys keep defaults
    assert cfg.training.train_fraction == 0.7


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        AppConfig.load(path=str(tmp_path / "nope.yml"))


def test_empty_file_gives_defaults(tmp_path):
    f = tmp_path / "empty.yml"
    f.write_text("", encoding="utf-8")

    assert AppConfig.load(path=str(f)) == AppConfig()


def test_default_config_path_is_cwd_independent(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    assert default_config_path().endswith("base.yml")
    assert AppConfig.load().training.seed == 12345


@pytest.mark.parametrize(
    "override",
    [
        {"train_fraction": 1.0},
        {"train_fraction": 0.0},
        {"missing_threshold": 1.5},
        {"cv_folds": 1},
        {"n_trees": 0},
        {"max_features_grid": []},
    ],
)
def test_invalid_training_values(override):
    with pytest.raises(ValidationError):
        TrainingConfig(**override)
