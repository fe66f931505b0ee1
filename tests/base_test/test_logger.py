#!filepath: tests/base_test/test_logger.py
import pytest
from loguru import logger

from exercise_quality.config.log_config import LogConfig
from exercise_quality.utils.logger import init_logging, logs


def test_init_logging_file_sink(tmp_path):
    log_dir = tmp_path / "logs"

    init_logging(LogConfig(dir=str(log_dir), level="DEBUG"))
    logs.info("[Test] hello file sink")
    logger.remove()

    files = list(log_dir.glob("*.log"))
    assert len(files) == 1
    assert "[Test] hello file sink" in files[0].read_text(encoding="utf-8")


def test_init_logging_console_only(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    init_logging(LogConfig(dir=None))
    logs.info("console only")
    logger.remove()

    assert list(tmp_path.iterdir()) == []


def test_catch_logs_and_reraises():
    captured = []
    logger.add(lambda msg: captured.append(str(msg)))

    @logs.catch(msg="fit failed", log_time=False)
    def fit():
        raise ValueError("bad")

    with pytest.raises(ValueError):
        fit()

    assert any("[ERROR] fit: fit failed" in m for m in captured)
