import logging
import os

from sudoku.common.constants import LOG_DIR_ENV_VAR, LOG_LEVEL_ENV_VAR
from sudoku.utils.log import get_logger


def test_loggers_share_the_package_namespace():
    assert get_logger().name == "sudoku"
    assert get_logger("sudoku.engine.generator").name == "sudoku.engine.generator"
    assert get_logger("thirdparty").name == "sudoku.thirdparty"


def test_single_stream_handler():
    root = logging.getLogger("sudoku")
    for name in ("a", "b", "a"):
        get_logger(name)
        own = [h for h in root.handlers if h.get_name() == "sudoku.stderr"]
        assert len(own) == 1
        assert type(own[0]) is logging.StreamHandler
    assert root.propagate is False


def test_level_follows_environment(monkeypatch):
    monkeypatch.setenv(LOG_LEVEL_ENV_VAR, "debug")
    get_logger(__name__)
    assert logging.getLogger("sudoku").level == logging.DEBUG

    monkeypatch.setenv(LOG_LEVEL_ENV_VAR, "nonsense")
    get_logger(__name__)
    assert logging.getLogger("sudoku").level == logging.WARNING

    monkeypatch.delenv(LOG_LEVEL_ENV_VAR)
    get_logger(__name__)
    assert logging.getLogger("sudoku").level == logging.WARNING


def test_explicit_level():
    logger = get_logger("explicit", level="error")
    assert logger.level == logging.ERROR


def test_worker_logger_writes_to_log_dir(tmp_path, monkeypatch):
    monkeypatch.setenv(LOG_DIR_ENV_VAR, str(tmp_path / "logs"))
    logger = get_logger("worker_test", level="INFO", in_ray_actor=True)
    get_logger("worker_test", in_ray_actor=True)
    file_handlers = [h for h in logger.handlers if isinstance(h, logging.FileHandler)]
    assert len(file_handlers) == 1

    logger.info("hello from a worker")
    file_handlers[0].flush()
    with open(os.path.join(tmp_path, "logs", "sudoku.worker_test.log"), encoding="utf-8") as f:
        assert "hello from a worker" in f.read()

    logger.removeHandler(file_handlers[0])
    file_handlers[0].close()


def test_driver_logger_has_no_file_handler(tmp_path, monkeypatch):
    monkeypatch.setenv(LOG_DIR_ENV_VAR, str(tmp_path))
    logger = get_logger("driver_test")
    assert not any(isinstance(h, logging.FileHandler) for h in logger.handlers)
