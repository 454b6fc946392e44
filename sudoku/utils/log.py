"""Logging helpers."""
import logging
import os
import sys
from typing import Optional

from sudoku.common.constants import LOG_DIR_ENV_VAR, LOG_LEVEL_ENV_VAR

_LOG_FORMAT = "%(levelname)s %(asctime)s [%(filename)s:%(lineno)d] %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_ROOT_NAME = "sudoku"
_HANDLER_NAME = "sudoku.stderr"


def _resolve_level(level: Optional[str]) -> int:
    level = (level or os.environ.get(LOG_LEVEL_ENV_VAR, "WARNING")).upper()
    value = logging.getLevelName(level)
    return value if isinstance(value, int) else logging.WARNING


def get_logger(
    name: Optional[str] = None, level: Optional[str] = None, in_ray_actor: bool = False
) -> logging.Logger:
    """Get a logger under the ``sudoku`` namespace.

    Args:
        name (`str`): Logger name, usually ``__name__``. Defaults to the package logger.
        level (`str`): Log level. Falls back to ``SUDOKU_LOG_LEVEL`` and then ``WARNING``.
        in_ray_actor (`bool`): Whether the caller runs inside a Ray worker. Worker loggers
            also write to ``<SUDOKU_LOG_DIR>/<name>.log`` when that variable is set, since
            their stderr is not shown in the terminal.

    Returns:
        `logging.Logger`: The configured logger.
    """
    if name is None:
        name = _ROOT_NAME
    elif name != _ROOT_NAME and not name.startswith(_ROOT_NAME + "."):
        name = f"{_ROOT_NAME}.{name}"
    logger = logging.getLogger(name)

    root = logging.getLogger(_ROOT_NAME)
    if not any(h.get_name() == _HANDLER_NAME for h in root.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(logging.Formatter(_LOG_FORMAT, datefmt=_DATE_FORMAT))
        root.addHandler(handler)
        root.propagate = False
    root.setLevel(_resolve_level(None))

    if level is not None:
        logger.setLevel(_resolve_level(level))

    log_dir = os.environ.get(LOG_DIR_ENV_VAR, "")
    if in_ray_actor and log_dir and not any(
        isinstance(h, logging.FileHandler) for h in logger.handlers
    ):
        os.makedirs(log_dir, exist_ok=True)
        file_handler = logging.FileHandler(
            os.path.join(log_dir, f"{name}.log"), encoding="utf-8"
        )
        file_handler.setFormatter(logging.Formatter(_LOG_FORMAT, datefmt=_DATE_FORMAT))
        logger.addHandler(file_handler)
    return logger
