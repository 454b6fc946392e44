# -*- coding: utf-8 -*-
"""Configs for the Sudoku game."""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Dict, Optional

from omegaconf import OmegaConf

from sudoku.common.constants import (
    DEFAULT_SAVE_DIR,
    DEFAULT_SIZE,
    LOG_DIR_ENV_VAR,
    LOG_LEVEL_ENV_VAR,
    SAVE_DIR_ENV_VAR,
    SUPPORTED_SIZES,
    Difficulty,
    RemovalPolicy,
)
from sudoku.utils.log import get_logger

logger = get_logger(__name__)


@dataclass
class GeneratorConfig:
    """Configs for board generation."""

    size: int = DEFAULT_SIZE
    difficulty: str = "medium"
    # how removals are verified: `unchecked`, `solvable` or `unique`
    removal_policy: str = "unchecked"
    # seed for the generator's private random number generator
    seed: Optional[int] = None
    # boards larger than this are completed by racing parallel workers
    parallel_threshold: int = 16
    # number of racing workers, 0 means one per CPU, 1 disables the race
    num_workers: int = 0
    # search steps before an attempt is abandoned and reseeded
    # None means auto (50 * size^3 above 9x9, unlimited otherwise), 0 means unlimited
    max_search_steps: Optional[int] = None


@dataclass
class StorageConfig:
    """Configs for saved games."""

    # If not set, read from SUDOKU_SAVE_DIR, else `~/.sudoku/saves`
    save_dir: str = ""
    autosave: bool = True


@dataclass
class DisplayConfig:
    """Configs for terminal output."""

    color: bool = True


@dataclass
class LogConfig:
    """Configs for logger."""

    level: str = "WARNING"  # default log level (DEBUG, INFO, WARNING, ERROR)
    save_dir: str = ""  # only used by parallel workers


@dataclass
class Config:
    """Global Configuration"""

    generator: GeneratorConfig = field(default_factory=GeneratorConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    log: LogConfig = field(default_factory=LogConfig)

    def save(self, config_path: str) -> None:
        """Save config to file."""
        with open(config_path, "w", encoding="utf-8") as f:
            OmegaConf.save(self, f)

    def _check_generator(self) -> None:
        generator = self.generator
        if generator.size not in SUPPORTED_SIZES:
            raise ValueError(
                f"Unsupported board size {generator.size}, choose one of {list(SUPPORTED_SIZES)}"
            )
        try:
            Difficulty(generator.difficulty)
        except (KeyError, ValueError) as e:
            raise ValueError(f"Invalid difficulty: {generator.difficulty}") from e
        try:
            RemovalPolicy(generator.removal_policy)
        except (KeyError, ValueError) as e:
            raise ValueError(f"Invalid removal policy: {generator.removal_policy}") from e
        if generator.num_workers < 0:
            raise ValueError(f"`num_workers` must be >= 0, got {generator.num_workers}")
        if generator.num_workers == 0:
            generator.num_workers = os.cpu_count() or 1
            logger.info(f"Auto-detected and set num_workers: {generator.num_workers}")
        if generator.max_search_steps is not None and generator.max_search_steps < 0:
            raise ValueError(
                f"`max_search_steps` must be >= 0, got {generator.max_search_steps}"
            )
        if generator.removal_policy.lower() == "unique" and generator.size > 9:
            logger.warning(
                "`removal_policy` is set to `unique` for a large board, "
                "puzzle generation may be very slow."
            )

    def check_and_update(self) -> Config:
        """Validate the config and fill in automatic values."""
        self._check_generator()

        if not self.storage.save_dir:
            self.storage.save_dir = os.environ.get(SAVE_DIR_ENV_VAR, "") or DEFAULT_SAVE_DIR
        self.storage.save_dir = os.path.abspath(os.path.expanduser(self.storage.save_dir))

        self.log.level = self.log.level.upper()
        if self.log.level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Invalid log level: {self.log.level}")
        return self

    def get_envs(self) -> Dict[str, str]:
        """Get the environment variables from the config."""
        return {
            LOG_LEVEL_ENV_VAR: self.log.level,
            LOG_DIR_ENV_VAR: self.log.save_dir,
            SAVE_DIR_ENV_VAR: self.storage.save_dir,
        }


def load_config(config_path: str) -> Config:
    """Load the configuration from the given path."""
    schema = OmegaConf.structured(Config)
    yaml_config = OmegaConf.load(config_path)
    try:
        config = OmegaConf.merge(schema, yaml_config)
        return OmegaConf.to_object(config)
    except Exception as e:
        raise ValueError(f"Invalid configuration: {e}") from e
