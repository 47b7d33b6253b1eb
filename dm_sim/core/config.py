"""Simulator configuration management."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass
class SimConfig:
    """Persistent simulator configuration."""
    trace_tolerance: float = 1e-10
    max_qubits: int = 10
    precision: int = 4
    log_level: str = "WARNING"

    _config_dir: Path = field(
        default_factory=lambda: Path.home() / ".dm_sim",
        repr=False)

    @property
    def config_path(self) -> Path:
        return self._config_dir / "config.json"

    def to_dict(self) -> dict:
        return {
            "trace_tolerance": self.trace_tolerance,
            "max_qubits": self.max_qubits,
            "precision": self.precision,
            "log_level": self.log_level,
        }

    def save(self):
        self._config_dir.mkdir(parents=True, exist_ok=True)
        with open(self.config_path, 'w', encoding='utf-8') as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def load(cls, config_dir: Path | str | None = None) -> SimConfig:
        config = cls() if config_dir is None else cls(_config_dir=Path(config_dir))
        if config.config_path.exists():
            try:
                with open(config.config_path, 'r', encoding='utf-8') as f:
                    data = json.load(f)
                for key, value in data.items():
                    if hasattr(config, key) and not key.startswith('_'):
                        setattr(config, key, value)
            except (json.JSONDecodeError, OSError):
                logger.warning("Could not read %s, using defaults",
                               config.config_path, exc_info=True)
        config._check_log_level()
        return config

    def _check_log_level(self):
        level = str(self.log_level).upper()
        if not isinstance(logging.getLevelName(level), int):
            logger.warning("Unknown log_level %r, using WARNING", self.log_level)
            level = "WARNING"
        self.log_level = level
