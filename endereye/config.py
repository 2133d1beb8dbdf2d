"""Runtime configuration for endereye."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from endereye.geometry.solver import DEFAULT_MIN_SEPARATION, DEFAULT_PARALLEL_TOLERANCE


class Language(Enum):
    EN = "en"
    ZH = "zh"


@dataclass
class EndereyeConfig:
    # Solver
    min_separation: float = DEFAULT_MIN_SEPARATION  # blocks
    parallel_tolerance: float = DEFAULT_PARALLEL_TOLERANCE

    # Output
    coordinate_decimals: int = 1
    distance_decimals: int = 0
    language: Language = Language.EN

    def __post_init__(self):
        if self.min_separation <= 0:
            raise ValueError("min_separation must be positive")
        if self.parallel_tolerance <= 0:
            raise ValueError("parallel_tolerance must be positive")
        if self.coordinate_decimals < 0 or self.distance_decimals < 0:
            raise ValueError("decimal counts must not be negative")

    def solver_options(self) -> dict[str, float]:
        return {
            "min_separation": self.min_separation,
            "parallel_tolerance": self.parallel_tolerance,
        }


def load_config_file(path: Path) -> dict:
    """Load config overrides from a TOML file. Returns empty dict if not found."""
    if not path.exists():
        return {}
    import tomllib
    return tomllib.loads(path.read_text())


def apply_overrides(config: EndereyeConfig, overrides: dict) -> EndereyeConfig:
    """Apply dict overrides (from TOML or CLI) onto a config.

    Unknown keys are ignored; known keys with bad values raise ValueError.
    """
    for key, value in overrides.items():
        if key == "language":
            if not isinstance(value, str):
                raise ValueError(f"language must be one of en, zh, got {value!r}")
            config.language = Language(value.lower().strip())
        elif key in ("min_separation", "parallel_tolerance"):
            if isinstance(value, int | float) and not isinstance(value, bool) and value > 0:
                setattr(config, key, float(value))
            else:
                raise ValueError(f"{key} must be a positive number, got {value!r}")
        elif key in ("coordinate_decimals", "distance_decimals"):
            if isinstance(value, int) and not isinstance(value, bool) and value >= 0:
                setattr(config, key, value)
            else:
                raise ValueError(f"{key} must be a non-negative integer, got {value!r}")
    return config
