"""
Engine settings loaded from a ``scical.toml`` file.

Example::

    [engine]
    max_depth = 50
    angle_mode = "degrees"
    strict_characters = true
"""

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from scical.core.errors import ConfigError
from scical.core.expression_lang.constants import MAX_RECURSION_DEPTH
from scical.core.ir.expressions import AngleMode

logger = logging.getLogger(__name__)

SETTINGS_FILENAME = "scical.toml"


@dataclass(frozen=True)
class EngineSettings:
    """Tunables for tokenizing, parsing, and evaluation."""

    max_depth: int = MAX_RECURSION_DEPTH
    angle_mode: AngleMode = AngleMode.RADIANS
    strict_characters: bool = False  # reject unknown characters instead of skipping them


def settings_from_dict(data: dict[str, Any]) -> EngineSettings:
    """Build settings from the ``[engine]`` table. Unknown keys are ignored."""
    defaults = EngineSettings()

    max_depth = data.get("max_depth", defaults.max_depth)
    if isinstance(max_depth, bool) or not isinstance(max_depth, int) or max_depth < 1:
        raise ConfigError(f"engine.max_depth must be a positive integer, got {max_depth!r}")

    angle_mode_raw = data.get("angle_mode", defaults.angle_mode.value)
    try:
        angle_mode = AngleMode(str(angle_mode_raw).lower())
    except ValueError:
        raise ConfigError(
            f"engine.angle_mode must be 'degrees' or 'radians', got {angle_mode_raw!r}"
        ) from None

    strict = data.get("strict_characters", defaults.strict_characters)
    if not isinstance(strict, bool):
        raise ConfigError(f"engine.strict_characters must be true or false, got {strict!r}")

    return EngineSettings(max_depth=max_depth, angle_mode=angle_mode, strict_characters=strict)


def load_settings(path: Path) -> EngineSettings:
    """Load settings from a TOML file."""
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e

    settings = settings_from_dict(data.get("engine", {}))
    logger.debug("Loaded settings from %s: %s", path, settings)
    return settings


def find_settings(start_dir: Path | None = None) -> EngineSettings:
    """Load ``scical.toml`` from a directory, or defaults when there is none."""
    path = (start_dir or Path.cwd()) / SETTINGS_FILENAME
    if path.exists():
        return load_settings(path)
    return EngineSettings()
