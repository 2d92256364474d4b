"""
Configuration of the expression compiler.

Options are read from a YAML file (section `compiler:`) and can be
overridden through environment variables.

Example condcss.yaml:

    compiler:
      concat_limit: 20
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Optional

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .errors import ConfigError

logger = logging.getLogger(__name__)

_yaml = YAML(typ="safe")

DEFAULT_CONFIG_NAME = "condcss.yaml"
CONCAT_LIMIT_ENV = "CONDCSS_CONCAT_LIMIT"

# Длина цепочки конкатенаций, после которой открывается новая группа
DEFAULT_CONCAT_LIMIT = 20


@dataclass(frozen=True)
class CompilerOptions:
    concat_limit: int = DEFAULT_CONCAT_LIMIT

    def __post_init__(self):
        if isinstance(self.concat_limit, bool) or not isinstance(self.concat_limit, int):
            raise ConfigError(f"concat_limit must be an integer, got {self.concat_limit!r}")
        if self.concat_limit < 1:
            raise ConfigError(f"concat_limit must be >= 1, got {self.concat_limit}")

    @classmethod
    def from_dict(cls, data: dict) -> CompilerOptions:
        """Create options from the `compiler:` mapping, rejecting unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown compiler option(s): {', '.join(unknown)}")
        return cls(**data)


def _read_yaml_map(path: Path) -> dict:
    """Reads a YAML file and returns a mapping."""
    try:
        raw = _yaml.load(path.read_text(encoding="utf-8")) or {}
    except YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigError(f"YAML must be a mapping: {path}")
    return raw


def _env_override(options: CompilerOptions) -> CompilerOptions:
    raw: Optional[str] = os.environ.get(CONCAT_LIMIT_ENV)
    if raw is None or not raw.strip():
        return options
    try:
        limit = int(raw.strip())
    except ValueError:
        raise ConfigError(f"{CONCAT_LIMIT_ENV} must be an integer, got {raw!r}")
    return replace(options, concat_limit=limit)


def load_options(path: Optional[Path] = None) -> CompilerOptions:
    """
    Load compiler options.

    Args:
        path: YAML config file. A missing file means defaults.

    Returns:
        CompilerOptions with environment overrides applied
    """
    data: dict[str, Any] = {}
    if path is not None and path.is_file():
        raw = _read_yaml_map(path)
        section = raw.get("compiler", {}) or {}
        if not isinstance(section, dict):
            raise ConfigError(f"'compiler' section must be a mapping: {path}")
        data = dict(section)
        logger.debug("Loaded compiler options from %s: %s", path, data)

    return _env_override(CompilerOptions.from_dict(data))


__all__ = [
    "CompilerOptions",
    "load_options",
    "DEFAULT_CONFIG_NAME",
    "DEFAULT_CONCAT_LIMIT",
    "CONCAT_LIMIT_ENV",
]
