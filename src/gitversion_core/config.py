"""Configuration loading for git version resolution.

Config is looked up in this order (first hit wins):

1. An explicit path passed by the caller
2. ``GITVERSION_CONFIG_PATH`` environment variable
3. ``.gitversion.toml`` in the start directory
4. ``[tool.gitversion]`` in ``pyproject.toml`` in the start directory
5. Built-in defaults
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, Literal, Optional

try:
    import tomllib
except ModuleNotFoundError:  # pragma: no cover
    import tomli as tomllib  # type: ignore

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import ConfigError
from .locator import DEFAULT_MARKER
from .vcs.base import DescribeHint

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "GITVERSION_CONFIG_PATH"
CONFIG_FILENAME = ".gitversion.toml"
PYPROJECT_FILENAME = "pyproject.toml"


class DescribeOptions(BaseModel):
    model_config = ConfigDict(extra="forbid")

    long: bool = False
    always: bool = False
    tags: bool = False
    match: Optional[str] = None

    def to_hint(self) -> DescribeHint:
        return DescribeHint(long=self.long, always=self.always, tags=self.tags, match=self.match)


class LogOptions(BaseModel):
    model_config = ConfigDict(extra="forbid")

    verbosity: Literal["debug", "info", "warning", "error"] = "warning"


class GitVersionConfig(BaseModel):
    """Effective configuration."""

    model_config = ConfigDict(extra="forbid")

    marker: str = Field(default=DEFAULT_MARKER, min_length=1)
    git_executable: str = Field(default="git", min_length=1)
    describe: DescribeOptions = Field(default_factory=DescribeOptions)
    log: LogOptions = Field(default_factory=LogOptions)


def _read_toml(path: Path) -> Dict[str, Any]:
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigError(f"Cannot read config: {exc}", path) from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML: {exc}", path) from exc


def _validate(data: Dict[str, Any], path: Optional[Path]) -> GitVersionConfig:
    try:
        return GitVersionConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(str(exc), path) from exc


def resolve_config_path(start_dir: Path, config_path: Optional[Path] = None) -> Optional[Path]:
    """Return the dedicated config file to load, if any.

    Explicit and environment paths are relative to the current directory,
    not to start_dir.
    """
    raw = config_path or os.getenv(CONFIG_ENV_VAR)
    if raw:
        path = Path(raw).resolve()
        if not path.exists():
            raise ConfigError("Config file does not exist", path)
        return path
    candidate = Path(start_dir) / CONFIG_FILENAME
    if candidate.is_file():
        return candidate
    return None


def load_config(start_dir: Optional[Path] = None, config_path: Optional[Path] = None) -> GitVersionConfig:
    """Load the effective config for a start directory."""
    root = Path(start_dir) if start_dir is not None else Path.cwd()
    path = resolve_config_path(root, config_path)
    if path is not None:
        logger.debug("Loading config from %s", path)
        return _validate(_read_toml(path), path)

    pyproject = root / PYPROJECT_FILENAME
    if pyproject.is_file():
        section = _read_toml(pyproject).get("tool", {}).get("gitversion")
        if section is not None:
            logger.debug("Loading config from [tool.gitversion] in %s", pyproject)
            return _validate(section, pyproject)

    return GitVersionConfig()


def write_default_config(path: Path, force: bool = False) -> Path:
    """Write the default config as TOML. Refuses to overwrite unless forced."""
    if path.exists() and not force:
        raise ConfigError("Config file already exists (use --force to overwrite)", path)
    data = GitVersionConfig().model_dump(exclude_none=True)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(tomli_w.dumps(data), encoding="utf-8")
    return path
