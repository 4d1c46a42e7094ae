"""
Settings for the command-line tool.

Packaged defaults (config.default.yaml) are deep-merged with an optional
user file, then validated into a Settings model. A missing or unreadable
file contributes nothing; values that are present but invalid raise
ConfigError.
"""

from pathlib import Path
from typing import Any, Dict, Optional
import copy
import logging

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from cubby.errors import ConfigError

logger = logging.getLogger(__name__)

PKG_ROOT = Path(__file__).resolve().parent
DEFAULT_CFG_PATH = PKG_ROOT / "config.default.yaml"
USER_CFG_PATH = Path.home() / ".config" / "cubby" / "config.yaml"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _safe_load(path: Path) -> Dict[str, Any]:
    try:
        if path.exists():
            data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
            if isinstance(data, dict):
                return data
            logger.warning("Ignoring %s: top level is not a mapping", path)
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Ignoring unreadable config %s: %s", path, e)
    return {}


def _deep_merge(a: Dict[str, Any], b: Dict[str, Any]) -> Dict[str, Any]:
    out = copy.deepcopy(a)
    for k, v in (b or {}).items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = _deep_merge(out[k], v)
        else:
            out[k] = copy.deepcopy(v)
    return out


def load_config(
    user_path: Optional[Path] = None,
    default_path: Optional[Path] = None,
) -> Dict[str, Any]:
    """Defaults merged with user overrides, as a plain dict."""
    dpath = Path(default_path) if default_path else DEFAULT_CFG_PATH
    upath = Path(user_path) if user_path else USER_CFG_PATH

    defaults = _safe_load(dpath)
    user = _safe_load(upath)
    return _deep_merge(defaults, user)


# =============================================================================
# SETTINGS MODEL
# =============================================================================

class ProjectSettings(BaseModel):
    name: str = "My Template"
    tempo: float = Field(default=120, gt=0)
    sample_rate: int = Field(default=48000, gt=0)
    output: str = "template.RPP"


class ReabankSettings(BaseModel):
    directory: Optional[str] = None
    pattern: str = "*.reabank"


class LoggingSettings(BaseModel):
    level: str = "WARNING"

    @field_validator('level')
    @classmethod
    def validate_level(cls, v: str) -> str:
        v = v.upper()
        if v not in LOG_LEVELS:
            raise ValueError(f"Log level must be one of {LOG_LEVELS}. Got: '{v}'")
        return v


class Settings(BaseModel):
    project: ProjectSettings = Field(default_factory=ProjectSettings)
    reabank: ReabankSettings = Field(default_factory=ReabankSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


def load_settings(
    user_path: Optional[Path] = None,
    default_path: Optional[Path] = None,
) -> Settings:
    """
    Load and validate settings.

    Raises:
        ConfigError: A setting has the wrong type or an out-of-range value
    """
    cfg = load_config(user_path, default_path)
    try:
        return Settings.model_validate(cfg)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e
