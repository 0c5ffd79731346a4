"""Runtime settings, read from environment variables.

Variables:
- DURRRRRENV_CONFIG_DIR: directory holding allowed.json (overrides the rest)
- XDG_CONFIG_HOME: base config dir; the store lives in <base>/durrrrrenv
- DURRRRRENV_ENV_FILE: name of the environment file (default .local_environment)
- DURRRRRENV_SEARCH_DEPTH: how many directories to search, start included (default 5)
- DURRRRRENV_LOG_LEVEL: default log level (default WARNING)
"""

import os
from pathlib import Path
from typing import Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

APP_NAME = "durrrrrenv"
TRUST_FILENAME = "allowed.json"
DEFAULT_ENV_FILENAME = ".local_environment"
DEFAULT_SEARCH_DEPTH = 5


class Settings(BaseModel):
    """Resolved settings for one invocation."""
    config_dir: Path
    env_filename: str = DEFAULT_ENV_FILENAME
    search_depth: int = Field(DEFAULT_SEARCH_DEPTH, ge=1)
    log_level: str = "WARNING"

    model_config = ConfigDict(extra="forbid", frozen=True)

    @field_validator("env_filename")
    @classmethod
    def validate_env_filename(cls, v: str) -> str:
        """Environment file name must be a bare file name."""
        if not v or "/" in v or v in (".", ".."):
            raise ValueError(f"env_filename must be a plain file name, got '{v}'")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level '{v}'")
        return level

    @property
    def trust_path(self) -> Path:
        """Location of the persisted trust document."""
        return self.config_dir / TRUST_FILENAME


def default_config_dir(environ: Optional[Mapping[str, str]] = None) -> Path:
    """Per-user application config directory."""
    env = os.environ if environ is None else environ
    override = env.get("DURRRRRENV_CONFIG_DIR")
    if override:
        return Path(override).expanduser()
    base = env.get("XDG_CONFIG_HOME") or os.path.expanduser("~/.config")
    return Path(base) / APP_NAME


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build settings from environment variables.

    Raises:
        ValueError: If a variable holds an invalid value
    """
    env = os.environ if environ is None else environ
    data = {"config_dir": default_config_dir(env)}
    if env.get("DURRRRRENV_ENV_FILE"):
        data["env_filename"] = env["DURRRRRENV_ENV_FILE"]
    if env.get("DURRRRRENV_SEARCH_DEPTH"):
        data["search_depth"] = env["DURRRRRENV_SEARCH_DEPTH"]
    if env.get("DURRRRRENV_LOG_LEVEL"):
        data["log_level"] = env["DURRRRRENV_LOG_LEVEL"]
    try:
        return Settings(**data)
    except ValidationError as e:
        raise ValueError(f"Invalid durrrrrenv settings: {e}") from e
