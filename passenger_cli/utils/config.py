import os
from pathlib import Path
from typing import Any

import tomli
from pydantic import BaseModel, ConfigDict, Field, PositiveInt

PROGRAM_NAME = "Phusion Passenger"
DEFAULT_PORT = 3000
STOP_TIMEOUT = 25
PID_SEARCH_DIRS = ("tmp/pids", ".")


def get_cache_dir() -> Path:
    xdg = os.environ.get("XDG_CACHE_HOME")
    if xdg:
        base = Path(xdg)
    else:
        base = Path.home() / ".cache"
    return base / "passenger"


def get_config_dir() -> Path:
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        base = Path(xdg)
    else:
        base = Path.home() / ".config"
    return base / "passenger"


def get_config_path() -> Path:
    return get_config_dir() / "config.toml"


def get_log_dir() -> Path:
    return get_cache_dir() / "log"


DEFAULT_CONFIG: dict[str, Any] = {
    "logging": {
        "level": "info",
        "file": True,
    },
}


def load_config() -> dict[str, Any]:
    config_path = get_config_path()
    config = {key: dict(value) for key, value in DEFAULT_CONFIG.items()}

    if config_path.exists():
        with open(config_path, "rb") as f:
            user_config = tomli.load(f)
            _merge_config(config, user_config)

    return config


def _merge_config(base: dict, override: dict) -> None:
    for key, value in override.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _merge_config(base[key], value)
        else:
            base[key] = value


class StopOptions(BaseModel):
    """Parsed intent of a single `passenger stop` invocation.

    The instance is frozen. The PID file locator returns a copy with
    ``pid_file`` filled in instead of mutating the original.
    """
    model_config = ConfigDict(frozen=True)

    port: PositiveInt = DEFAULT_PORT
    pid_file: Path | None = None
    ignore_pid_not_found: bool = False
    identifier: str = f"{PROGRAM_NAME} Standalone engine"
    timeout: PositiveInt = STOP_TIMEOUT
    search_dirs: tuple[str, ...] = Field(default=PID_SEARCH_DIRS)
