# Rev 0.1.0

"""Paths and XDG helpers (Rev 0.1.0)
- Uses XDG Base Directory spec
- Logs/state/config live under XDG dirs
- DB lives in the app-private data dir: $XDG_DATA_HOME/todo-wbs-app/data.db
"""
from __future__ import annotations
import os
from pathlib import Path


APP_NAME = "todowbs"
DATA_APP_NAME = "todo-wbs-app"


def xdg_data_home() -> Path:
    return Path(os.environ.get("XDG_DATA_HOME", Path.home() / ".local" / "share"))


def xdg_state_home() -> Path:
    return Path(os.environ.get("XDG_STATE_HOME", Path.home() / ".local" / "state"))


def xdg_config_home() -> Path:
    return Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))


def data_dir() -> Path:
    return xdg_data_home() / DATA_APP_NAME


def state_dir() -> Path:
    return xdg_state_home() / APP_NAME


def logs_dir() -> Path:
    return state_dir() / "logs"


def config_dir() -> Path:
    return xdg_config_home() / APP_NAME


def default_db_path() -> Path:
    return data_dir() / "data.db"


def ensure_dirs() -> None:
    for p in (data_dir(), state_dir(), logs_dir(), config_dir()):
        p.mkdir(parents=True, exist_ok=True)
