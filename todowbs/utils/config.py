# todowbs/utils/config.py
# Rev 0.1.0
import copy
import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

from .paths import config_dir, default_db_path

SETTINGS_FILENAME = "settings.json"
DB_ENV_VAR = "TODOWBS_DB"

_DEFAULTS: Dict[str, Any] = {
    "database": {
        "path": None,
    },
    "report": {
        "export_dir": None,
    },
}


def settings_file() -> Path:
    return config_dir() / SETTINGS_FILENAME


def load_settings(path: Optional[Path] = None) -> Dict[str, Any]:
    path = path or settings_file()
    settings = copy.deepcopy(_DEFAULTS)
    if not path.exists():
        return settings
    try:
        stored = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return settings
    if not isinstance(stored, dict):
        return settings
    for section, values in stored.items():
        if isinstance(values, dict) and isinstance(settings.get(section), dict):
            settings[section].update(values)
        else:
            settings[section] = values
    return settings


def save_settings(data: Dict[str, Any], path: Optional[Path] = None) -> None:
    path = path or settings_file()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")


def resolve_db_path(settings: Optional[Dict[str, Any]] = None) -> Path:
    """Env override, then settings.json, then the XDG data dir default."""
    env = os.environ.get(DB_ENV_VAR)
    if env:
        return Path(env).expanduser()
    configured = ((settings or {}).get("database") or {}).get("path")
    if configured:
        return Path(configured).expanduser()
    return default_db_path()
