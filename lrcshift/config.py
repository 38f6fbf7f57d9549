from __future__ import annotations

import json
import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

_TRUTHY = ("1", "true", "yes", "on")


def _config_dir() -> Path:
    xdg = os.getenv("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "lrcshift"
    return Path.home() / ".config" / "lrcshift"


def _config_file() -> Path:
    return _config_dir() / "config.json"


@dataclass(frozen=True)
class AppConfig:
    config_dir: Path
    # where atomic writes stage their temp files
    temp_dir: Path

    # Defaults for CLI flags; a flag can only switch these on
    invert_offset: bool
    drop_metadata: bool

    # Vorbis comment holding the lyrics
    lyrics_field: str


def _env_flag(name: str) -> bool | None:
    raw = os.getenv(name)
    if raw is None:
        return None
    return raw.strip().lower() in _TRUTHY


def _load_file_defaults(cfg_path: Path) -> dict[str, bool]:
    if not cfg_path.exists():
        return {}
    try:
        data = json.loads(cfg_path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        logger.warning("Ignoring unreadable config %s: %s", cfg_path, e)
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring unreadable config %s: expected a JSON object", cfg_path)
        return {}
    out: dict[str, bool] = {}
    for key in ("invert_offset", "drop_metadata"):
        if isinstance(data.get(key), bool):
            out[key] = data[key]
    return out


def _pick(key: str, env_name: str, file_defaults: dict[str, bool]) -> bool:
    # Priority: config.json -> env -> off
    if key in file_defaults:
        return file_defaults[key]
    env = _env_flag(env_name)
    return bool(env)


def load_config() -> AppConfig:
    config_dir = _config_dir()
    file_defaults = _load_file_defaults(config_dir / "config.json")

    temp_env = os.getenv("LRCSHIFT_TEMP_DIR")
    temp_dir = Path(temp_env) if temp_env else Path(tempfile.gettempdir())

    return AppConfig(
        config_dir=config_dir,
        temp_dir=temp_dir,
        invert_offset=_pick("invert_offset", "LRCSHIFT_INVERT", file_defaults),
        drop_metadata=_pick("drop_metadata", "LRCSHIFT_DROP_METADATA", file_defaults),
        lyrics_field=os.getenv("LRCSHIFT_LYRICS_FIELD", "LYRICS"),
    )


def save_config_defaults(**values: bool) -> None:
    cfg_path = _config_file()
    cfg_path.parent.mkdir(parents=True, exist_ok=True)
    data: dict[str, object] = {}
    if cfg_path.exists():
        try:
            loaded = json.loads(cfg_path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            loaded = None
        # anything but an object gets replaced
        if isinstance(loaded, dict):
            data = loaded
    data.update(values)
    cfg_path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
