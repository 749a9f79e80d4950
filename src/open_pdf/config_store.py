# src/open_pdf/config_store.py
from __future__ import annotations
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional
import logging
import math
import os
import orjson
from platformdirs import user_config_dir

from open_pdf.errors import ConfigError

logger = logging.getLogger(__name__)

APP_NAME = "open-pdf"
STRATEGIES = ("subprocess", "async")


@dataclass(frozen=True)
class Settings:
    strategy: str = "subprocess"
    timeout: float = 5.0
    osascript: str = "/usr/bin/osascript"
    dialog_delay: float = 0.5
    typing_delay: float = 0.2

    def override(self, **values: Any) -> "Settings":
        """None 以外の値だけ上書きした Settings を返す。"""
        clean = {k: coerce_value(k, v) for k, v in values.items() if v is not None}
        return replace(self, **clean)


KEYS: List[str] = [f.name for f in fields(Settings)]

# 環境変数が設定ファイルより優先
ENV_KEYS = {
    "strategy": "OPEN_PDF_STRATEGY",
    "timeout": "OPEN_PDF_TIMEOUT",
    "osascript": "OPEN_PDF_OSASCRIPT",
}


def coerce_value(key: str, value: Any) -> Any:
    if key not in KEYS:
        raise ConfigError(f"Unknown config key: {key} (choose from {', '.join(KEYS)})")
    if key == "strategy":
        value = str(value).strip().lower()
        if value not in STRATEGIES:
            raise ConfigError(f"strategy must be one of {', '.join(STRATEGIES)}: {value!r}")
        return value
    if key == "osascript":
        value = str(value).strip()
        if not value:
            raise ConfigError("osascript must not be empty")
        return value
    try:
        num = float(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"{key} must be a number: {value!r}") from e
    if not math.isfinite(num):
        raise ConfigError(f"{key} must be a finite number: {value!r}")
    if key == "timeout" and num <= 0:
        raise ConfigError(f"timeout must be greater than 0: {value!r}")
    if num < 0:
        raise ConfigError(f"{key} must not be negative: {value!r}")
    return num


def default_config_dir() -> Path:
    env = os.getenv("OPEN_PDF_CONFIG_DIR")
    if env:
        return Path(env).expanduser()
    return Path(user_config_dir(APP_NAME))


class ConfigStore:
    def __init__(self, config_dir: Optional[Path] = None):
        cfg_dir = config_dir or default_config_dir()
        cfg_dir.mkdir(parents=True, exist_ok=True)
        self._path = cfg_dir / "settings.json"
        self._data: Dict[str, Any] = {}
        self._load()

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> None:
        if self._path.exists():
            try:
                data = orjson.loads(self._path.read_bytes())
            except orjson.JSONDecodeError:
                # 壊れてたら空扱い
                data = {}
            self._data = data if isinstance(data, dict) else {}
        else:
            self._data = {}

    def _save(self) -> None:
        self._path.write_bytes(orjson.dumps(self._data, option=orjson.OPT_INDENT_2))

    def get(self, key: str) -> Any:
        return self._data.get(key)

    def set(self, key: str, value: Any) -> Any:
        value = coerce_value(key, value)
        self._data[key] = value
        self._save()
        return value

    def unset(self, key: str) -> bool:
        if key not in KEYS:
            raise ConfigError(f"Unknown config key: {key}")
        if key not in self._data:
            return False
        del self._data[key]
        self._save()
        return True

    def as_dict(self) -> Dict[str, Any]:
        return dict(self._data)

    def settings(self, environ: Optional[Mapping[str, str]] = None) -> Settings:
        """デフォルト < 設定ファイル < 環境変数 の順でマージ。"""
        environ = os.environ if environ is None else environ
        values: Dict[str, Any] = {}
        for key in KEYS:
            if key in self._data:
                try:
                    values[key] = coerce_value(key, self._data[key])
                except ConfigError as e:
                    logger.warning("Ignoring invalid value in %s: %s", self._path, e)
        for key, env_name in ENV_KEYS.items():
            raw = environ.get(env_name)
            if raw:
                values[key] = coerce_value(key, raw)
        return Settings(**values)


def settings_to_rows(settings: Settings) -> List[tuple[str, str]]:
    return [(k, str(v)) for k, v in asdict(settings).items()]
