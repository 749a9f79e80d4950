from __future__ import annotations

from pathlib import Path

import orjson
import pytest

from open_pdf.config_store import ConfigStore, Settings
from open_pdf.errors import ConfigError
from open_pdf.runner.async_runner import AsyncBoundedWaitExecutor
from open_pdf.runner.factory import build_executor
from open_pdf.runner.subprocess_runner import BlockingSubprocessExecutor


def test_defaults_without_file(isolated_config: Path) -> None:
    store = ConfigStore()
    assert store.path == isolated_config / "settings.json"
    assert store.settings(environ={}) == Settings()


def test_set_persists_coerced_values(isolated_config: Path) -> None:
    store = ConfigStore()
    assert store.set("timeout", "7.5") == 7.5
    assert store.set("strategy", "ASYNC") == "async"
    data = orjson.loads((isolated_config / "settings.json").read_bytes())
    assert data == {"timeout": 7.5, "strategy": "async"}
    assert ConfigStore().settings(environ={}) == Settings(strategy="async", timeout=7.5)


@pytest.mark.parametrize(
    "key, value",
    [("strategy", "threads"), ("timeout", "0"), ("timeout", "soon"), ("dialog_delay", "-1"), ("timeout", "inf"), ("timeout", "nan"), ("dialog_delay", "inf"), ("typing_delay", "nan"), ("osascript", " "), ("viewer", "Skim")],
)
def test_set_rejects_bad_values(key: str, value: str) -> None:
    with pytest.raises(ConfigError):
        ConfigStore().set(key, value)


def test_env_overrides_file() -> None:
    store = ConfigStore()
    store.set("strategy", "async")
    settings = store.settings(environ={"OPEN_PDF_STRATEGY": "subprocess", "OPEN_PDF_TIMEOUT": "2"})
    assert settings.strategy == "subprocess"
    assert settings.timeout == 2.0


def test_corrupt_file_is_treated_as_empty(isolated_config: Path) -> None:
    isolated_config.mkdir(parents=True, exist_ok=True)
    (isolated_config / "settings.json").write_text("{not json")
    assert ConfigStore().as_dict() == {}


def test_unset_removes_key() -> None:
    store = ConfigStore()
    store.set("osascript", "/opt/bin/osascript")
    assert store.unset("osascript") is True
    assert store.unset("osascript") is False
    assert store.settings(environ={}).osascript == "/usr/bin/osascript"


def test_override_ignores_none() -> None:
    settings = Settings().override(strategy=None, timeout="3", osascript=None)
    assert settings == Settings(timeout=3.0)


def test_build_executor_picks_strategy() -> None:
    sub = build_executor(Settings(osascript="/x/osascript"))
    assert isinstance(sub, BlockingSubprocessExecutor)
    assert sub.interpreter == "/x/osascript"
    asy = build_executor(Settings(strategy="async", timeout=1.5))
    assert isinstance(asy, AsyncBoundedWaitExecutor)
    assert asy.timeout == 1.5


def test_non_finite_env_timeout_is_rejected() -> None:
    with pytest.raises(ConfigError, match="finite"):
        ConfigStore().settings(environ={"OPEN_PDF_TIMEOUT": "inf"})


def test_override_rejects_nan_timeout() -> None:
    with pytest.raises(ConfigError, match="finite"):
        Settings().override(timeout="nan")
