# src/open_pdf/cli.py
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Callable, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from open_pdf.config_store import ENV_KEYS, ConfigStore, Settings, settings_to_rows
from open_pdf.errors import OpenPdfError, UsageError
from open_pdf.page import DEFAULT_PAGE, sanitize_page
from open_pdf.report import report, report_error
from open_pdf.runner.base import ScriptExecutor
from open_pdf.runner.factory import build_executor
from open_pdf.script import build_script
from open_pdf.utils.paths import locate_document

app = typer.Typer(help="Open a document in Preview and jump to a page.", add_completion=False)
config_app = typer.Typer(help="Manage open-pdf settings.", add_completion=False)
console = Console()

logger = logging.getLogger("open_pdf")


def _debug_from_env() -> bool:
    return os.getenv("OPEN_PDF_DEBUG", "").strip().lower() in {"1", "true", "yes", "on"}


def setup_logging(debug: bool) -> None:
    """debug のときだけ [LOG] トレースを stderr に出す（元の DEBUG ビルド相当）。"""
    if not debug:
        return
    logger.setLevel(logging.DEBUG)
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(
            console=Console(stderr=True),
            show_time=False,
            show_path=False,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)


def load_settings() -> Settings:
    return ConfigStore().settings()


def run(
    file: Optional[str],
    page: Optional[str],
    settings: Settings,
    *,
    cwd: Optional[Path] = None,
    dry_run: bool = False,
    executor_factory: Optional[Callable[[Settings], ScriptExecutor]] = None,
) -> int:
    """引数解決 → ページ整形 → スクリプト生成 → 実行 → 終了コード。"""
    logger.debug("[LOG] Starting execution.")
    try:
        if not file:
            raise UsageError("No file path provided.")
        logger.debug("[LOG] Arguments parsed: File='%s', Page='%s'", file, page)
        # 存在しないファイルならここで止まる（スクリプト生成・実行はしない）
        path = locate_document(file, cwd or Path.cwd())
        digits = sanitize_page(page)
        script = build_script(
            path,
            digits,
            dialog_delay=settings.dialog_delay,
            typing_delay=settings.typing_delay,
        )
        if dry_run:
            typer.echo(script.source, nl=False)
            return 0
        executor = (executor_factory or build_executor)(settings)
    except OpenPdfError as e:
        return report_error(e)

    logger.debug("[LOG] Running AppleScript via %s strategy.", executor.name)
    outcome = executor.execute(script)
    return report(outcome, path=path, page=digits)


@app.command(context_settings={"ignore_unknown_options": True})
def open_pdf_cmd(
    file: Optional[str] = typer.Argument(None, help="Document to open (relative, absolute or ~/...)", show_default=False),
    page: str = typer.Argument(DEFAULT_PAGE, help="Page to jump to; non-digit characters are dropped"),
    strategy: Optional[str] = typer.Option(None, "--strategy", "-s", help="subprocess (osascript) or async (in-process)"),
    timeout: Optional[float] = typer.Option(None, "--timeout", help="Wait ceiling in seconds for the async strategy"),
    osascript: Optional[str] = typer.Option(None, "--osascript", help="Path to the osascript binary"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Print the AppleScript instead of running it"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug trace on stderr"),
):
    setup_logging(verbose or _debug_from_env())
    try:
        settings = load_settings().override(
            strategy=strategy, timeout=timeout, osascript=osascript
        )
    except OpenPdfError as e:
        raise typer.Exit(code=report_error(e))
    code = run(file, page, settings, dry_run=dry_run)
    raise typer.Exit(code=code)


@config_app.command("set")
def config_set(
    key: str = typer.Argument(..., help="strategy / timeout / osascript / dialog_delay / typing_delay"),
    value: str = typer.Argument(...),
):
    """設定値を保存"""
    try:
        stored = ConfigStore().set(key, value)
    except OpenPdfError as e:
        raise typer.Exit(code=report_error(e))
    typer.secho(f"[config] {key} = {stored}", fg=typer.colors.GREEN)


@config_app.command("unset")
def config_unset(key: str = typer.Argument(...)):
    try:
        removed = ConfigStore().unset(key)
    except OpenPdfError as e:
        raise typer.Exit(code=report_error(e))
    if removed:
        typer.secho(f"[config] {key} reset to default", fg=typer.colors.GREEN)
    else:
        typer.secho(f"[config] {key} is not set", fg=typer.colors.YELLOW)


@config_app.command("show")
def config_show():
    """ファイル・環境変数を反映した実効値を表示"""
    store = ConfigStore()
    try:
        settings = store.settings()
    except OpenPdfError as e:
        raise typer.Exit(code=report_error(e))
    saved = store.as_dict()
    table = Table(title="open-pdf settings")
    table.add_column("Key")
    table.add_column("Value")
    table.add_column("Source")
    for key, value in settings_to_rows(settings):
        if os.getenv(ENV_KEYS.get(key, ""), ""):
            source = "env"
        elif key in saved:
            source = "file"
        else:
            source = "default"
        table.add_row(key, value, source)
    console.print(table)


@config_app.command("path")
def config_path():
    typer.echo(str(ConfigStore().path))


def main():
    app()


def config_main():
    config_app()


if __name__ == "__main__":
    main()
