"""CLI de medusa-sync (Typer + Rich).

Por qué una CLI si el Core es una librería:
- Es el host mínimo: ejecuta UNA operación del ciclo de vida por invocación,
  útil para importar recursos existentes, depurar credenciales y grabar
  cassettes.
- No es un motor plan/apply: no calcula drift ni ordena dependencias.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, NoReturn, Optional

import typer
from rich.console import Console

from adapters.json_exporter import export_result_json
from adapters.resources import ALL_RESOURCES, RESOURCES_BY_NAME
from cli import doctor
from cli.ui_components import build_diagnostic_panel, build_kinds_table, build_schema_table, print_banner
from core.config import AppSettings, RecorderMode
from core.domain.models import Diagnostic, LifecycleResult
from core.errors import MedusaSyncError
from core.logging_config import configure_logging
from core.services.provider import Provider

app = typer.Typer(no_args_is_help=True, help="Declarative management of Medusa commerce entities.")
app.add_typer(doctor.app, name="doctor")

_console = Console()


@dataclass
class CliOptions:
    url: str | None = None
    email: str | None = None
    password: str | None = None
    settings_overrides: dict[str, Any] | None = None
    banner: bool = False


def build_provider(settings: AppSettings) -> Provider:
    return Provider(settings)


@app.callback()
def main(
    ctx: typer.Context,
    url: Optional[str] = typer.Option(None, "--url", help="Admin API base URL (overrides MEDUSA_URL)."),
    email: Optional[str] = typer.Option(None, "--email", help="Admin email (overrides MEDUSA_ADMIN_EMAIL)."),
    password: Optional[str] = typer.Option(
        None, "--password", help="Admin password (overrides MEDUSA_ADMIN_PASSWORD)."
    ),
    debug: bool = typer.Option(False, "--debug", help="Dump every request/response to the log."),
    record: Optional[Path] = typer.Option(None, "--record", help="Record interactions into this cassette."),
    replay: Optional[Path] = typer.Option(None, "--replay", help="Replay interactions from this cassette."),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="DEBUG, INFO, WARNING or ERROR."),
    banner: bool = typer.Option(False, "--banner", help="Show the banner before running."),
) -> None:
    if record is not None and replay is not None:
        raise typer.BadParameter("--record and --replay are mutually exclusive")

    overrides: dict[str, Any] = {}
    if debug:
        overrides["debug"] = True
    if record is not None:
        overrides.update(cassette=record, recorder_mode=RecorderMode.RECORD)
    if replay is not None:
        overrides.update(cassette=replay, recorder_mode=RecorderMode.REPLAY)
    if log_level:
        overrides["log_level"] = log_level

    ctx.obj = CliOptions(url=url, email=email, password=password, settings_overrides=overrides, banner=banner)


def _settings(options: CliOptions) -> AppSettings:
    settings = AppSettings(**(options.settings_overrides or {}))
    try:
        configure_logging(settings.log_level)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--log-level") from exc
    if settings.debug:
        logging.getLogger("adapters.transport.debug").setLevel(logging.INFO)
    return settings


def _load_attrs(attrs: str | None, file: Path | None) -> dict[str, Any]:
    if attrs is not None and file is not None:
        raise typer.BadParameter("use either --attrs or --file, not both")
    raw = file.read_text(encoding="utf-8") if file is not None else (attrs or "{}")
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise typer.BadParameter(f"attributes are not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise typer.BadParameter("attributes must be a JSON object")
    return data


def _check_kind(kind: str) -> None:
    if kind not in RESOURCES_BY_NAME:
        known = ", ".join(sorted(RESOURCES_BY_NAME))
        raise typer.BadParameter(f"unknown resource kind {kind!r} (known: {known})")


def _fail(diagnostics: list[Diagnostic]) -> NoReturn:
    for d in diagnostics:
        _console.print(build_diagnostic_panel(d))
    raise typer.Exit(code=1)


def _execute(ctx: typer.Context, kind: str, action: str, *args: Any, output: Path | None = None) -> None:
    _check_kind(kind)
    options: CliOptions = ctx.obj or CliOptions()
    if options.banner:
        print_banner(_console)

    settings = _settings(options)
    provider = build_provider(settings)
    try:
        provider.configure(url=options.url, email=options.email, password=options.password)
        controller = provider.controller(kind)
        result: LifecycleResult = getattr(controller, action)(*args)
    except MedusaSyncError as exc:
        summary = getattr(exc, "summary", None) or type(exc).__name__
        detail = getattr(exc, "detail", None) or str(exc)
        _fail([Diagnostic(summary=summary, detail=detail)])
    finally:
        provider.close()

    if output is not None:
        export_result_json(kind=RESOURCES_BY_NAME[kind], result=result, output_path=output)
    if result.has_error:
        _fail(result.diagnostics)

    _console.print_json(data=result.model_dump(mode="json", include={"lifecycle", "state"}))
    if output is not None:
        _console.print(f"[green]Saved result to:[/green] {output}")


@app.command()
def kinds(kind: Optional[str] = typer.Argument(None, help="Show the attribute schema of one kind.")) -> None:
    """List resource kinds, or the schema of one kind."""

    if kind is None:
        _console.print(build_kinds_table(ALL_RESOURCES))
        return
    _check_kind(kind)
    _console.print(build_schema_table(RESOURCES_BY_NAME[kind].schema))


@app.command()
def create(
    ctx: typer.Context,
    kind: str = typer.Argument(..., help="Resource kind, e.g. region."),
    attrs: Optional[str] = typer.Option(None, "--attrs", help="Declared attributes as a JSON object."),
    file: Optional[Path] = typer.Option(None, "--file", help="JSON file with the declared attributes."),
    output: Optional[Path] = typer.Option(None, "--output", help="Write the result as JSON."),
) -> None:
    """Create an entity from declared attributes."""

    _execute(ctx, kind, "create", _load_attrs(attrs, file), output=output)


@app.command()
def read(
    ctx: typer.Context,
    kind: str = typer.Argument(...),
    identifier: str = typer.Argument("", help="Entity id (optional for the store)."),
    output: Optional[Path] = typer.Option(None, "--output"),
) -> None:
    """Read the remote truth of an entity."""

    _execute(ctx, kind, "read", identifier, output=output)


@app.command()
def update(
    ctx: typer.Context,
    kind: str = typer.Argument(...),
    identifier: str = typer.Argument(...),
    attrs: Optional[str] = typer.Option(None, "--attrs"),
    file: Optional[Path] = typer.Option(None, "--file"),
    output: Optional[Path] = typer.Option(None, "--output"),
) -> None:
    """Update only the given attributes of an entity."""

    declared = _load_attrs(attrs, file)
    declared["id"] = identifier
    _execute(ctx, kind, "update", declared, output=output)


@app.command()
def delete(
    ctx: typer.Context,
    kind: str = typer.Argument(...),
    identifier: str = typer.Argument(""),
) -> None:
    """Delete an entity (the store is reset instead)."""

    _execute(ctx, kind, "delete", identifier)


@app.command(name="import")
def import_(
    ctx: typer.Context,
    kind: str = typer.Argument(...),
    identifier: str = typer.Argument(...),
    output: Optional[Path] = typer.Option(None, "--output"),
) -> None:
    """Adopt an existing entity by id."""

    _execute(ctx, kind, "import_state", identifier, output=output)


def run() -> None:
    app()
