"""Doctor command for environment diagnostics."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.table import Table

from core.config import AppSettings, get_user_env_file, write_user_env_vars
from core.errors import MedusaSyncError
from core.services.provider import Provider, mask

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


def _check_login(settings: AppSettings) -> tuple[bool, str]:
    # cli.main importa este módulo al cargar.
    from cli.main import build_provider  # noqa: PLC0415

    provider: Provider = build_provider(settings)
    try:
        session = provider.configure()
        return True, f"Authenticated against {session.base_url}"
    except MedusaSyncError as exc:
        return False, str(exc)
    finally:
        provider.close()


@app.command()
def run(
    skip_login: bool = typer.Option(False, "--skip-login", help="Only show the resolved configuration."),
) -> None:
    """Show the resolved configuration and try to log in."""

    settings = AppSettings()

    table = Table(title="medusa-sync Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Config
    table.add_row("MEDUSA_URL", "OK" if settings.url else "MISSING", settings.url or "-")
    table.add_row(
        "MEDUSA_ADMIN_EMAIL",
        "OK" if settings.admin_email else "MISSING",
        mask(settings.admin_email),
    )
    table.add_row(
        "MEDUSA_ADMIN_PASSWORD",
        "OK" if settings.admin_password else "MISSING",
        "***" if settings.admin_password else "<unset>",
    )
    table.add_row("Retries", "OK", str(settings.max_retries))
    table.add_row("Debug dump", "ON" if settings.debug else "OFF", "MEDUSA_DEBUG")
    if settings.recorder_mode is not None:
        table.add_row("Recorder", settings.recorder_mode.value, str(settings.cassette or "-"))
    else:
        table.add_row("Recorder", "OFF", "-")
    table.add_row("User env file", "OK", str(get_user_env_file()))

    ok_login = True
    if not skip_login:
        ok_login, detail_login = _check_login(settings)
        table.add_row("Admin login", "OK" if ok_login else "FAIL", detail_login)

    _console.print(table)

    if not ok_login:
        _console.print("\n[yellow]Note:[/yellow] run `medusa-sync doctor setup` to store credentials.")
        raise typer.Exit(code=1)


@app.command()
def setup() -> None:
    """Interactive credential setup (stores config in the user config .env)."""

    url = typer.prompt("Medusa URL", default="http://localhost:9000", show_default=True).strip()
    email = typer.prompt("Admin email").strip()
    password = typer.prompt("Admin password", hide_input=True, confirmation_prompt=False).strip()

    if not url or not email or not password:
        raise typer.BadParameter("url, email and password are required")

    env_path = write_user_env_vars(
        {
            "MEDUSA_URL": url.rstrip("/"),
            "MEDUSA_ADMIN_EMAIL": email,
            "MEDUSA_ADMIN_PASSWORD": password,
        }
    )

    _console.print(f"[green]Saved Medusa config to:[/green] {env_path}")
