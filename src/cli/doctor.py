"""Doctor command for configuration diagnostics."""

from __future__ import annotations

from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from core.config import AppSettings, get_user_env_file, write_user_env_vars
from core.services.locations import get_console_api_base
from core.services.url_elision import shorten_url

app = typer.Typer(no_args_is_help=True, help="Configuration diagnostics and setup.")

_console = Console()

_SAMPLE_URL = "https://console.apps.cluster.example.com/k8s/ns/default/virtualmachines/vm1/details"


@app.command()
def run() -> None:
    """Show the effective settings and a sample shortened URL."""

    try:
        settings = AppSettings()
    except ValidationError as exc:
        _console.print(f"[red]Invalid configuration:[/red]\n{exc}")
        raise typer.Exit(code=1) from exc

    table = Table(title="vm-links Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    env_file = get_user_env_file()
    table.add_row("User .env", "OK" if env_file.exists() else "OPTIONAL", str(env_file))
    table.add_row("Base path", "OK", settings.base_path)
    table.add_row("Console API base", "OK", get_console_api_base(settings.base_path))
    table.add_row("Default namespace", "OK", settings.default_namespace)
    table.add_row(
        "Display budgets",
        "OK",
        f"hostname={settings.max_hostname_parts} pathname={settings.max_pathname_parts}",
    )
    table.add_row("Log level", "OK", settings.log_level)

    sample = shorten_url(_SAMPLE_URL, settings=settings)
    table.add_row("Sample shortening", "OK" if sample else "FAIL", sample or _SAMPLE_URL)

    _console.print(table)


@app.command()
def configure(
    base_path: Optional[str] = typer.Option(None, help="Console API base path."),
    default_namespace: Optional[str] = typer.Option(None, help="Namespace used when none is given."),
    max_hostname_parts: Optional[int] = typer.Option(None, min=1, help="Hostname labels kept."),
    max_pathname_parts: Optional[int] = typer.Option(None, min=1, help="Path segments kept."),
    log_level: Optional[str] = typer.Option(None, help="CLI logging level."),
) -> None:
    """Store settings in the user config `.env`."""

    values = {
        "VM_LINKS_BASE_PATH": base_path,
        "VM_LINKS_DEFAULT_NAMESPACE": default_namespace,
        "VM_LINKS_MAX_HOSTNAME_PARTS": str(max_hostname_parts) if max_hostname_parts is not None else None,
        "VM_LINKS_MAX_PATHNAME_PARTS": str(max_pathname_parts) if max_pathname_parts is not None else None,
        "VM_LINKS_LOG_LEVEL": log_level.upper() if log_level else None,
    }
    if all(value is None for value in values.values()):
        raise typer.BadParameter("pass at least one option to store")

    env_path = write_user_env_vars(values)
    _console.print(f"[green]Saved config to:[/green] {env_path}")
