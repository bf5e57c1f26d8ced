"""vm-links command line.

A thin shell over the library: every command builds its inputs, calls one
service function and renders the result with Rich.
"""

from __future__ import annotations

from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console

from adapters.history import MemoryHistory
from adapters.k8s_selectors import TEMPLATE_TYPE_BASE, TEMPLATE_TYPE_LABEL, TEMPLATE_WORKLOAD_LABEL_PREFIX
from cli import doctor
from cli.ui_components import build_initial_data_table, build_link_panel, print_banner
from core.config import AppSettings, configure_logging
from core.domain.models import BootSourceParams, WizardLinkRequest
from core.domain.wizard import VMWizardMode, VMWizardName, VMWizardView
from core.services.redirect_guard import redirect_to_list
from core.services.url_elision import shorten_url
from core.services.wizard_links import build_wizard_link, parse_wizard_initial_data

app = typer.Typer(
    no_args_is_help=True,
    help="Build and inspect virtualization console links.",
)
app.add_typer(doctor.app, name="doctor")

_console = Console()


@app.callback()
def main(
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Do not print the banner."),
) -> None:
    try:
        settings = AppSettings()
    except ValidationError as exc:
        _console.print(f"[red]Invalid configuration:[/red]\n{exc}")
        raise typer.Exit(code=1) from exc
    configure_logging(settings.log_level)
    if not quiet:
        print_banner(_console)


@app.command()
def shorten(
    url: str = typer.Argument(..., help="Absolute URL to shorten."),
    max_hostname_parts: Optional[int] = typer.Option(None, min=1, help="Hostname labels kept."),
    max_pathname_parts: Optional[int] = typer.Option(None, min=1, help="Path segments kept."),
) -> None:
    """Shorten a URL for display."""

    shortened = shorten_url(url, max_hostname_parts, max_pathname_parts)
    if shortened is None:
        _console.print(f"[red]Not a valid absolute URL:[/red] {url}")
        raise typer.Exit(code=1)
    _console.print(build_link_panel(shortened, title="Shortened"))


def _template_from_options(
    name: str | None,
    namespace: str | None,
    common: bool,
    workload_profile: str | None,
) -> dict[str, object] | None:
    if not name:
        return None
    labels: dict[str, str] = {}
    if common:
        labels[TEMPLATE_TYPE_LABEL] = TEMPLATE_TYPE_BASE
    if workload_profile:
        labels[f"{TEMPLATE_WORKLOAD_LABEL_PREFIX}{workload_profile}"] = "true"
    return {"metadata": {"name": name, "namespace": namespace, "labels": labels}}


@app.command(name="wizard-link")
def wizard_link(
    namespace: Optional[str] = typer.Option(None, "--namespace", "-n"),
    wizard: VMWizardName = typer.Option(VMWizardName.WIZARD, help="Wizard flow."),
    mode: Optional[VMWizardMode] = typer.Option(None),
    view: Optional[VMWizardView] = typer.Option(None),
    template_name: Optional[str] = typer.Option(None, help="Template to start from."),
    template_namespace: Optional[str] = typer.Option(None, help="Namespace of a user template."),
    common: bool = typer.Option(False, "--common/--user", help="Platform-owned or tenant template."),
    workload_profile: Optional[str] = typer.Option(None, help="Template workload profile label."),
    name: Optional[str] = typer.Option(None, help="Name of the VM."),
    start_vm: bool = typer.Option(False, "--start-vm", help="Start the VM once created."),
    boot_url: Optional[str] = typer.Option(None, help="Disk image URL to import."),
    boot_container: Optional[str] = typer.Option(None, help="Container disk image."),
    storage_class: Optional[str] = typer.Option(None),
    access_mode: Optional[str] = typer.Option(None),
    volume_mode: Optional[str] = typer.Option(None),
) -> None:
    """Print the link that opens a VM creation wizard."""

    if boot_url and boot_container:
        raise typer.BadParameter("--boot-url and --boot-container are mutually exclusive")
    boot_source = None
    if boot_url or boot_container:
        boot_source = BootSourceParams(url=boot_url, container=boot_container)

    settings = AppSettings()
    try:
        request = WizardLinkRequest(
            wizard_name=wizard,
            namespace=namespace,
            mode=mode,
            view=view,
            template=_template_from_options(template_name, template_namespace, common, workload_profile),
            name=name,
            boot_source=boot_source,
            start_vm=start_vm,
            storage_class=storage_class,
            access_mode=access_mode,
            volume_mode=volume_mode,
        )
    except ValidationError as exc:
        raise typer.BadParameter(str(exc)) from exc

    link = build_wizard_link(request, default_namespace=settings.default_namespace)
    _console.print(build_link_panel(link, title="Wizard link"))


@app.command(name="initial-data")
def initial_data(query: str = typer.Argument(..., help="Query string, e.g. '?initialData=...'.")) -> None:
    """Decode the wizard initial data carried by a query string."""

    # Only a leading path is dropped; a "?" inside a value belongs to the value.
    head, sep, tail = query.partition("?")
    if sep and "=" not in head:
        query = tail
    _console.print(build_initial_data_table(parse_wizard_initial_data(query)))


@app.command(name="redirect-check")
def redirect_check(
    name: str = typer.Argument(..., help="Name of the deleted VM."),
    namespace: str = typer.Argument(..., help="Namespace of the deleted VM."),
    current_path: str = typer.Argument(..., help="Pathname currently displayed."),
    tab: Optional[str] = typer.Option(None, help="List sub-tab, e.g. 'templates'."),
) -> None:
    """Show where the post-deletion guard would navigate."""

    history = MemoryHistory(current_path)
    resource = {"metadata": {"name": name, "namespace": namespace}}
    if redirect_to_list(resource, history, tab):
        _console.print(build_link_panel(history.current_pathname(), title="Redirect to"))
    else:
        _console.print("[dim]Not viewing the deleted resource; no redirect.[/dim]")


def run() -> None:
    app()
