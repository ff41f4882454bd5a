"""
Main CLI application using Typer.
"""

import json
from pathlib import Path
from typing import Annotated, Any, Dict, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ..adapters.sample_data import load_sample_request
from ..config import AppConfig
from ..domain.exceptions import ConfigurationError
from ..services.request_handler import AvailabilityRequestHandler

app = typer.Typer(
    name="slotmatcher",
    help="Rank employee availability against a requested booking time",
    add_completion=False
)

console = Console()


def _load_config(config_file: Optional[Path]) -> AppConfig:
    """Load configuration, exiting with a message on failure."""
    try:
        return AppConfig.load_or_default(config_file)
    except (FileNotFoundError, ConfigurationError) as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1)


def _read_request(request_file: Optional[Path], sample: bool) -> str | Dict[str, Any]:
    """Return the request body from a file, or the bundled sample."""
    if sample:
        return load_sample_request()

    if request_file is None:
        console.print("[bold red]Error:[/bold red] Provide a REQUEST_FILE or use --sample.")
        raise typer.Exit(1)

    if not request_file.exists():
        console.print(f"[bold red]Error:[/bold red] Request file not found: {request_file}")
        raise typer.Exit(1)

    return request_file.read_text(encoding="utf-8")


def _render_result(payload: Dict[str, Any]) -> None:
    """Print the match result as rich tables."""
    console.print(
        f"\n[bold cyan]Requested:[/bold cyan] {payload['requested_date']} "
        f"{payload['requested_time']}  "
        f"({payload['employees_with_availability']}/{payload['total_employees']} "
        f"employees available)\n"
    )

    employees = Table(title="Employees", show_header=True, header_style="bold cyan")
    employees.add_column("#", style="dim")
    employees.add_column("Name", style="bold yellow")
    employees.add_column("ID", style="dim")
    employees.add_column("Best times")
    employees.add_column("Slots", justify="right")

    for idx, result in enumerate(payload["results"], 1):
        best_times = ", ".join(result["best_available_times"]) or "[red]none[/red]"
        employees.add_row(
            str(idx),
            escape(str(result["name"])),
            str(result["id"]),
            best_times,
            str(result["total_available_slots"]),
        )

    console.print(employees)

    best = Table(title="Best availability", show_header=True, header_style="bold green")
    best.add_column("Employee", style="bold yellow")
    best.add_column("Time")
    best.add_column("Δ minutes", justify="right")

    for entry in payload["best_availability"]:
        best.add_row(
            escape(str(entry["employee_name"])),
            entry["availability_time"],
            f"{entry['time_difference_minutes']:g}",
        )

    console.print()
    console.print(best)

    target = payload.get("availability_target_employee")
    if target is not None:
        if target["success"]:
            lines = "\n".join(
                f"{entry['availability_time']}  (Δ {entry['time_difference_minutes']:g} min)"
                for entry in target["results"]
            )
            name = escape(str(target["results"][0]["employee_name"]))
            console.print(Panel.fit(lines, title=f"Target employee: {name}"))
        else:
            console.print("\n[yellow]⚠ Target employee not found or without availability.[/yellow]")

    console.print()


@app.command()
def match(
    request_file: Annotated[Optional[Path], typer.Argument(help="JSON request file")] = None,
    sample: Annotated[bool, typer.Option("--sample", help="Use the bundled five-employee sample request.")] = False,
    as_json: Annotated[bool, typer.Option("--json", help="Print the raw JSON response.")] = False,
    config_file: Annotated[Optional[Path], typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml")] = None,
):
    """
    Match a booking request against employee availability.

    Examples:

        # Try it with the bundled sample
        slotmatcher match --sample

        # Your own request, raw JSON output
        slotmatcher match request.json --json
    """
    config = _load_config(config_file)
    body = _read_request(request_file, sample)

    handler = AvailabilityRequestHandler.from_config(config)
    response = handler.handle("POST", body)

    if not response.ok:
        payload = response.payload or {}
        message = payload.get("message")
        error = escape(str(payload.get("error")))
        detail = f" ({escape(str(message))})" if message else ""
        console.print(f"[bold red]Error:[/bold red] {error}{detail}")
        raise typer.Exit(1)

    if as_json:
        typer.echo(json.dumps(response.payload, indent=2, ensure_ascii=False))
    else:
        _render_result(response.payload)


@app.command()
def serve(
    host: Annotated[Optional[str], typer.Option("--host", help="Bind address (default from config)")] = None,
    port: Annotated[Optional[int], typer.Option("--port", "-p", help="Port (default from config)")] = None,
    config_file: Annotated[Optional[Path], typer.Option("--config", "-c", help="Path to config file")] = None,
):
    """
    Serve the matcher over HTTP at /api.
    """
    import uvicorn

    from ..api.app import create_app

    config = _load_config(config_file)
    bind_host = host or config.server.host
    bind_port = port or config.server.port

    console.print(f"\n[bold cyan]slotmatcher[/bold cyan] listening on http://{bind_host}:{bind_port}/api\n")
    uvicorn.run(create_app(config), host=bind_host, port=bind_port)


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]slotmatcher[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
