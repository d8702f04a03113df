"""
Health Check Commands.

Commands for checking backend health and status.
"""

import asyncio

import httpx
import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from postit.cli.client import get_api_client

app = typer.Typer(help="Health check commands")
console = Console()


@app.command()
def status(
    detailed: bool = typer.Option(False, "--detailed", "-d", help="Show detailed status"),
) -> None:
    """
    Check backend health status (requires running server).

    Examples:
        cli.py health status
        cli.py health status -d
    """
    asyncio.run(_status(detailed))


async def _status(detailed: bool) -> None:
    client = get_api_client()

    try:
        response = await client.get("/health/detailed" if detailed else "/health/ready")

        if response.status_code == 200:
            _display_health(response.json(), detailed)
        elif response.status_code == 503:
            # readiness failures come back as an HTTPException detail
            _display_health(response.json().get("detail", {}), detailed)
            raise typer.Exit(1)
        else:
            console.print(f"[red]Unexpected response: {response.status_code}[/red]")
            raise typer.Exit(1)

    except httpx.ConnectError:
        console.print("[red]Error: Cannot connect to backend[/red]")
        console.print("[dim]Is the server running? Start with: python run.py --action server[/dim]")
        raise typer.Exit(1)
    except httpx.HTTPError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    finally:
        await client.close()


def _display_health(data: dict, detailed: bool) -> None:
    status = data.get("status", "unknown")
    status_color = "green" if status == "healthy" else "red" if status == "unhealthy" else "yellow"

    if detailed and "checks" in data:
        table = Table(title="Health Status", show_header=True)
        table.add_column("Component", style="cyan")
        table.add_column("Status")
        table.add_column("Details")

        for component, check_data in data.get("checks", {}).items():
            check_status = check_data.get("status", "unknown")
            color = "green" if check_status == "healthy" else "red"

            details = []
            if "latency_ms" in check_data:
                details.append(f"latency: {check_data['latency_ms']}ms")
            if "notes" in check_data:
                details.append(f"notes: {check_data['notes']}")
            if "error" in check_data:
                details.append(f"error: {check_data['error']}")

            table.add_row(
                component,
                f"[{color}]{check_status}[/{color}]",
                ", ".join(details) if details else "-",
            )

        console.print(table)

        if "application" in data:
            app_info = data["application"]
            console.print(f"\n[dim]Application: {app_info.get('name', 'N/A')} v{app_info.get('version', 'N/A')}[/dim]")
            console.print(f"[dim]Environment: {app_info.get('env', 'N/A')}[/dim]")

    else:
        console.print(Panel(
            f"[{status_color}]{status.upper()}[/{status_color}]",
            title="Backend Status",
        ))


@app.command()
def ping() -> None:
    """
    Check that the backend is reachable.

    Examples:
        cli.py health ping
    """
    asyncio.run(_ping())


async def _ping() -> None:
    client = get_api_client()

    try:
        response = await client.get("/health")

        if response.status_code == 200:
            console.print("[green]✓ Backend is reachable[/green]")
        else:
            console.print(f"[yellow]Backend responded with status {response.status_code}[/yellow]")

    except httpx.HTTPError as e:
        console.print(f"[red]✗ Backend is not reachable: {e}[/red]")
        raise typer.Exit(1)

    finally:
        await client.close()
