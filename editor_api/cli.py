"""
Design Editor API CLI Tool

Command-line interface for running the server and driving its API.

Usage:
    editor-api serve               - Start the API server
    editor-api health              - Show server health
    editor-api list                - List saved designs
    editor-api save IMAGE -t TEXT  - Save a rendered design
    editor-api delete ID           - Delete a design
    editor-api cleanup --days N    - Evict designs older than N days
"""
import base64
import os
import sys
from pathlib import Path

import click
import httpx
from dotenv import load_dotenv
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from editor_api import __version__
from editor_api.storage.naming import guess_mime

# Load environment variables
load_dotenv()

console = Console()

# API Configuration
API_BASE = os.getenv("API_BASE_URL", "http://localhost:3001")


def api_request(method: str, path: str, **kwargs) -> dict:
    """Call the API and return the decoded JSON body.

    Exits with status 1 when the server is unreachable or answers with a
    failure envelope.
    """
    try:
        response = httpx.request(method, f"{API_BASE}{path}", timeout=30.0, **kwargs)
    except httpx.HTTPError as e:
        console.print(f"[red]✗ Could not reach server at {API_BASE}: {e}[/red]")
        sys.exit(1)

    body = response.json()
    if response.is_error or not body.get("success", True):
        console.print(f"[red]✗ {body.get('error', response.status_code)}[/red]")
        if body.get("details"):
            console.print(f"[dim]{body['details']}[/dim]")
        sys.exit(1)
    return body


def encode_data_url(path: Path) -> str:
    """Read an image file into a base64 data URL."""
    payload = base64.b64encode(path.read_bytes()).decode("ascii")
    return f"data:{guess_mime(path.name)};base64,{payload}"


@click.group()
@click.version_option(version=__version__, prog_name="Design Editor API")
def main():
    """Design Editor API - fonts, images and saved designs."""
    pass


@main.command()
@click.option("--host", default=None, help="Interface to bind (default from HOST)")
@click.option("--port", default=None, type=int, help="Port to run server on (default from PORT)")
@click.option("--reload", is_flag=True, help="Reload on code changes")
def serve(host, port, reload):
    """
    Start the API server.

    Example:
        editor-api serve --port 3001
    """
    import uvicorn

    from editor_api.config import get_settings

    settings = get_settings()
    host = host or settings.HOST
    port = port or settings.PORT

    console.print(Panel(
        f"[bold green]Starting Design Editor API[/bold green]\n\n"
        f"URL: [cyan]http://localhost:{port}[/cyan]\n"
        f"Health: [cyan]http://localhost:{port}/api/health[/cyan]\n"
        f"Storage: [cyan]{Path(settings.STORAGE_ROOT).resolve()}[/cyan]\n"
        f"Max file size: [cyan]{settings.max_file_size_mb:g}MB[/cyan]\n\n"
        f"[dim]Press Ctrl+C to stop[/dim]",
        border_style="green"
    ))
    uvicorn.run("editor_api.main:app", host=host, port=port, reload=reload)


@main.command()
def health():
    """Show server health and storage status."""
    body = api_request("GET", "/api/health")
    storage = body["storage"]
    writable = "[green]yes[/green]" if storage["writable"] else "[red]no[/red]"
    endpoints = "\n".join(f"  {e}" for e in body["endpoints"])
    console.print(Panel(
        f"[bold]{body['status']}[/bold] - {body['message']}\n\n"
        f"Storage writable: {writable}\n"
        f"Max file size: {storage['maxFileSize'] / 1024 / 1024:g}MB\n\n"
        f"Endpoints:\n{endpoints}",
        title="Health",
        border_style="cyan"
    ))


@main.command(name="list")
def list_designs():
    """List saved designs."""
    data = api_request("GET", "/api/designs")["data"]

    if not data["designs"]:
        console.print("[yellow]No designs saved yet[/yellow]")
        return

    table = Table(title=f"Designs ({data['count']})")
    table.add_column("ID", justify="right", style="cyan")
    table.add_column("Text")
    table.add_column("Font")
    table.add_column("Canvas")
    table.add_column("Image", style="green")
    table.add_column("Created", style="dim")

    for design in data["designs"]:
        table.add_row(
            str(design["id"]),
            design["text"],
            f"{design['fontSize']}px {design['fontColor']}",
            f"{design['canvasWidth']}x{design['canvasHeight']}",
            design["imageUrl"] or "-",
            design["createdAt"],
        )
    console.print(table)


@main.command()
@click.argument("image", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--text", "-t", required=True, help="Text rendered on the design")
@click.option("--font-size", type=int, default=None, help="Font size in pixels")
@click.option("--font-color", default=None, help="CSS color of the text")
@click.option("--font-url", default=None, help="URL of an uploaded font")
@click.option("--width", type=int, default=None, help="Canvas width")
@click.option("--height", type=int, default=None, help="Canvas height")
def save(image, text, font_size, font_color, font_url, width, height):
    """
    Save a rendered design image.

    Example:
        editor-api save render.png --text "Hello" --font-size 64
    """
    payload = {
        "text": text,
        "fontSize": font_size,
        "fontColor": font_color,
        "fontUrl": font_url,
        "canvasWidth": width,
        "canvasHeight": height,
        "finalImage": encode_data_url(image),
    }
    body = api_request(
        "POST",
        "/api/designs",
        json={k: v for k, v in payload.items() if v is not None},
    )
    design = body["data"]["design"]
    console.print(f"[green]✓ Design {design['id']} saved[/green]")
    console.print(f"Image: [cyan]{API_BASE}{design['imageUrl']}[/cyan]")


@main.command()
@click.argument("design_id", type=int)
def delete(design_id):
    """Delete a design and its image."""
    body = api_request("DELETE", f"/api/designs/{design_id}")
    console.print(f"[green]✓ {body['message']}[/green]")
    if not body["data"]["fileDeleted"]:
        console.print("[yellow]⚠ Image file could not be removed[/yellow]")


@main.command()
@click.option("--days", default=7, type=int, help="Evict designs older than this many days")
def cleanup(days):
    """Evict old designs and their images."""
    data = api_request("DELETE", "/api/cleanup", params={"days": days})["data"]
    console.print(
        f"[green]✓ Cleanup completed[/green]: "
        f"{data['evictedDesigns']} design(s) evicted, "
        f"{data['deletedFiles']} file(s) deleted, "
        f"{data['remainingDesigns']} remaining"
    )


if __name__ == "__main__":
    main()
