"""Developer CLI for the coach proxy.

Runs the server locally, previews system prompts without any network call,
and sends requests to a running proxy.
"""

import json
import os
from typing import Any

import httpx
import typer
import uvicorn
from loguru import logger
from rich.console import Console
from rich.json import JSON
from rich.panel import Panel
from rich.text import Text

from fitcoach.coach.errors import ContextSerializationError
from fitcoach.coach.prompts import CoachType, build_system_prompt, resolve_coach_type

console = Console()

app = typer.Typer(
    name="fitcoach",
    help="FitCoach AI proxy - local server and request tooling",
    add_completion=False,
)

DEFAULT_HOST = os.getenv("SERVER_HOST", "127.0.0.1")
DEFAULT_URL = "http://127.0.0.1:8000/ai-fitness-coach"
COACH_TYPES = ", ".join(t.value for t in CoachType)


def _parse_context(raw: str | None) -> Any:
    if raw is None:
        return None
    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        console.print(Panel(Text(f"--context is not valid JSON: {e}", style="bold red"), title="Error"))
        raise typer.Exit(code=2) from e


@app.command()
def server(
    host: str = typer.Option(DEFAULT_HOST, "--host", "-h", help="Host to bind to"),
    port: int = typer.Option(8000, "--port", "-p", help="Port to bind to"),
    reload: bool = typer.Option(False, "--reload", help="Enable auto-reload"),
) -> None:
    """Run the FastAPI server."""
    logger.info(f"Starting FastAPI server on {host}:{port} (reload={reload})")
    uvicorn.run("fitcoach.main:app", host=host, port=port, reload=reload)


@app.command()
def prompt(
    coach_type: str = typer.Option("general", "--type", "-t", help=f"Coaching type ({COACH_TYPES})"),
    context: str | None = typer.Option(None, "--context", "-c", help="userContext as a JSON string"),
) -> None:
    """Print the system prompt a request of this type would send upstream."""
    resolved = resolve_coach_type(coach_type)
    if resolved.value != coach_type:
        console.print(Text(f"Unknown type '{coach_type}', using '{resolved}'", style="yellow"))

    try:
        system_prompt = build_system_prompt(resolved, _parse_context(context))
    except ContextSerializationError as e:
        console.print(Panel(Text(e.message, style="bold red"), title="Error"))
        raise typer.Exit(code=2) from e

    console.print(Panel(Text(system_prompt), title=f"System prompt: {resolved}"))


@app.command()
def ask(
    message: str = typer.Option(..., "--message", "-m", help="Message for the coach"),
    coach_type: str = typer.Option("general", "--type", "-t", help=f"Coaching type ({COACH_TYPES})"),
    context: str | None = typer.Option(None, "--context", "-c", help="userContext as a JSON string"),
    token: str | None = typer.Option(None, "--token", envvar="FITCOACH_TOKEN", help="Supabase access token"),
    url: str = typer.Option(DEFAULT_URL, "--url", help="Coach proxy URL"),
    timeout: float = typer.Option(90.0, "--timeout", help="Request timeout in seconds"),
) -> None:
    """Send a coach request to a running proxy and print the answer."""
    body: dict[str, Any] = {"type": coach_type, "message": message}
    parsed_context = _parse_context(context)
    if parsed_context is not None:
        body["userContext"] = parsed_context

    headers = {"Authorization": f"Bearer {token}"} if token else {}

    try:
        resp = httpx.post(url, json=body, headers=headers, timeout=timeout)
    except httpx.HTTPError as e:
        console.print(Panel(Text(f"Request failed: {e}", style="bold red"), title="Error"))
        raise typer.Exit(code=1) from e

    try:
        payload = resp.json()
    except ValueError:
        payload = {"error": resp.text}

    if resp.is_success and "response" in payload:
        console.print(Panel(Text(str(payload["response"])), title=f"Coach ({coach_type})"))
        return

    console.print(Panel(JSON.from_data(payload), title=f"Error {resp.status_code}", border_style="red"))
    raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
