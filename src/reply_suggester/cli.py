"""CLI interface using typer + rich."""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel

from reply_suggester.clients.ollama_client import OllamaClient
from reply_suggester.config import load_config
from reply_suggester.models.suggestion import SuggestionResult
from reply_suggester.pipeline.response_extractor import extract
from reply_suggester.pipeline.suggestion_service import SuggestionService

app = typer.Typer(
    name="reply-suggester",
    help="Local-LLM reply suggestions for LinkedIn comment editors",
    no_args_is_help=True,
)
console = Console()


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


async def _fetch(prompt: str, config_path: Path | None) -> SuggestionResult:
    config = load_config(config_path)
    async with OllamaClient(timeout=config.ollama.timeout) as http:
        service = SuggestionService(http, config.ollama)
        return await service.fetch_suggestion(prompt)


@app.command()
def suggest(
    prompt: str = typer.Argument(help="Prompt to send to the model"),
    config: Path = typer.Option(None, "--config", "-c", help="Path to config.yaml"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Send one prompt to Ollama and print the extracted reply."""
    _setup_logging(verbose)
    result = asyncio.run(_fetch(prompt, config))

    if result.status == "failure":
        console.print(f"[red]Failed to get suggestion: {result.reason}[/red]")
        raise typer.Exit(1)
    if result.status == "empty":
        console.print("[yellow]Could not generate a suggestion. Please try again.[/yellow]")
        return
    console.print(Panel(result.text, title="Suggestion", border_style="cyan"))


@app.command("extract")
def extract_cmd(
    file: Path = typer.Argument(help="Saved /api/generate JSON response"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Run the reply extractor over a saved API response."""
    _setup_logging(verbose)
    if not file.exists():
        console.print(f"[red]File not found: {file}[/red]")
        raise typer.Exit(1)

    try:
        payload = json.loads(file.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        console.print(f"[red]Not a JSON file: {e}[/red]")
        raise typer.Exit(1)

    extraction = extract(payload)
    if extraction.reply is None:
        console.print(f"[yellow]No reply ({extraction.path})[/yellow]")
        return
    console.print(Panel(extraction.reply, title=f"Reply ({extraction.path})", border_style="cyan"))


@app.command()
def watch(
    url: str = typer.Argument("https://www.linkedin.com/feed/", help="Page to open"),
    config: Path = typer.Option(None, "--config", "-c", help="Path to config.yaml"),
    headless: bool = typer.Option(None, "--headless/--headed", help="Override browser.headless"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Open a browser and add a suggest button to every comment editor."""
    from dataclasses import replace

    from reply_suggester.pipeline.watch_session import watch_page

    _setup_logging(verbose)
    app_config = load_config(config)
    if headless is not None:
        app_config = replace(app_config, browser=replace(app_config.browser, headless=headless))

    console.print(f"[dim]Model: {app_config.ollama.model} @ {app_config.ollama.endpoint}[/dim]")
    console.print("[bold]Close the browser window to stop.[/bold]")
    processed = asyncio.run(watch_page(url, app_config, console=console))
    console.print(f"[green]{processed} comment editor(s) processed[/green]")


if __name__ == "__main__":
    app()
