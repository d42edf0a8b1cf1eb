"""CLI startup entry point using typer + rich."""

from __future__ import annotations

import os
import subprocess
import sys
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

import typer
from rich.console import Console
from rich.panel import Panel

from markdown_assistant.config import API_KEY_ENV, CONFIG_PATH_ENV, load_config

STREAMLIT_APP_PATH = Path(__file__).resolve().parent.parent.parent / "streamlit_app.py"

app = typer.Typer(
    name="markdown-assistant",
    help="AI-assisted markdown editor with live preview",
)
console = Console()


@app.callback()
def main() -> None:
    """AI-assisted markdown editor with live preview."""


@app.command()
def serve(
    port: int = typer.Option(8501, "--port", "-p", help="Port for the editor UI"),
    headless: bool = typer.Option(False, "--headless", help="Do not open a browser window"),
    config_path: Path = typer.Option(None, "--config", "-c", help="Path to config.yaml"),
) -> None:
    """Launch the editor in the browser."""
    config = load_config(config_path)
    if not STREAMLIT_APP_PATH.exists():
        console.print(f"[red]Streamlit app not found: {STREAMLIT_APP_PATH}[/red]")
        raise typer.Exit(1)

    console.print(
        Panel(
            f"Model: {config.gemini.model}\n"
            f"Retries: {config.gemini.max_retries} | Timeout: {config.gemini.timeout}s\n"
            f"URL: http://localhost:{port}",
            title="Markdown Assistant",
        )
    )
    if not config.api_key:
        console.print(
            f"[yellow]{API_KEY_ENV} is not set. AI tools will fail until it is provided.[/yellow]"
        )

    cmd = [
        sys.executable,
        "-m",
        "streamlit",
        "run",
        str(STREAMLIT_APP_PATH),
        "--server.port",
        str(port),
        "--server.headless",
        "true" if headless else "false",
    ]
    env = dict(os.environ)
    if config_path is not None:
        env[CONFIG_PATH_ENV] = str(config_path.resolve())
    result = subprocess.run(cmd, env=env, check=False)
    if result.returncode != 0:
        raise typer.Exit(result.returncode)


if __name__ == "__main__":
    app()
