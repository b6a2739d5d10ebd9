"""
adapters.cli.main - CLI adapter for ENS Savant.

Mirrors src/adapters/rest/ but for terminal use. Uses the same
ServiceFactory and AgentExecutor as the REST API so all behaviour is
identical.

Commands
--------
  start          Choose chat or autonomous mode interactively
  chat           Interactive chat session with the agent
  auto           Autonomous mode: analyse recent activity on an interval
  ask            One-shot question, answer printed when complete
  registrations  List registrations from the last N hours (no LLM)
  count          Count registrations from the last N hours (no LLM)
  records        Look up ENS text records for a name or address (no LLM)
  serve          Run the REST API (uvicorn)

Usage
-----
  python run_cli.py chat
  python run_cli.py count --hours 24
  python run_cli.py records vitalik.eth
"""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Optional

# ── Ensure src/ is on the path ──
_SRC = Path(__file__).resolve().parent.parent.parent
if str(_SRC) not in sys.path:
    sys.path.insert(0, str(_SRC))

import typer
from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.markdown import Markdown
from rich.panel import Panel
from rich.prompt import Prompt
from rich.rule import Rule
from rich.table import Table

from agent.executor import AgentExecutor
from agent.fragments import Fragment, ToolFragment
from agent.prompt import AUTONOMOUS_THOUGHT
from domain.exceptions import ConfigurationError, DomainError
from factory import ServiceFactory
from infrastructure.config import Settings

__version__ = "0.1.0"

console = Console()
logger = logging.getLogger(__name__)
app = typer.Typer(
    help="ENS Savant — ask questions about ENS registration activity.",
    add_completion=False,
    no_args_is_help=True,
)


# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------

def _version_callback(value: bool) -> None:
    if value:
        console.print(f"ens-savant v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging."),
    version: Optional[bool] = typer.Option(
        None, "--version", callback=_version_callback, is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """Configure logging for every command."""
    settings_level = Settings.from_env().log_level
    logging.basicConfig(
        level=logging.DEBUG if verbose else settings_level,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def _report_config_error(error: ConfigurationError) -> None:
    console.print("[bold red]Error: Required environment variables are not set[/bold red]")
    for name in error.missing:
        console.print(f"{name}=your_{name.lower()}_here")


def _make_factory(*, agent: bool) -> ServiceFactory:
    """Create a ServiceFactory, validating only what the command needs.

    agent=False — data commands; only SUBGRAPH_URL is needed.
    agent=True  — LLM + wallet credentials are required as well.
    """
    config = Settings.from_env()
    try:
        if agent:
            config.validate_agent()
        else:
            config.validate_data()
    except ConfigurationError as e:
        _report_config_error(e)
        raise typer.Exit(code=1)
    return ServiceFactory(config)


async def _load_agent(factory: ServiceFactory) -> AgentExecutor:
    with console.status(
        "[bold cyan]Starting agent (configuring wallet)…", spinner="dots",
    ):
        return await factory.get_agent()


def _print_fragment(fragment: Fragment) -> None:
    if isinstance(fragment, ToolFragment):
        console.print(Panel(fragment.content, title="tool", border_style="dim"))
    else:
        console.print(Panel(Markdown(fragment.content), title="ENS Savant", border_style="green"))
    console.print(Rule(style="dim"))


async def _stream_to_console(agent: AgentExecutor, prompt: str) -> None:
    async for fragment in agent.stream(prompt):
        _print_fragment(fragment)


def _run(coro) -> None:
    """Run a coroutine, turning domain errors into a clean non-zero exit."""
    try:
        asyncio.run(coro)
    except ConfigurationError as e:
        _report_config_error(e)
        raise typer.Exit(code=1)
    except DomainError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(code=1)


# ---------------------------------------------------------------------------
# Agent modes
# ---------------------------------------------------------------------------

async def _chat_loop(agent: AgentExecutor) -> None:
    console.print(Panel(
        "[bold]ENS Savant (chat mode)[/bold]\n"
        "Type your question, or [bold]exit[/bold] to stop.",
        border_style="cyan",
    ))
    while True:
        try:
            user_input = Prompt.ask("\n[bold cyan]Prompt[/bold cyan]")
        except (KeyboardInterrupt, EOFError):
            console.print("\n[dim]Goodbye![/dim]")
            break

        if user_input.strip().lower() in ("exit", "quit"):
            break
        if not user_input.strip():
            continue

        await _stream_to_console(agent, user_input)


async def _autonomous_loop(agent: AgentExecutor, interval: int) -> None:
    console.print("[bold]Starting autonomous mode...[/bold]")
    while True:
        await _stream_to_console(agent, AUTONOMOUS_THOUGHT)
        await asyncio.sleep(interval)


def _choose_mode() -> str:
    """Prompt until the user picks a valid mode."""
    while True:
        console.print("\n[bold]Available modes:[/bold]")
        console.print("1. chat    - Interactive chat mode")
        console.print("2. auto    - Autonomous action mode")
        choice = Prompt.ask("\nChoose a mode (enter number or name)").strip().lower()
        if choice in ("1", "chat"):
            return "chat"
        if choice in ("2", "auto"):
            return "auto"
        console.print("[yellow]Invalid choice. Please try again.[/yellow]")


def _run_agent_mode(factory: ServiceFactory, mode: str, interval: int) -> None:
    async def _go() -> None:
        agent = await _load_agent(factory)
        if mode == "chat":
            await _chat_loop(agent)
        else:
            await _autonomous_loop(agent, interval)

    try:
        _run(_go())
    except typer.Exit:
        raise
    except KeyboardInterrupt:
        console.print("\n[dim]Stopped.[/dim]")
    except Exception as e:
        logger.exception("Fatal error")
        console.print(f"[bold red]Fatal error:[/bold red] {e}")
        raise typer.Exit(code=1)


@app.command()
def start() -> None:
    """Choose between chat and autonomous mode."""
    factory = _make_factory(agent=True)
    mode = _choose_mode()
    _run_agent_mode(factory, mode, factory.config.autonomous_interval)


@app.command()
def chat() -> None:
    """Start an interactive chat session."""
    factory = _make_factory(agent=True)
    _run_agent_mode(factory, "chat", factory.config.autonomous_interval)


@app.command()
def auto(
    interval: Optional[int] = typer.Option(
        None, "--interval", "-i", min=1,
        help="Seconds to wait between runs (default: AUTONOMOUS_INTERVAL or 10).",
    ),
) -> None:
    """Run autonomously, analysing recent ENS activity on an interval."""
    factory = _make_factory(agent=True)
    _run_agent_mode(factory, "auto", interval or factory.config.autonomous_interval)


@app.command()
def ask(
    prompt: str = typer.Argument(..., help="Your question about ENS activity."),
) -> None:
    """Ask a one-shot question and print the full answer."""
    factory = _make_factory(agent=True)

    async def _go() -> None:
        agent = await _load_agent(factory)
        with console.status("[bold cyan]Thinking…", spinner="dots"):
            answer = await agent.run(prompt)
        console.print(Panel(Markdown(answer or "_(no output)_"), title="ENS Savant", border_style="green"))

    _run(_go())


# ---------------------------------------------------------------------------
# Data commands (no LLM, no wallet)
# ---------------------------------------------------------------------------

@app.command()
def registrations(
    hours: float = typer.Option(24, "--hours", min=0.001, help="Look-back window in hours."),
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON."),
) -> None:
    """List ENS registrations from the last N hours."""
    factory = _make_factory(agent=False)

    async def _go() -> None:
        service = factory.create_registration_service()
        with console.status("[bold cyan]Fetching registrations…", spinner="dots"):
            result = await service.fetch_registrations(hours)

        if as_json:
            typer.echo(json.dumps(result.to_list(), indent=2))
            return

        t = Table(box=box.SIMPLE, title=f"{result.count} registration(s) in the last {hours:g}h")
        t.add_column("Name", style="bold")
        t.add_column("Owner")
        t.add_column("Block", justify="right")
        t.add_column("Timestamp", justify="right")
        for record in result.records:
            t.add_row(
                f"{record.name}.eth" if record.name else "[dim]—[/dim]",
                record.owner,
                str(record.block_number),
                str(record.block_timestamp),
            )
        console.print(t)

    _run(_go())


@app.command()
def count(
    hours: float = typer.Option(24, "--hours", min=0.001, help="Look-back window in hours."),
) -> None:
    """Count ENS registrations from the last N hours."""
    factory = _make_factory(agent=False)

    async def _go() -> None:
        service = factory.create_registration_service()
        with console.status("[bold cyan]Counting registrations…", spinner="dots"):
            total = await service.count_registrations(hours)
        console.print(f"[bold]{total}[/bold] registration(s) in the last {hours:g}h")

    _run(_go())


@app.command()
def records(
    query: str = typer.Argument(..., help="ENS name (e.g. vitalik.eth) or 0x address."),
) -> None:
    """Show ENS text records for a name or address."""
    factory = ServiceFactory(Settings.from_env())

    async def _go() -> None:
        service = factory.create_text_record_service()
        with console.status("[bold cyan]Looking up text records…", spinner="dots"):
            data = await service.lookup(query)
        console.print_json(json.dumps(data))

    _run(_go())


@app.command()
def serve(
    host: str = typer.Option("0.0.0.0", help="Bind address."),
    port: int = typer.Option(8000, help="Bind port."),
    reload: bool = typer.Option(False, help="Auto-reload on code changes."),
) -> None:
    """Run the REST API with uvicorn."""
    import uvicorn

    uvicorn.run("adapters.rest.app:app", host=host, port=port, reload=reload)


if __name__ == "__main__":
    app()
