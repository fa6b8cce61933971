"""
Interactive CLI for SEO Insights.

Features:
- Tool catalog grouped by category; switch the active tool at any time
- Gemini API key stored via the settings store (env GEMINI_API_KEY wins)
- Structured SEO report rendering for the core tool, Markdown for the rest
- Smooth prompt experience using prompt_toolkit

Commands:
  /help      Show help
  /tools     List tools
  /tool      Switch the active tool ("/tool keyword-expansion")
  /auth      Store or clear the API key
  /state     Show the session state
  /clear     Clear the screen
  /exit      Exit

Run:
  seo-insights
  or
  python -m seo_insights.ui.cli.app
"""

from __future__ import annotations

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.patch_stdout import patch_stdout

from rich.box import ROUNDED
from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from seo_insights.api.di.composition import build_coordinator
from seo_insights.config import Config
from seo_insights.orchestration.coordinator import InvocationCoordinator

from .console import configure_logging, make_console
from .handlers import handle_auth, handle_submit, handle_tool, list_tools, render_state, show_help

COMMANDS = ["/help", "/tools", "/tool", "/auth", "/state", "/clear", "/exit"]


def handle_line(console: Console, coordinator: InvocationCoordinator, line: str) -> bool:
    """Dispatch one input line. Returns False when the loop should stop."""
    cmd = line.strip()
    if not cmd:
        return True

    parts = cmd.split(maxsplit=1)
    head = parts[0]
    if head == "/help":
        show_help(console)
    elif head == "/tools":
        list_tools(console, coordinator.registry, coordinator.state.active_tool_id)
    elif head == "/tool":
        handle_tool(console, coordinator, parts)
    elif head == "/auth":
        handle_auth(console, coordinator, parts)
    elif head == "/state":
        render_state(console, coordinator.state)
    elif head == "/clear":
        console.clear()
    elif head == "/exit":
        console.print("\n[warning]Exiting...[/warning]")
        return False
    elif head.startswith("/"):
        console.print(Text(f"Unknown command {head}. Type /help.", style="warning"))
    else:
        handle_submit(console, coordinator, cmd)
    return True


def run() -> None:
    """Main interactive loop."""
    console = make_console()
    configure_logging(Config.LOG_LEVEL)

    coordinator = build_coordinator()
    session = PromptSession(history=InMemoryHistory())

    console.print(
        Panel(
            "SEO Insights CLI\n"
            "Enter a topic to get an SEO report from Gemini with live search grounding.",
            title="Welcome",
            box=ROUNDED,
        )
    )
    show_help(console)

    completer = WordCompleter(COMMANDS + coordinator.registry.ids(), ignore_case=True, match_middle=True)

    try:
        while True:
            try:
                with patch_stdout():
                    user_input = session.prompt(f"[{coordinator.state.active_tool_id}]> ", completer=completer)
            except (KeyboardInterrupt, EOFError):
                console.print("\nExiting...", style="warning")
                break

            if not handle_line(console, coordinator, user_input):
                break
    finally:
        coordinator.close()


if __name__ == "__main__":
    run()
