"""
Command handlers and renderers for CLI.
"""
from __future__ import annotations

from getpass import getpass
from typing import List, Optional

from rich.box import ROUNDED
from rich.console import Console, Group
from rich.markdown import Markdown
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from seo_insights.abstractions.dto.invocation import StructuredResult, TextResult
from seo_insights.exceptions import InvocationError, InvocationInProgressError
from seo_insights.interfaces.services.tools import IToolCatalog
from seo_insights.orchestration.coordinator import InvocationCoordinator
from seo_insights.orchestration.session import Outcome, SessionState
from seo_insights.settings.credentials import CredentialsRepository


def show_help(console: Console) -> None:
    """Print help panel."""
    console.print(
        Panel(
            "Commands\n"
            "/help        Show help\n"
            "/tools       List tools by category\n"
            "/tool <id>   Switch the active tool\n"
            "/auth [key]  Store the Gemini API key (prompts if omitted; empty clears)\n"
            "/state       Show the current session state\n"
            "/clear       Clear the screen\n"
            "/exit        Exit\n\n"
            "Anything else is submitted as the topic for the active tool.",
            title="Help",
            box=ROUNDED,
        )
    )


def list_tools(console: Console, catalog: IToolCatalog, active_tool_id: Optional[str] = None) -> None:
    """Render a table of tools grouped by category."""
    table = Table(title="Tools", box=ROUNDED)
    table.add_column("Category", no_wrap=True)
    table.add_column("ID", no_wrap=True)
    table.add_column("Name")
    table.add_column("Description")

    for category, descriptors in catalog.list_by_category():
        for i, d in enumerate(descriptors):
            marker = " *" if d.id == active_tool_id else ""
            name = f"{d.display_name}{marker}"
            if d.is_core:
                name = f"[accent]{name}[/accent]"
            table.add_row(category if i == 0 else "", d.id, name, d.description or "-")

    console.print(table)


def render_state(console: Console, state: SessionState) -> None:
    content = (
        f"Active tool: {state.active_tool_id}\n"
        f"Loading: {state.loading}\n"
        f"Result: {state.result.kind if state.result else '-'}\n"
        f"Error: {state.error.kind.value if state.error else '-'}"
    )
    console.print(Panel(content, title="Session", box=ROUNDED))


def render_outcome(console: Console, outcome: Outcome, title: str) -> None:
    if isinstance(outcome, InvocationError):
        console.print(Panel(Text(outcome.message), title=f"{title} · {outcome.kind.value}", box=ROUNDED, border_style="error"))
        return

    if isinstance(outcome, StructuredResult):
        report = outcome.payload
        keywords = Text(", ".join(report.related_keywords) or "-")
        outline = Table(box=ROUNDED, show_header=True, expand=True)
        outline.add_column("#", no_wrap=True)
        outline.add_column("Section")
        outline.add_column("Coverage goal")
        for i, section in enumerate(report.content_structure, start=1):
            outline.add_row(str(i), Text(section.section_title), Text(section.coverage_goal))
        body = Group(
            Text.assemble(("Target topic: ", "box_title"), report.target_topic),
            Text.assemble(("Related keywords: ", "box_title"), keywords),
            outline,
        )
        console.print(Panel(body, title=title, box=ROUNDED, border_style="accent"))
        return

    if isinstance(outcome, TextResult):
        subtitle = outcome.produced_at.strftime("%Y-%m-%d %H:%M:%S UTC")
        console.print(Panel(Markdown(outcome.text), title=title, subtitle=subtitle, box=ROUNDED))


def handle_tool(console: Console, coordinator: InvocationCoordinator, parts: List[str]) -> None:
    """Handle /tool command."""
    if len(parts) < 2 or not parts[1].strip():
        console.print("Usage: /tool <id>   (see /tools)")
        return
    try:
        state = coordinator.switch_tool(parts[1].strip())
    except InvocationError as e:
        console.print(Text(e.message, style="warning"))
        return
    descriptor = coordinator.registry.resolve(state.active_tool_id)
    console.print(Panel(f"Active tool: [accent]{descriptor.display_name}[/accent] ({descriptor.id})", title="Tool", box=ROUNDED))


def handle_auth(console: Console, coordinator: InvocationCoordinator, parts: List[str]) -> None:
    """Handle /auth command."""
    key = parts[1].strip() if len(parts) > 1 else None
    if key is None:
        try:
            key = getpass("Enter Gemini API key (hidden, empty clears): ").strip()
        except (EOFError, KeyboardInterrupt):
            console.print("[warning]Key unchanged.[/warning]")
            return
    coordinator.update_credential(key or None)
    console.print(f"API key {'updated' if key else 'cleared'}.")
    credentials = coordinator.credentials
    if isinstance(credentials, CredentialsRepository) and credentials.get_resolution(coordinator.credential_key).source == "env":
        console.print("[warning]GEMINI_API_KEY is set in the environment and takes precedence over the stored key.[/warning]")


def handle_submit(console: Console, coordinator: InvocationCoordinator, topic: str) -> None:
    """Submit a topic to the active tool and render the outcome."""
    descriptor = coordinator.registry.resolve(coordinator.state.active_tool_id)
    try:
        with console.status(f"Running {descriptor.display_name}…"):
            outcome = coordinator.submit(topic)
    except InvocationInProgressError as e:
        console.print(Text(str(e), style="warning"))
        return
    render_outcome(console, outcome, title=descriptor.display_name)


__all__ = [
    "show_help",
    "list_tools",
    "render_state",
    "render_outcome",
    "handle_tool",
    "handle_auth",
    "handle_submit",
]
