"""CLI entry point for Dive."""

import logging
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markdown import Markdown
from rich.panel import Panel
from rich.table import Table

from .config import load_config, DEFAULT_CONFIG

console = Console()


@click.group()
@click.option("--config", "-c", "config_path", default=None, help="Path to config file")
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
@click.pass_context
def cli(ctx, config_path, verbose):
    """Dive - chat with your notes. Use @note or @`Note Name` to pull notes in."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path


def _get_config(ctx) -> dict:
    return load_config(ctx.obj.get("config_path"))


def _get_session(ctx):
    from .chat.session import ChatSession

    try:
        config = _get_config(ctx)
    except ValueError as e:
        console.print(f"[red]{e}[/]")
        raise SystemExit(1)
    return ChatSession(config)


def _print_notices(notices) -> None:
    for notice in notices:
        console.print(f"  [yellow]! {notice.message}[/]")


def _print_user_message(message) -> None:
    console.print(f"[bold]You:[/] {message.display_text}")
    for name in message.referenced_names:
        console.print(f"  [dim]📄 {name}[/]")


def _print_response(response) -> None:
    if response.reasoning:
        console.print(Panel(Markdown(response.reasoning), title="Reasoning", border_style="dim"))
    if response.content:
        console.print(Panel(Markdown(response.content), title="Dive", border_style="green"))
    if response.citations:
        console.print("[bold]Sources:[/]")
        for citation in response.citations:
            if isinstance(citation, dict):
                label = citation.get("title") or citation.get("url") or citation.get("text") or "Unknown source"
            else:
                label = str(citation)
            console.print(f"  • {label}")


def _send(session, text: str, current_document=None, include_current=None) -> bool:
    """Send one message and print the exchange. Returns False on API failure."""
    from .errors import ApiError

    try:
        result = session.send(text, current_document=current_document, include_current=include_current)
    except ValueError as e:
        console.print(f"[red]{e}[/]")
        return False
    except ApiError as e:
        console.print(f"[red]✗ {e}[/]")
        return False

    _print_user_message(result.message)
    _print_notices(result.notices)
    _print_response(result.response)
    return True


@cli.command()
@click.option("--path", default=None, help="Custom vault path")
@click.pass_context
def init(ctx, path):
    """Create a Dive config file pointing at a vault."""
    import yaml

    base = Path("~/.dive").expanduser()
    vault_path = Path(path).expanduser().resolve() if path else base / "vault"

    console.print(f"[bold green]Initializing Dive at {base}[/]")
    base.mkdir(parents=True, exist_ok=True)
    vault_path.mkdir(parents=True, exist_ok=True)

    config_file = base / "config.yaml"
    if config_file.exists():
        console.print(f"  [dim]Config already exists: {config_file}[/]")
        return

    cfg = dict(DEFAULT_CONFIG)
    cfg["vault_path"] = str(vault_path)
    cfg["state_path"] = str(base / "state.json")
    header = (
        "# Perplexity API key (or set PERPLEXITY_API_KEY env var)\n"
        "# perplexity_api_key: pplx-your-key-here\n\n"
        "# Provider: perplexity or claude (claude uses ANTHROPIC_API_KEY)\n\n"
    )
    config_file.write_text(header + yaml.dump(cfg, default_flow_style=False, sort_keys=False))
    console.print(f"  Created config: {config_file}")
    console.print("[bold green]✓ Dive initialized![/]")
    console.print('  Run: dive ask "what did I do yesterday?"')


@cli.command()
@click.argument("question")
@click.option("--file", "-f", "file_name", default=None, help="Include this note as the current file")
@click.pass_context
def ask(ctx, question, file_name):
    """Ask one question, continuing the saved conversation."""
    session = _get_session(ctx)

    current = None
    if file_name:
        current = session.find_document(file_name)
        if current is None:
            console.print(f"[yellow]File not found: {file_name}[/]")

    try:
        console.print(f"[dim]Using {session.client.model_label}[/]")
    except ValueError as e:
        console.print(f"[red]{e}[/]")
        return

    # A note named with --file is always sent, whatever include_current_file says
    if not _send(session, question, current_document=current, include_current=True if current else None):
        raise SystemExit(1)


@cli.command()
@click.pass_context
def chat(ctx):
    """Interactive chat. /reset clears history, /save saves the last reply, /quit exits."""
    session = _get_session(ctx)
    try:
        console.print(f"[dim]Using {session.client.model_label}[/]")
    except ValueError as e:
        console.print(f"[red]{e}[/]")
        return

    while True:
        try:
            text = console.input("[bold cyan]> [/]")
        except (EOFError, KeyboardInterrupt):
            console.print()
            break

        command = text.strip().lower()
        if not command:
            continue
        if command in ("/quit", "/exit"):
            break
        if command == "/reset":
            session.reset()
            console.print("[green]Chat history cleared[/]")
            continue
        if command == "/save":
            _save_note(session)
            continue

        _send(session, text)


@cli.command()
@click.argument("text")
@click.option("--wire", is_flag=True, help="Print the full text that would be sent")
@click.pass_context
def resolve(ctx, text, wire):
    """Show how a message would be resolved, without calling the model."""
    from .resolve.references import resolve_references
    from .resolve.temporal import resolve_temporal

    session = _get_session(ctx)
    index = session.index()

    target_date = resolve_temporal(text)
    console.print(f"[bold]Date:[/] {target_date.isoformat() if target_date else '-'}")

    refs = resolve_references(text, index)
    if refs:
        table = Table(title="References")
        table.add_column("Token", style="cyan")
        table.add_column("Match", style="green")
        table.add_column("Note")
        for ref in refs:
            table.add_row(ref.raw_token, ref.match_kind.value, ref.resolved.path if ref.resolved else "-")
        console.print(table)

    message, notices = session.prepare(text)
    _print_user_message(message)
    _print_notices(notices)
    if wire:
        console.print(Panel(message.wire_text, title="Wire text", border_style="blue"))


@cli.command()
@click.argument("query", default="")
@click.option("--n", "-n", default=5, help="Number of suggestions")
@click.pass_context
def suggest(ctx, query, n):
    """List notes matching QUERY, as @-autocomplete would."""
    from .resolve.references import format_reference, suggest_documents

    session = _get_session(ctx)
    matches = suggest_documents(query, session.index(), limit=n)
    if not matches:
        console.print("[yellow]No matching notes.[/]")
        return
    for doc in matches:
        folder = str(Path(doc.path).parent)
        suffix = f" [dim]({folder})[/]" if folder != "." else ""
        console.print(f"  📄 {format_reference(doc)}{suffix}")


@cli.command()
def models():
    """List supported Perplexity models."""
    from .chat.models import Model

    table = Table(title="Models")
    table.add_column("Id", style="cyan")
    table.add_column("Name")
    table.add_column("Description", max_width=60)
    for model in Model:
        table.add_row(model.value, model.label, model.description)
    console.print(table)


@cli.command()
@click.pass_context
def history(ctx):
    """Show the saved conversation."""
    session = _get_session(ctx)
    state = session.state
    if not state.turns:
        console.print("[dim]No conversation yet.[/]")
        return

    console.print(f"[dim]Conversation {state.conversation_id}[/]")
    for turn in state.turns:
        style = "bold" if turn.role.value == "user" else "green"
        console.print(f"[{style}]{turn.role.value}:[/] {turn.content}\n")
    if state.context_keywords:
        console.print(f"[dim]Topics: {', '.join(state.context_keywords)}[/]")
    if state.awaiting_response:
        console.print("[dim]Dive is waiting for your answer.[/]")


@cli.command()
@click.argument("path", required=False)
@click.pass_context
def export(ctx, path):
    """Export the conversation as JSON (to PATH or stdout)."""
    session = _get_session(ctx)
    data = session.export()
    if path:
        Path(path).write_text(data, encoding="utf-8")
        console.print(f"[green]✓ Exported to {path}[/]")
    else:
        click.echo(data)


@cli.command()
@click.pass_context
def reset(ctx):
    """Clear the conversation and start a new one."""
    session = _get_session(ctx)
    session.reset()
    console.print("[green]Chat history cleared[/]")


def _save_note(session) -> None:
    try:
        path = session.save_reply_as_note()
    except ValueError as e:
        console.print(f"[yellow]{e}[/]")
        return
    console.print(f"[green]Note created: {path.name}[/]")


@cli.command("save-note")
@click.pass_context
def save_note(ctx):
    """Save the latest reply as a note in the vault."""
    _save_note(_get_session(ctx))


if __name__ == "__main__":
    cli()
