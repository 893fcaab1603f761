"""CLI interface for agentdeck using Typer."""

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape

from agentdeck.cli.exec import exec_command
from agentdeck.cli.shell import shell_command
from agentdeck.core.engine import EngineLoadError
from agentdeck.utils.config import Config

app = typer.Typer(
    name="agentdeck",
    help="agentdeck: discover, manage and run specialized sub-agents",
    no_args_is_help=True,
    add_completion=True,
)

console = Console()


@app.callback()
def main(
    ctx: typer.Context,
    user_dir: Annotated[
        Path,
        typer.Option("--user-dir", "-u", help="User-level settings directory"),
    ] = Path.home() / ".agentdeck",
    project_root: Annotated[
        Path | None,
        typer.Option(
            "--project-root", "-p", help="Project root (defaults to current directory)"
        ),
    ] = None,
) -> None:
    """
    agentdeck: discover, manage and run specialized sub-agents.

    Agents and skills are read from ~/.agentdeck/ and <project>/.agentdeck/;
    project definitions override user ones with the same name.
    """
    try:
        cfg = Config.load(user_dir, project_root or Path.cwd())
    except Exception as e:
        console.print(f"[red]Error loading config: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    ctx.ensure_object(dict)
    ctx.obj["config"] = cfg


@app.command()
def shell(ctx: typer.Context) -> None:
    """Start an interactive slash-command session."""
    try:
        shell_command(ctx)
    except EngineLoadError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(1)


@app.command("exec")
def exec_(
    ctx: typer.Context,
    command: Annotated[
        list[str], typer.Argument(help="Slash command, e.g. /agents list")
    ],
) -> None:
    """Run a single slash command without prompting."""
    try:
        exec_command(ctx, " ".join(command))
    except EngineLoadError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
