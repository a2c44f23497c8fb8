"""CLI interface for the Codecks tracker extension."""

import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from codecks_tracker.branch_name import extract_task_from_full_name
from codecks_tracker.card_label import default_codec
from codecks_tracker.config import load_config, save_config
from codecks_tracker.exceptions import CodecksTrackerError
from codecks_tracker.git_branch import BranchResolver
from codecks_tracker.models import ExtensionConfig

app = typer.Typer(
    name="codecks-tracker",
    help="Codecks card labels and branch names",
    add_completion=False,
)

console = Console()


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging")] = False,
) -> None:
    """Convert Codecks card labels and resolve branches to cards."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")


@app.command()
def encode(
    seq: Annotated[int, typer.Argument(help="Card accountSeq value")],
) -> None:
    """Print the card label of a sequence number."""
    try:
        console.print(default_codec.encode(seq))
    except CodecksTrackerError as e:
        console.print(f"[bold red]Error: {e}[/bold red]")
        raise typer.Exit(1) from e


@app.command()
def decode(
    label: Annotated[str, typer.Argument(help="Card label, e.g. 1w4")],
) -> None:
    """Print the sequence number of a card label."""
    try:
        console.print(default_codec.decode(label))
    except CodecksTrackerError as e:
        console.print(f"[bold red]Error: {e}[/bold red]")
        raise typer.Exit(1) from e


@app.command()
def branch(
    name: Annotated[
        str | None, typer.Argument(help="Branch name; defaults to the current git branch")
    ] = None,
    prefix: Annotated[
        str | None, typer.Option("--prefix", "-p", help="Branch prefix, e.g. cd-")
    ] = None,
    repo: Annotated[
        Path | None, typer.Option("--repo", "-r", help="Path inside a git repository")
    ] = None,
    config: Annotated[
        Path | None, typer.Option("--config", "-c", help="Configuration YAML file")
    ] = None,
) -> None:
    """Show the card a branch belongs to."""
    try:
        if prefix is None:
            prefix = load_config(config).branch_prefix

        if name is None:
            name = BranchResolver(repo, prefix).branch_name()

        task_id = extract_task_from_full_name(name, prefix)
        if not task_id:
            console.print(f"[yellow]Branch {name} does not start with prefix {prefix!r}[/yellow]")
            raise typer.Exit(1)

        seq = default_codec.decode(task_id)

        table = Table(show_header=False)
        table.add_row("Branch", name)
        table.add_row("Label", task_id)
        table.add_row("Sequence", str(seq))
        console.print(table)

    except typer.Exit:
        raise
    except Exception as e:
        console.print(f"[bold red]Error: {e}[/bold red]")
        raise typer.Exit(1) from e


@app.command()
def init(
    output: Annotated[Path, typer.Option("--output", "-o", help="Output config file")] = Path(
        "codecks-tracker.yaml"
    ),
    account: Annotated[str, typer.Option("--account", "-a", help="Codecks account name")] = "",
    email: Annotated[str, typer.Option("--email", "-e", help="Codecks login e-mail")] = "",
    prefix: Annotated[str, typer.Option("--prefix", "-p", help="Branch prefix")] = "",
    enable_log: Annotated[bool, typer.Option("--enable-log", help="Log every call")] = False,
) -> None:
    """Initialize a configuration file."""
    try:
        config = ExtensionConfig(
            account_name=account,
            email=email,
            branch_prefix=prefix,
            enable_log=enable_log,
        )
        save_config(config, output)

        console.print(f"[green]✓ Configuration saved to {output}[/green]")
        console.print("\nSet CODECKS_PASSWORD in the environment to log in.")

    except Exception as e:
        console.print(f"[bold red]Error: {e}[/bold red]")
        raise typer.Exit(1) from e


@app.command()
def version() -> None:
    """Show version information."""
    from codecks_tracker import __version__

    console.print(f"codecks-tracker version {__version__}")


if __name__ == "__main__":
    app()
