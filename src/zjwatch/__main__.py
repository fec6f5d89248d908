"""CLI entry point for zjwatch."""

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.text import Text

from zjwatch import __version__
from zjwatch.config import Config, ConfigError, display_config_errors, load_config
from zjwatch.generator import generate_layouts, load_template
from zjwatch.panels import PlaceholderError, render_layout
from zjwatch.quoting import EmptyCommandError

app = typer.Typer(
    name="zjwatch",
    help="Generate Zellij layouts with watch panes from a template.",
    no_args_is_help=False,
)

console = Console()
err_console = Console(stderr=True)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"zjwatch {__version__}")
        raise typer.Exit()


def _load(config_path: Path) -> tuple[Config, str]:
    """Load the config and its template, exiting on failure."""
    try:
        config = load_config(config_path)
        template = load_template(config.template)
    except ConfigError as e:
        err_console.print(f"[red]Error:[/] Invalid configuration: {escape(str(config_path))}")
        display_config_errors(e.issues, err_console)
        raise typer.Exit(1) from None
    except UnicodeDecodeError as e:
        err_console.print(f"[red]Error:[/] Template {escape(str(config.template))} is not valid UTF-8: {e.reason}")
        raise typer.Exit(1) from None
    except OSError as e:
        err_console.print(f"[red]Error:[/] {escape(str(e))}")
        raise typer.Exit(1) from None
    return config, template


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    config_path: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Path to the configuration file."),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", "-n", help="Print rendered layouts without writing them."),
    ] = False,
    verbose: Annotated[
        int,
        typer.Option("--verbose", "-v", count=True, help="Increase verbosity."),
    ] = 0,
    version: Annotated[
        bool | None,
        typer.Option("--version", callback=version_callback, is_eager=True, help="Show version."),
    ] = None,
) -> None:
    """Generate every layout declared in the configuration file."""
    # If a subcommand was invoked, don't run main logic
    if ctx.invoked_subcommand is not None:
        return

    if config_path is None:
        err_console.print("[red]Error:[/] Missing option '--config'.")
        raise typer.Exit(1)

    config, template = _load(config_path)

    if verbose > 0:
        console.print(f"[dim]Config: {escape(str(config_path))}[/]")
        console.print(f"[dim]Template: {escape(str(config.template))}[/]")

    try:
        generated = generate_layouts(config, template, dry_run=dry_run)
    except (EmptyCommandError, PlaceholderError, OSError) as e:
        err_console.print(f"[red]Error:[/] {escape(str(e))}")
        raise typer.Exit(1) from None

    for layout in generated:
        if dry_run:
            console.print(Panel(Text(layout.content), title=escape(str(layout.path)), border_style="blue"))
        elif verbose > 0:
            console.print(f"[green]✓[/] {escape(str(layout.path))} [dim]({layout.panel_count} panes)[/]")

    if dry_run:
        console.print("[yellow]Dry run:[/] no files were written.")
    else:
        console.print("All layouts have been generated.")


@app.command()
def validate(
    config_path: Annotated[
        Path,
        typer.Option("--config", "-c", help="Path to the configuration file."),
    ],
) -> None:
    """Check the configuration and template without writing anything."""
    config, template = _load(config_path)

    for layout in config.layouts:
        try:
            render_layout(template, layout)
        except (EmptyCommandError, PlaceholderError) as e:
            err_console.print(f"[red]Error:[/] {escape(str(e))}")
            raise typer.Exit(1) from None

    console.print(f"[green]✓[/] {len(config.layouts)} layouts are valid.")


if __name__ == "__main__":
    app()
