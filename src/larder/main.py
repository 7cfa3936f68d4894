"""
Larder - CLI Entry Point.

Usage:
    larder normalize "2 cups chopped fresh spinach, divided"
    larder shopping-list --user-id <uuid>
    larder badge --user-id <uuid>
    larder diets --user-id <uuid>
    larder health
    larder --help
"""

import asyncio
import logging
import sys

import typer
from rich.console import Console
from rich.table import Table

app = typer.Typer(
    name="larder",
    help="Larder - match saved dishes against your pantry library.",
    add_completion=False,
)
console = Console()


def setup_logging(level: str = "INFO") -> None:
    """Log to stderr and quiet down noisy HTTP libraries."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stderr)],
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    from larder.config import settings

    setup_logging("DEBUG" if verbose else settings.log_level)


@app.command()
def normalize(
    lines: list[str] = typer.Argument(..., help="Ingredient lines to normalize"),
) -> None:
    """Show how ingredient lines are normalized and grouped."""
    from larder.matching import classify, format_for_display, normalize_ingredient

    table = Table(show_header=True, header_style="bold")
    table.add_column("Input")
    table.add_column("Normalized")
    table.add_column("Display")
    table.add_column("Group", style="dim")

    for line in lines:
        name = normalize_ingredient(line)
        display = format_for_display(name)
        table.add_row(line, name or "[dim]-[/dim]", display or "[dim]-[/dim]", classify(display) if display else "")

    console.print(table)


def _load_shopping_list(user_id: str):
    from larder.db.client import get_library, get_saved_dishes
    from larder.shopping import ShoppingRefresher

    refresher = ShoppingRefresher(user_id, get_saved_dishes, get_library)
    return asyncio.run(refresher.refresh())


@app.command("shopping-list")
def shopping_list(
    user_id: str = typer.Option(None, "--user-id", "-u", help="User to check (defaults to DEV_USER_ID)"),
) -> None:
    """Print the shopping list for a user's saved dishes."""
    from larder.config import settings

    user_id = user_id or settings.dev_user_id

    try:
        result = _load_shopping_list(user_id)
    except Exception as e:
        console.print(f"\n[red]FAIL Could not load shopping list: {e}[/red]")
        raise typer.Exit(1)

    console.print("\n[bold]Shopping List[/bold]")
    console.print("[dim]Items required by your Saved dishes but not in your Library.[/dim]\n")

    if result is None or result.is_empty:
        console.print("[green]You're all set![/green] All ingredients for your Saved dishes are in your Library.")
        return

    for group, items in result.groups.items():
        console.print(f"[bold blue]{group}[/bold blue]")
        for item in items:
            console.print(f"  • {item}")

    console.print(f"\n[dim]Total: {result.count} items[/dim]")


@app.command()
def badge(
    user_id: str = typer.Option(None, "--user-id", "-u", help="User to check (defaults to DEV_USER_ID)"),
) -> None:
    """Print the number of needed ingredients (shopping badge)."""
    from larder.config import settings

    user_id = user_id or settings.dev_user_id

    try:
        result = _load_shopping_list(user_id)
    except Exception as e:
        console.print(f"\n[red]FAIL Could not load shopping list: {e}[/red]")
        raise typer.Exit(1)

    console.print(result.count if result is not None else 0)


@app.command()
def diets(
    user_id: str = typer.Option(None, "--user-id", "-u", help="User to check (defaults to DEV_USER_ID)"),
) -> None:
    """Show a user's active diets and add recommended items to their library."""
    from larder.config import settings
    from larder.library.dietary import DIETARY_LABELS, DietaryKey, sync_dietary_library

    user_id = user_id or settings.dev_user_id

    try:
        prefs, updated = asyncio.run(sync_dietary_library(user_id))
    except Exception as e:
        console.print(f"\n[red]FAIL Could not load dietary preferences: {e}[/red]")
        raise typer.Exit(1)

    if not prefs:
        console.print("No active diets.")
        return

    for key in DietaryKey:
        if key in prefs:
            label, description = DIETARY_LABELS[key]
            console.print(f"[bold]{label}[/bold] [dim]{description}[/dim]")

    if updated is None:
        console.print("[yellow]WARN[/yellow] Library was not updated")
    else:
        console.print(f"[green]OK[/green] Library now holds {len(list(updated.entries()))} items")


@app.command()
def health() -> None:
    """Check configuration."""
    from larder.config import get_settings

    console.print("\n[bold]Larder Health Check[/bold]\n")

    try:
        settings = get_settings()
    except Exception as e:
        console.print(f"\n[red]FAIL Configuration error: {e}[/red]")
        console.print("[dim]Check your .env file.[/dim]")
        raise typer.Exit(1)

    console.print("[green]OK[/green] Configuration loaded")
    console.print(f"   Environment: {settings.larder_env}")
    console.print(f"   Log level: {settings.log_level}")

    if settings.has_supabase and settings.supabase_url.startswith("https://"):
        console.print("[green]OK[/green] Supabase configured")
    else:
        console.print("[yellow]WARN[/yellow] Supabase not configured; only `normalize` will work")

    state = "enabled" if settings.dietary_feature_enabled else "disabled"
    console.print(f"[dim]INFO[/dim] Dietary filtering {state}")


@app.command()
def version() -> None:
    """Show version information."""
    from larder import __version__

    console.print(f"Larder version {__version__}")


if __name__ == "__main__":
    app()
