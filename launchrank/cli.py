import click
from rich.console import Console
from rich.markup import escape
from rich.text import Text

from launchrank.catalog import CatalogError, filter_unsupported, load_catalog
from launchrank.config import Config
from launchrank.dispatch import ActionDispatcher
from launchrank.logging import configure_logging
from launchrank.matcher import FuzzyMatcher
from launchrank.models import Entry, Query, Result
from launchrank.ranking import RankingEngine, sort_results

console = Console()


def build_engine(config: Config) -> RankingEngine:
    return RankingEngine(
        matcher=FuzzyMatcher(precision=config.precision),
        dispatcher=ActionDispatcher(),
        name_bonus=config.name_bonus,
        mid_bonus=config.mid_bonus,
    )


def load_entries(config: Config) -> list[Entry]:
    return filter_unsupported(load_catalog(config.catalog_file), config.os_build)


def _highlighted(text: str, offsets: list[int]) -> Text:
    rendered = Text(text)
    for offset in offsets:
        if 0 <= offset < len(text):
            rendered.stylize("bold cyan", offset, offset + 1)
    return rendered


def _print_result(result: Result) -> None:
    line = Text(f"{result.score:>4}  ", style="dim")
    line.append_text(_highlighted(result.title, result.title_highlight))
    console.print(line)
    subtitle = Text("      ")
    subtitle.append_text(_highlighted(result.subtitle, result.subtitle_highlight))
    console.print(subtitle, style="dim")


def _require_config(ctx) -> Config:
    if "config_error" in ctx.obj:
        console.print(f"[red]Error:[/red] {escape(ctx.obj['config_error'])}")
        raise SystemExit(1)
    return ctx.obj["config"]


def _require_entries(config: Config) -> list[Entry]:
    try:
        return load_entries(config)
    except CatalogError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise SystemExit(1) from None


@click.group(invoke_without_command=True)
@click.pass_context
def main(ctx):
    """launchrank - find and open settings from a catalog"""
    ctx.ensure_object(dict)
    try:
        config = Config()
    except ValueError as e:
        ctx.obj["config_error"] = str(e)
    else:
        ctx.obj["config"] = config
        configure_logging(config.log_level)

    if ctx.invoked_subcommand is None:
        console.print("[bold]launchrank[/bold] - find and open settings from a catalog\n")
        console.print("Run [cyan]launchrank search <query>[/cyan] to look something up.")
        console.print("\nUse [cyan]launchrank --help[/cyan] for all commands.")


@main.command()
@click.pass_context
def status(ctx):
    """Show the active configuration."""
    config = _require_config(ctx)
    entries = _require_entries(config)

    console.print("[bold]launchrank status[/bold]")
    console.print()
    console.print(f"Catalog: [cyan]{escape(str(config.catalog_file))}[/cyan]")
    console.print(f"Entries: {len(entries)}")
    console.print(f"Precision: {config.precision}")
    console.print(f"OS build filter: {config.os_build if config.os_build is not None else 'off'}")
    engine = build_engine(config)
    console.print(f"Score bonuses: name {engine.name_bonus}, other tiers {engine.mid_bonus}")


@main.command()
@click.argument("query", nargs=-1, required=True)
@click.option("-n", "--limit", type=click.IntRange(min=1), default=None, help="Maximum results to show")
@click.option("-v", "--verbose", is_flag=True, help="Show tooltips")
@click.pass_context
def search(ctx, query: tuple[str, ...], limit: int | None, verbose: bool):
    """Rank catalog entries against QUERY."""
    config = _require_config(ctx)
    entries = _require_entries(config)

    parsed = Query.from_text(" ".join(query), action_keyword=config.action_keyword)
    results = sort_results(
        build_engine(config).rank(entries, parsed),
        limit if limit is not None else config.max_results,
    )
    if not results:
        console.print("[dim]No matches[/dim]")
        return

    for result in results:
        _print_result(result)
        if verbose:
            console.print(Text(result.title_tooltip), style="dim")
            console.print()


@main.command(name="open")
@click.argument("name")
@click.pass_context
def open_entry(ctx, name: str):
    """Open the catalog entry called NAME."""
    config = _require_config(ctx)
    entries = _require_entries(config)

    entry = next((e for e in entries if e.name.casefold() == name.casefold()), None)
    if entry is None:
        console.print(f"[red]Error:[/red] no entry named '{escape(name)}'")
        raise SystemExit(1)

    if not ActionDispatcher().invoke(entry):
        console.print(f"[red]Error:[/red] failed to open '{escape(entry.name)}'")
        raise SystemExit(1)
    console.print(f"Opened [cyan]{escape(entry.name)}[/cyan]")


if __name__ == "__main__":
    main()
