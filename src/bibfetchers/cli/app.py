"""Main Typer application for the bibfetchers CLI."""

import os

import certifi
import typer
from rich.console import Console
from rich.table import Table

from bibfetchers import __version__
from bibfetchers.cli.utils import configure_logging, get_console, handle_errors, set_context
from bibfetchers.config.settings import get_settings
from bibfetchers.exceptions import EntryNotFoundError
from bibfetchers.fetchers.registry import (
    FetcherCategory,
    fetchers_for,
    find_by_name,
    id_based_fetcher_for_field,
    id_fetcher_for_identifier_type,
    search_based_fetchers,
)
from bibfetchers.fulltext import find_fulltext
from bibfetchers.identifiers import IdentifierType
from bibfetchers.model import BibEntry, StandardField

# Needed for third-party libraries (like arxiv) that use requests/urllib
if "SSL_CERT_FILE" not in os.environ:
    os.environ["SSL_CERT_FILE"] = certifi.where()

# Results go to stdout, status to stderr
console = Console()

app = typer.Typer(
    name="bibfetchers",
    help="""Look up bibliographic metadata through a registry of web fetchers.

    [bold]Commands:[/bold]
    fetchers    List fetchers per retrieval mode, in registry order
    lookup      Resolve an identifier by the field it belongs to
    search      Run a free-text search on one fetcher
    identify    Find an identifier of an entry by its title
    fulltext    Walk the full-text fallback chain
    """,
    no_args_is_help=True,
    rich_markup_mode="rich",
)


def version_callback(value: bool):
    """Print version and exit."""
    if value:
        console.print(f"bibfetchers version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log every request and show full tracebacks.",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Suppress status output; still shows errors.",
    ),
):
    """bibfetchers: find bibliographic records on the web."""
    set_context(verbose=verbose, quiet=quiet)
    configure_logging(verbose)


@app.command()
@handle_errors
def fetchers(
    category: FetcherCategory | None = typer.Argument(
        None,
        help="Retrieval mode to list. Lists every mode when omitted.",
    ),
):
    """List the fetchers of each retrieval mode."""
    settings = get_settings()
    categories = [category] if category else list(FetcherCategory)

    for cat in categories:
        table = Table(title=f"{cat.value} fetchers")
        table.add_column("#", justify="right", style="dim")
        table.add_column("Name", style="cyan")
        table.add_column("Class")
        for index, fetcher in enumerate(fetchers_for(cat, settings), 1):
            table.add_row(str(index), fetcher.name, fetcher.__class__.__name__)
        console.print(table)


@app.command()
@handle_errors
def lookup(
    field: str = typer.Argument(..., help="Field the identifier belongs to (doi, isbn, eprint)."),
    value: str = typer.Argument(..., help="Identifier value, e.g. 10.1257/aer.20180779."),
):
    """Resolve an identifier with the fetcher bound to its field."""
    fetcher = id_based_fetcher_for_field(field, get_settings())
    if fetcher is None:
        raise typer.BadParameter(f"No fetcher resolves the field '{field}'", param_hint="FIELD")

    with get_console().status(f"Looking up {value} with {fetcher.name}..."):
        entry = fetcher.resolve_by_id(value)
    if entry is None:
        raise EntryNotFoundError(f"{fetcher.name} found nothing for {value}")
    console.print(entry.to_bibtex(), highlight=False, markup=False)


@app.command()
@handle_errors
def search(
    fetcher_name: str = typer.Argument(..., metavar="FETCHER", help="Fetcher name, e.g. Crossref."),
    query: str = typer.Argument(..., help="Free-text query."),
    limit: int = typer.Option(10, "--limit", "-n", min=1, help="Maximum entries to print."),
):
    """Run a free-text search on one search-based fetcher."""
    fetcher = find_by_name(search_based_fetchers(get_settings()), fetcher_name)

    with get_console().status(f"Searching {fetcher.name}..."):
        entries = fetcher.search(query)
    if not entries:
        get_console().print(f"[yellow]No results from {fetcher.name}[/yellow]")
        raise typer.Exit(1)
    for entry in entries[:limit]:
        console.print(entry.to_bibtex() + "\n", highlight=False, markup=False)


@app.command()
@handle_errors
def identify(
    title: str = typer.Argument(..., help="Title of the work."),
    identifier_type: IdentifierType = typer.Option(
        IdentifierType.DOI,
        "--type",
        "-t",
        help="Kind of identifier to find.",
    ),
):
    """Find an identifier for a work from its title."""
    fetcher = id_fetcher_for_identifier_type(identifier_type)
    entry = BibEntry(fields={StandardField.TITLE: title})

    with get_console().status(f"Asking {fetcher.name}..."):
        identifier = fetcher.find_identifier(entry)
    if identifier is None:
        raise EntryNotFoundError(f"{fetcher.name} found no {identifier_type.value} for this title")
    console.print(str(identifier), highlight=False)


@app.command()
@handle_errors
def fulltext(
    doi: str | None = typer.Option(None, "--doi", help="DOI of the work."),
    eprint: str | None = typer.Option(None, "--eprint", help="arXiv id of the work."),
    title: str | None = typer.Option(None, "--title", help="Title of the work."),
):
    """Find a full-text URL by trying each full-text fetcher in turn."""
    if not (doi or eprint or title):
        raise typer.BadParameter("Give at least one of --doi, --eprint or --title")

    entry = BibEntry()
    entry.set(StandardField.DOI, doi)
    entry.set(StandardField.EPRINT, eprint)
    entry.set(StandardField.TITLE, title)

    with get_console().status("Searching for full text..."):
        result = find_fulltext(entry, settings=get_settings())
    if result is None:
        raise EntryNotFoundError("No full text found", hint="Try adding --title or --eprint")
    console.print(result.url, highlight=False)
    get_console().print(f"[dim]Found by {result.fetcher}[/dim]")


if __name__ == "__main__":
    app()
