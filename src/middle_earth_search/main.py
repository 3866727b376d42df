import logging
from typing import Annotated, Optional

from typer import Argument, Exit, Option, Typer
from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel
from rich.progress import BarColumn, Progress, TaskProgressColumn, TextColumn
from rich.table import Table

from .corpus import Corpus, ParagraphContext
from .embeddings import EmbeddingProvider
from .index_config import resolve_corpus_path, resolve_db_path, resolve_sources
from .indexing import CorpusBuilder
from .search import DimensionMismatchError, ScoredResult, UnknownBookError
from .session import SearchSession
from .storage import DuckDBStorage, JSONCorpusStorage

app = Typer(help="Semantic paragraph search over The Lord of the Rings.")


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def _parse_sources(raw_sources: list[str]) -> dict[str, str]:
    sources: dict[str, str] = {}
    for raw in raw_sources:
        filename, sep, book = raw.partition("=")
        if not sep or not filename.strip() or not book.strip():
            raise ValueError(f"Invalid source {raw!r}; expected FILE=BOOK TITLE")
        sources[filename.strip()] = book.strip()
    return sources


def _render_hit(console: Console, result: ScoredResult, context: ParagraphContext | None) -> None:
    title = f"{result.book} · #{result.id} · {result.display_percent}%"
    if result.is_exact_match:
        title += " · exact match"
    content = result.text
    if context is not None:
        before = context.previous.text if context.previous is not None else "_(start of corpus)_"
        after = context.next.text if context.next is not None else "_(end of corpus)_"
        content = f"> {before}\n\n**{result.text}**\n\n> {after}"
    panel = Panel(
        Markdown(content),
        title_align="left",
        title=title,
        border_style="bold green" if result.is_exact_match else "bold yellow",
    )
    console.print(panel)


@app.command()
def index(
    source: Annotated[
        Optional[list[str]],
        Option(
            "--source",
            "-s",
            help="Source file and book title as FILE=BOOK. Defaults to the three books.",
        ),
    ] = None,
    source_dir: Annotated[
        Optional[str],
        Option("--source-dir", help="Directory holding the source text files."),
    ] = None,
    corpus_path: Annotated[
        Optional[str],
        Option("--corpus-path", help="Where to write embeddings.json."),
    ] = None,
    db_path: Annotated[
        Optional[str],
        Option("--db-path", help="Also persist the corpus to this DuckDB file."),
    ] = None,
    verbose: Annotated[bool, Option("--verbose", "-v")] = False,
) -> None:
    """Split the books into paragraphs, embed them and save the corpus."""
    _configure_logging(verbose)
    console = Console()
    try:
        sources = resolve_sources(
            _parse_sources(source) if source else None, source_dir=source_dir
        )
    except ValueError as exc:
        console.print(f"[bold red]{exc}[/]")
        raise Exit(code=2)

    json_storage = JSONCorpusStorage(resolve_corpus_path(corpus_path))
    storages: list[JSONCorpusStorage | DuckDBStorage] = [json_storage]
    duckdb_storage: DuckDBStorage | None = None
    if db_path is not None:
        duckdb_storage = DuckDBStorage(resolve_db_path(db_path))
        storages.append(duckdb_storage)

    builder = CorpusBuilder(EmbeddingProvider(), storages=storages)
    try:
        with Progress(
            TextColumn("[bold cyan]Generating vectors"),
            BarColumn(),
            TaskProgressColumn(),
            console=console,
        ) as progress:
            task_id = progress.add_task("embed", total=1.0)
            result = builder.build(
                sources,
                on_progress=lambda fraction: progress.update(task_id, completed=fraction),
            )
    finally:
        if duckdb_storage is not None:
            duckdb_storage.close()

    table = Table(title="Corpus")
    table.add_column("Book")
    table.add_column("Paragraphs", justify="right")
    for book, count in result.paragraphs_per_book.items():
        table.add_row(book, str(count))
    console.print(table)
    for failed in result.failed_sources:
        console.print(f"[bold red]Skipped unreadable source:[/] {failed}")
    console.print(
        f"[bold green]Saved {len(result.records)} paragraphs[/] to {json_storage.path}"
    )


@app.command()
def search(
    query: Annotated[str, Argument(help="Text to search for.")],
    book: Annotated[
        Optional[list[str]],
        Option("--book", "-b", help="Restrict to this book; repeat for several."),
    ] = None,
    pages: Annotated[int, Option("--pages", "-p", min=1, help="Pages of 5 results.")] = 1,
    with_context: Annotated[
        bool, Option("--context", "-c", help="Show neighbouring paragraphs.")
    ] = False,
    corpus_path: Annotated[Optional[str], Option("--corpus-path")] = None,
    verbose: Annotated[bool, Option("--verbose", "-v")] = False,
) -> None:
    """Search the corpus and print the ranked paragraphs."""
    _configure_logging(verbose)
    console = Console()
    storage = JSONCorpusStorage(resolve_corpus_path(corpus_path))
    if not storage.exists():
        console.print(f"[bold red]No corpus found at {storage.path}. Run `index` first.[/]")
        raise Exit(code=1)

    session = SearchSession(Corpus.load(storage), EmbeddingProvider())
    try:
        session.select_books(book)
    except UnknownBookError as exc:
        console.print(f"[bold red]{exc}[/]")
        raise Exit(code=2)

    with console.status(status="Searching..."):
        try:
            session.search(query)
        except DimensionMismatchError as exc:
            console.print(f"[bold red]{exc}[/]")
            raise Exit(code=1)
        for _ in range(pages - 1):
            session.load_more()

    visible = session.visible_results
    if not visible:
        console.print("[bold]No results.[/]")
        return
    for result in visible:
        context = session.context(result.id) if with_context else None
        _render_hit(console, result, context)
    console.print(f"Showing {len(visible)} of {len(session.results)} results.")


@app.command()
def serve(
    host: Annotated[str, Option("--host")] = "127.0.0.1",
    port: Annotated[int, Option("--port")] = 8000,
) -> None:
    """Run the HTTP search server."""
    from .server import run_server

    run_server(host=host, port=port)
