"""Command line interface for addondocs."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

from addondocs.config import AppConfig, parse_mode
from addondocs.corpora import EXPRESS_DOCS, SPECTRUM_DOCS
from addondocs.index.indexer import Indexer
from addondocs.index.search import Searcher
from addondocs.index.storage import KnowledgeBaseStore
from addondocs.router import QueryRouter
from addondocs.web.app import app as web_app

console = Console()
app = typer.Typer(help="addondocs - Adobe Express add-on and Spectrum documentation search")


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def _load_config(index: Optional[Path] = None, mode: Optional[str] = None) -> AppConfig:
    load_dotenv()
    config = AppConfig.from_env()
    if index is not None:
        config.index_path = index
    if mode is not None:
        config.mode = parse_mode(mode, config.mode)
    return config


def _snippet(text: str, limit: int = 180) -> str:
    return text.replace("\n", " ")[:limit]


@app.command("build-index")
def build_index(
    express_docs: Optional[Path] = typer.Option(
        None, "--express-docs", help="Clone of AdobeDocs/express-add-ons-docs", resolve_path=True
    ),
    spectrum: Optional[Path] = typer.Option(
        None, "--spectrum", help="Clone of adobe/spectrum-web-components", resolve_path=True
    ),
    index: Path = typer.Option(None, "--index", help="Knowledge base JSON path"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Build the local knowledge base from cloned documentation repositories."""
    _setup_logging(verbose)
    sources = []
    if express_docs is not None:
        sources.append((EXPRESS_DOCS, express_docs))
    if spectrum is not None:
        sources.append((SPECTRUM_DOCS, spectrum))
    if not sources:
        raise typer.BadParameter("Pass --express-docs and/or --spectrum")

    config = _load_config(index)
    resolved_index = config.resolve_index_path(Path.cwd())
    indexer = Indexer(KnowledgeBaseStore(resolved_index))

    console.print(f"Indexing into [bold]{resolved_index}[/bold]...")
    stats = indexer.build(sources)
    console.print(
        f"Files indexed: {stats.indexed}, skipped: {stats.skipped}, "
        f"failed: {stats.failed}, items: {stats.items}"
    )


@app.command()
def search(
    query: str = typer.Argument(..., help="Query text"),
    index: Path = typer.Option(None, "--index", help="Knowledge base JSON path"),
    target: Optional[str] = typer.Option(None, "--target", help="express_sdk, spectrum_web_components or all"),
    top_k: int = typer.Option(10, help="Number of results to display"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Search the local knowledge base and print scored matches."""
    _setup_logging(verbose)
    config = _load_config(index)
    resolved_index = config.resolve_index_path(Path.cwd())

    if not resolved_index.exists():
        raise typer.BadParameter(f"Knowledge base not found: {resolved_index}")

    searcher = Searcher(KnowledgeBaseStore(resolved_index).load())
    try:
        results = searcher.search(query, target_source=target, top_k=top_k)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc
    if not results:
        console.print("[yellow]No matches found.[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Score")
    table.add_column("Kind")
    table.add_column("Title")
    table.add_column("Snippet")

    for result in results:
        table.add_row(str(result.score), result.item.kind, result.item.title, _snippet(result.item.content))

    console.print(table)


@app.command()
def query(
    query_text: str = typer.Argument(..., help="Query text"),
    mode: Optional[str] = typer.Option(None, "--mode", help="remote or local"),
    target: Optional[str] = typer.Option(None, "--target", help="express_sdk, spectrum_web_components or all"),
    index: Path = typer.Option(None, "--index", help="Knowledge base JSON path"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Answer a query through the configured knowledge source."""
    _setup_logging(verbose)
    router = QueryRouter(_load_config(index, mode))

    async def _run():
        try:
            return await router.route(query_text, target)
        finally:
            await router.aclose()

    try:
        response = asyncio.run(_run())
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc

    console.print(
        f"[bold]{len(response.results)}[/bold] results "
        f"(mode: {response.mode_used}, confidence: {response.confidence_score:.2f})"
    )
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Kind")
    table.add_column("Title")
    table.add_column("Source")
    table.add_column("Snippet")
    for item in response.results:
        table.add_row(item.kind, item.title, item.source_hint, _snippet(item.content))
    console.print(table)


@app.command()
def capabilities(
    mode: Optional[str] = typer.Option(None, "--mode", help="remote or local"),
    index: Path = typer.Option(None, "--index", help="Knowledge base JSON path"),
) -> None:
    """Show supported keywords and the active knowledge source."""
    info = QueryRouter(_load_config(index, mode)).capabilities()
    console.print(f"[bold]{info['agent_name']}[/bold]: {info['description']}")
    console.print(f"Source: {info['documentation_source']} ({info['current_mode']} mode)")
    console.print("Keywords: " + ", ".join(info["supported_keywords"]))


@app.command("code-sample")
def code_sample(
    feature: str = typer.Argument(..., help="Feature name, e.g. dialog-api"),
    language: Optional[str] = typer.Option(None, help="Language label for the snippet"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Fetch a code excerpt for an add-on feature from the samples repository."""
    _setup_logging(verbose)
    router = QueryRouter(_load_config())

    async def _run():
        try:
            return await router.code_sample(feature, language)
        finally:
            await router.aclose()

    sample = asyncio.run(_run())
    if sample is None:
        console.print(f"[yellow]No code sample available for '{feature}'.[/yellow]")
        raise typer.Exit(code=1)

    console.print(f"[bold]{sample.file_path}[/bold] ({sample.framework}, {sample.language})")
    console.print(sample.code, markup=False, highlight=False)


@app.command()
def web(
    host: str = typer.Option("127.0.0.1", help="Host interface"),
    port: int = typer.Option(8000, help="Server port"),
) -> None:
    """Start the HTTP API."""
    try:
        import uvicorn
    except ImportError as exc:  # pragma: no cover
        raise typer.BadParameter(
            "uvicorn is not installed. Install the web extras with \"python -m pip install '.[web]'\""
        ) from exc

    load_dotenv()
    console.print(f"Starting API on http://{host}:{port}")
    uvicorn.run(
        web_app,
        host=host,
        port=port,
        reload=False,
        log_level="info",
    )


if __name__ == "__main__":  # pragma: no cover
    app()
