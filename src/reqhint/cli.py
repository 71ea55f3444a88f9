from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from reqhint.config import EngineConfig
from reqhint.errors import ReqhintError
from reqhint.extractors.descriptors import describe_handler, describe_request, handler_from_row
from reqhint.handlers.specs import InterceptedRequest
from reqhint.orchestrator.engine import on_unhandled_request
from reqhint.render.message import handler_label, request_label
from reqhint.scoring.ranker import score_candidates
from reqhint.scoring.similarity import ACCEPTANCE_THRESHOLD
from reqhint.sinks import CollectingSink

app = typer.Typer(no_args_is_help=True, add_completion=False)

console = Console()
err_console = Console(stderr=True)


def _setup_logging(verbose: bool) -> None:
    if not verbose:
        return
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _load_handlers(handlers_file: Optional[str]) -> list[Any]:
    if not handlers_file:
        return []

    p = Path(handlers_file).expanduser()
    if not p.is_file():
        raise typer.BadParameter(f"Handlers file does not exist: {p}")
    try:
        rows = json.loads(p.read_text(encoding="utf-8"))
    except ValueError as exc:
        raise typer.BadParameter(f"Handlers file is not valid JSON: {exc}") from exc
    if not isinstance(rows, list):
        raise typer.BadParameter("Handlers file must contain a JSON list")

    handlers: list[Any] = []
    for r in rows:
        if not isinstance(r, dict):
            raise typer.BadParameter(f"Handler entries must be JSON objects, got: {r!r}")
        try:
            handlers.append(handler_from_row(r))
        except ReqhintError as exc:
            raise typer.BadParameter(str(exc)) from exc
    return handlers


def _engine_config(threshold: float, max_suggestions: Optional[int] = None) -> EngineConfig:
    try:
        return EngineConfig(threshold=threshold, max_suggestions=max_suggestions)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc


def _build_request(method: str, url: str, query: Optional[str], operation_name: Optional[str]) -> InterceptedRequest:
    if query is None:
        return InterceptedRequest(method=method, url=url)
    body: dict[str, Any] = {"query": query}
    if operation_name:
        body["operationName"] = operation_name
    return InterceptedRequest(method=method, url=url, body=body)


@app.command()
def suggest(
    method: str = typer.Argument(..., help="HTTP method of the unmatched request"),
    url: str = typer.Argument(..., help="URL or path of the unmatched request"),
    handlers: Optional[str] = typer.Option(None, "--handlers", help="JSON file listing registered handlers"),
    query: Optional[str] = typer.Option(None, "--query", help="GraphQL document sent with the request"),
    operation_name: Optional[str] = typer.Option(None, "--operation-name", help="GraphQL operationName"),
    threshold: float = typer.Option(ACCEPTANCE_THRESHOLD, help="Minimum similarity for a suggestion"),
    max_suggestions: Optional[int] = typer.Option(None, help="Cap the number of suggestions"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging to stderr"),
) -> None:
    """Print the unhandled-request warning for METHOD URL."""
    _setup_logging(verbose)
    registry = _load_handlers(handlers)
    config = _engine_config(threshold, max_suggestions)

    sink = CollectingSink()
    try:
        on_unhandled_request(_build_request(method, url, query, operation_name), registry, sink, config=config)
    except ReqhintError as exc:
        raise typer.BadParameter(str(exc)) from exc

    # plain echo: the wording is a contract, no markup or wrapping
    for message in sink.messages("warning"):
        typer.echo(message)


@app.command()
def scores(
    method: str = typer.Argument(..., help="HTTP method of the unmatched request"),
    url: str = typer.Argument(..., help="URL or path of the unmatched request"),
    handlers: Optional[str] = typer.Option(None, "--handlers", help="JSON file listing registered handlers"),
    query: Optional[str] = typer.Option(None, "--query", help="GraphQL document sent with the request"),
    operation_name: Optional[str] = typer.Option(None, "--operation-name", help="GraphQL operationName"),
    threshold: float = typer.Option(ACCEPTANCE_THRESHOLD, help="Minimum similarity for a suggestion"),
) -> None:
    """
    Show how every comparable handler scores against METHOD URL.
    `#` is the handler's index in the handlers file (registration order).
    """
    registry = _load_handlers(handlers)
    config = _engine_config(threshold)

    try:
        request = describe_request(_build_request(method, url, query, operation_name))
        described = [(i, describe_handler(h)) for i, h in enumerate(registry)]
    except ReqhintError as exc:
        raise typer.BadParameter(str(exc)) from exc

    comparable = [(i, d) for i, d in described if d is not None]
    registry_index = [i for i, _ in comparable]
    candidates = score_candidates(request, [d for _, d in comparable])

    console.print(f"[bold]Request:[/bold] {escape(request_label(request))}", highlight=False)
    console.print(f"[bold]Comparable handlers:[/bold] {len(candidates)} (threshold {config.threshold:.2f})")

    table = Table(show_header=True, header_style="bold")
    table.add_column("#", justify="right", no_wrap=True)
    table.add_column("HANDLER")
    table.add_column("SCORE", justify="right", no_wrap=True)
    table.add_column("SUGGESTED", no_wrap=True)

    for c in sorted(candidates, key=lambda c: (-c.score, -c.position)):
        table.add_row(
            str(registry_index[c.position]),
            escape(handler_label(c.handler)),
            f"{c.score:.3f}",
            "yes" if c.score >= config.threshold else "no",
        )

    console.print(table)


@app.command()
def ping() -> None:
    console.print("pong")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
