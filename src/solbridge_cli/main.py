"""CLI entrypoint using typer."""

from __future__ import annotations

import asyncio
import uuid
from collections.abc import Awaitable, Callable
from typing import Any, NoReturn

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from solbridge_core.config.settings import Settings
from solbridge_core.exceptions import MatchingRequestError
from solbridge_core.models.matching import MatchQuery, SelectedMatch
from solbridge_matching.client import MatchingClient
from solbridge_matching.factories import create_matching_client
from solbridge_matching.observability import (
    bind_session_context,
    clear_session_context,
    configure_logging,
)

app = typer.Typer(
    name="solbridge-match",
    help="Query the SolBridge energy matching service",
)
console = Console()

VERBOSE_OPTION = typer.Option(False, "-v", "--verbose", help="Enable debug logging")


@app.command("find-sellers")
def find_sellers(
    kwh: float = typer.Option(..., "--kwh", help="Energy required, in kWh"),
    max_price: float = typer.Option(..., "--max-price", help="Price ceiling per kWh"),
    renewable: bool = typer.Option(False, "--renewable", help="Renewable sources only"),
    min_rating: float = typer.Option(3.0, "--min-rating", help="Minimum seller rating"),
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Find sellers compatible with a requirement."""
    try:
        query = MatchQuery(
            required_energy=kwh,
            max_price=max_price,
            renewable_preference=renewable,
            min_rating=min_rating,
        )
    except ValidationError as exc:
        _invalid_input(exc)
    _run(lambda client: client.find_sellers(query), verbose=verbose)


@app.command("match")
def match(
    match_id: str = typer.Argument(..., help="Match identifier"),
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Show the scoring detail of one match."""
    _run(lambda client: client.get_match_details(match_id), verbose=verbose)


@app.command("allocate")
def allocate(
    selections: list[str] = typer.Option(
        ..., "--match", help="Selected match as MATCH_ID:SELLER_ID:KWH (repeatable)"
    ),
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Create an allocation from selected matches."""
    try:
        matches = [_parse_selection(s) for s in selections]
    except ValueError as exc:
        _invalid_input(exc)
    _run(lambda client: client.create_allocation(matches), verbose=verbose)


@app.command("allocations")
def allocations(
    refresh: bool = typer.Option(False, "--refresh", help="Bypass the local cache"),
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """List active allocations."""
    _run(lambda client: client.get_active_allocations(force_refresh=refresh), verbose=verbose)


@app.command("cancel")
def cancel(
    allocation_id: str = typer.Argument(..., help="Allocation identifier"),
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Cancel an active allocation."""
    _run(lambda client: client.cancel_allocation(allocation_id), verbose=verbose)


@app.command("stats")
def stats(verbose: bool = VERBOSE_OPTION) -> None:
    """Show matching statistics."""
    _run(lambda client: client.get_matching_stats(), verbose=verbose)


@app.command("estimate")
def estimate(
    kwh: float = typer.Option(..., "--kwh", help="Energy required, in kWh"),
    max_price: float = typer.Option(..., "--max-price", help="Price ceiling per kWh"),
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Estimate the cost of a requirement."""
    _run(lambda client: client.calculate_estimate(kwh, max_price), verbose=verbose)


@app.command()
def version() -> None:
    """Show version."""
    console.print("solbridge-matching v0.1.0")


def _parse_selection(raw: str) -> SelectedMatch:
    """Parse MATCH_ID:SELLER_ID:KWH into a SelectedMatch."""
    parts = raw.split(":")
    if len(parts) != 3:
        msg = f"invalid --match value {raw!r}, expected MATCH_ID:SELLER_ID:KWH"
        raise ValueError(msg)
    match_id, seller_id, kwh = parts
    return SelectedMatch(id=match_id, seller_id=seller_id, available_kwh=float(kwh))


def _run(action: Callable[[MatchingClient], Awaitable[Any]], *, verbose: bool) -> None:
    """Execute one client call and print its payload as JSON."""
    settings = Settings()
    if verbose:
        settings.log_level = "DEBUG"
    configure_logging(settings)

    try:
        payload = asyncio.run(_call(settings, action))
    except ValidationError as exc:
        _invalid_input(exc)
    except MatchingRequestError as exc:
        console.print(f"[red]Error ({exc.kind}):[/red] {escape(exc.message)}")
        raise typer.Exit(code=1) from exc

    console.print_json(data=payload)


async def _call(settings: Settings, action: Callable[[MatchingClient], Awaitable[Any]]) -> Any:
    """Open a client, run action under a fresh log session, and close the client."""
    bind_session_context(uuid.uuid4().hex[:12])
    try:
        async with create_matching_client(settings) as client:
            return await action(client)
    finally:
        clear_session_context()


def _invalid_input(exc: ValueError) -> NoReturn:
    """Report rejected input and exit with a usage error."""
    console.print(f"[red]Error:[/red] {escape(str(exc))}")
    raise typer.Exit(code=2) from exc


if __name__ == "__main__":
    app()
