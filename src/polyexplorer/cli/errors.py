"""Top-level error reporting: message, cause chain, one hint, exit 1."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

import typer

from polyexplorer.errors import (
    AnalysisError,
    AppError,
    ConnectionFailed,
    DataSourceError,
    FileNotFound,
    FileReadError,
    MarketNotFound,
    NormalizationError,
    OutputError,
    ParseError,
    RateLimitExceeded,
    RequestFailed,
    Timeout,
    TransportError,
)


def hint_for(err: AppError) -> str:
    if isinstance(err, (Timeout, ConnectionFailed)):
        return "Check your network connection and try again."
    if isinstance(err, RequestFailed):
        if err.status == 404:
            return "Check that the market slug exists on Polymarket."
        return "The Polymarket API rejected the request; try again later."
    if isinstance(err, (FileNotFound, FileReadError)):
        return "Check --data-dir and the Parquet files in it."
    if isinstance(err, TransportError):
        return "The request could not be completed; check the configured API base URL."
    if isinstance(err, RateLimitExceeded):
        return "Wait a minute before running again."
    if isinstance(err, MarketNotFound):
        if err.group_slug is None:
            return "Check that the market slug exists on Polymarket."
        return "Run 'polyexplorer market -m <slug>' to list the markets in the group."
    if isinstance(err, DataSourceError):
        return "The Polymarket API is not serving this request right now."
    if isinstance(err, ParseError):
        return "The API response shape may have changed; see the JSON excerpt above."
    if isinstance(err, NormalizationError):
        return "Source data failed validation; the named field is the culprit."
    if isinstance(err, AnalysisError):
        return "The local store lacks data needed for this analysis."
    if isinstance(err, OutputError):
        return "Check that the output stream is writable."
    return "Unexpected error."


def report_error(err: AppError) -> None:
    typer.echo(f"Error: {err.describe()}", err=True)
    causes = []
    cause = err.__cause__
    while cause is not None:
        causes.append(cause)
        cause = cause.__cause__
    if causes:
        typer.echo("\nCaused by:", err=True)
        for i, c in enumerate(causes):
            typer.echo(f"  {i}: {c}", err=True)
    typer.echo(f"\nHint: {hint_for(err)}", err=True)


@contextmanager
def handle_errors() -> Iterator[None]:
    """Report any AppError raised inside the block and exit with status 1."""
    try:
        yield
    except AppError as e:
        report_error(e)
        raise typer.Exit(1) from e
