"""Layered error family: transport -> data source -> parse -> normalization -> analysis -> output.

Every failure raised by polyexplorer is an ``AppError``. Each pipeline layer has
its own base class and a fixed set of variants carrying structured context, so
callers can branch on the kind of failure and tests can assert on fields
instead of message text.
"""

from __future__ import annotations

from typing import Any


class AppError(Exception):
    """Base for all polyexplorer errors."""

    layer_label = "Application"

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message)
        self.message = message
        self.context: dict[str, Any] = context

    def describe(self) -> str:
        return f"{self.layer_label} Error: {self.message}"


# --- Transport (HTTP and file I/O) ---


class TransportError(AppError):
    layer_label = "Transport"


class RequestFailed(TransportError):
    def __init__(self, status: int, url: str, body: str) -> None:
        super().__init__(
            f"HTTP request failed with status {status}: {url}\nResponse: {body}",
            status=status,
            url=url,
        )
        self.status = status
        self.url = url
        self.body = body


class ConnectionFailed(TransportError):
    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"Failed to connect to {url}: {reason}", url=url)
        self.url = url
        self.reason = reason


class Timeout(TransportError):
    def __init__(self, url: str, duration_secs: float) -> None:
        super().__init__(f"Request to {url} timed out after {duration_secs:g} seconds", url=url)
        self.url = url
        self.duration_secs = duration_secs


class InvalidUrl(TransportError):
    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"Invalid URL '{url}': {reason}", url=url)
        self.url = url
        self.reason = reason


class ResponseReadError(TransportError):
    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"Failed to read response from {url}: {reason}", url=url)
        self.url = url
        self.reason = reason


class FileNotFound(TransportError):
    def __init__(self, path: str) -> None:
        super().__init__(f"Parquet file not found: {path}", path=path)
        self.path = path


class FileReadError(TransportError):
    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Failed to read {path}: {reason}", path=path)
        self.path = path
        self.reason = reason


# --- Data source ---


class DataSourceError(AppError):
    layer_label = "Data Source"


class MarketGroupNotFound(DataSourceError):
    def __init__(self, slug: str) -> None:
        super().__init__(f"Market group '{slug}' not found", slug=slug)
        self.slug = slug


class MarketNotFound(DataSourceError):
    def __init__(self, identifier: str, group_slug: str | None = None) -> None:
        where = f" in group '{group_slug}'" if group_slug else ""
        super().__init__(
            f"Market '{identifier}' not found{where}",
            identifier=identifier,
            group_slug=group_slug,
        )
        self.identifier = identifier
        self.group_slug = group_slug


class InvalidApiResponse(DataSourceError):
    def __init__(self, endpoint: str, reason: str) -> None:
        super().__init__(
            f"API endpoint '{endpoint}' returned invalid response: {reason}", endpoint=endpoint
        )
        self.endpoint = endpoint
        self.reason = reason


class RateLimitExceeded(DataSourceError):
    def __init__(self, retry_after_secs: int | None = None) -> None:
        if retry_after_secs is not None:
            message = f"API rate limit exceeded. Retry after {retry_after_secs} seconds"
        else:
            message = "API rate limit exceeded"
        super().__init__(message, retry_after_secs=retry_after_secs)
        self.retry_after_secs = retry_after_secs


class AuthenticationFailed(DataSourceError):
    def __init__(self, reason: str) -> None:
        super().__init__(f"API authentication failed: {reason}")
        self.reason = reason


class ApiUnavailable(DataSourceError):
    def __init__(self, service_name: str, reason: str) -> None:
        super().__init__(f"{service_name} API is unavailable: {reason}", service_name=service_name)
        self.service_name = service_name
        self.reason = reason


# --- Parse ---


class ParseError(AppError):
    layer_label = "Parse"


class JsonDeserializationFailed(ParseError):
    def __init__(
        self,
        expected_type: str,
        json_snippet: str,
        reason: str,
        field_name: str | None = None,
    ) -> None:
        where = f" for field '{field_name}'" if field_name else ""
        super().__init__(
            f"Failed to deserialize JSON{where}: Expected type '{expected_type}'\n"
            f"Reason: {reason}\nJSON: {json_snippet}",
            field_name=field_name,
            expected_type=expected_type,
        )
        self.field_name = field_name
        self.expected_type = expected_type
        self.json_snippet = json_snippet
        self.reason = reason


class MissingField(ParseError):
    def __init__(self, field_name: str, parent_type: str) -> None:
        super().__init__(
            f"Required field '{field_name}' is missing from {parent_type}",
            field_name=field_name,
            parent_type=parent_type,
        )
        self.field_name = field_name
        self.parent_type = parent_type


class InvalidFieldFormat(ParseError):
    def __init__(self, field_name: str, expected_format: str, actual_value: str) -> None:
        super().__init__(
            f"Field '{field_name}' has invalid format. Expected: {expected_format}, Got: {actual_value}",
            field_name=field_name,
        )
        self.field_name = field_name
        self.expected_format = expected_format
        self.actual_value = actual_value


class InvalidNumber(ParseError):
    def __init__(self, field_name: str, value: str, reason: str) -> None:
        super().__init__(
            f"Field '{field_name}' has invalid number '{value}': {reason}", field_name=field_name
        )
        self.field_name = field_name
        self.value = value
        self.reason = reason


# --- Normalization ---


class NormalizationError(AppError):
    layer_label = "Normalization"


class TokenIdExtractionFailed(NormalizationError):
    def __init__(
        self,
        market_slug: str,
        reason: str,
        field_name: str = "clob_token_ids",
        expected: int | None = None,
        actual: int | None = None,
    ) -> None:
        super().__init__(
            f"Failed to extract token IDs for market '{market_slug}': {reason}",
            market_slug=market_slug,
            field_name=field_name,
        )
        self.market_slug = market_slug
        self.reason = reason
        self.field_name = field_name
        self.expected = expected
        self.actual = actual


class OutcomeMappingFailed(NormalizationError):
    def __init__(
        self,
        market_slug: str,
        outcomes: list[str],
        reason: str,
        field_name: str = "outcomes",
        expected: int | None = None,
        actual: int | None = None,
    ) -> None:
        super().__init__(
            f"Failed to map outcomes for market '{market_slug}' (outcomes: {outcomes!r}): {reason}",
            market_slug=market_slug,
            field_name=field_name,
        )
        self.market_slug = market_slug
        self.outcomes = outcomes
        self.reason = reason
        self.field_name = field_name
        self.expected = expected
        self.actual = actual


class InvalidPriceData(NormalizationError):
    def __init__(
        self,
        market_slug: str,
        field_name: str,
        reason: str,
        expected: int | None = None,
        actual: int | None = None,
    ) -> None:
        super().__init__(
            f"Invalid price data in market '{market_slug}' for field '{field_name}': {reason}",
            market_slug=market_slug,
            field_name=field_name,
        )
        self.market_slug = market_slug
        self.field_name = field_name
        self.reason = reason
        self.expected = expected
        self.actual = actual


class InvalidVolumeData(NormalizationError):
    def __init__(self, market_slug: str, field_name: str, value: float, reason: str) -> None:
        super().__init__(
            f"Invalid volume data in market '{market_slug}' for field '{field_name}': {reason}",
            market_slug=market_slug,
            field_name=field_name,
        )
        self.market_slug = market_slug
        self.field_name = field_name
        self.value = value
        self.reason = reason


class ValidationFailed(NormalizationError):
    def __init__(self, entity_type: str, entity_id: str, reason: str) -> None:
        super().__init__(
            f"Validation failed for {entity_type} '{entity_id}': {reason}",
            entity_type=entity_type,
            entity_id=entity_id,
        )
        self.entity_type = entity_type
        self.entity_id = entity_id
        self.reason = reason


class EmptyRequiredField(NormalizationError):
    def __init__(self, field_name: str, entity_type: str, entity_id: str = "") -> None:
        where = f" '{entity_id}'" if entity_id else ""
        super().__init__(
            f"Required field '{field_name}' is empty in {entity_type}{where}",
            field_name=field_name,
            entity_type=entity_type,
        )
        self.field_name = field_name
        self.entity_type = entity_type
        self.entity_id = entity_id


class MissingColumn(NormalizationError):
    def __init__(self, field_name: str, table: str) -> None:
        super().__init__(
            f"Required column '{field_name}' is missing from table '{table}'",
            field_name=field_name,
            table=table,
        )
        self.field_name = field_name
        self.table = table


# --- Analysis ---


class AnalysisError(AppError):
    layer_label = "Analysis"


class InsufficientData(AnalysisError):
    def __init__(self, analysis_type: str, reason: str) -> None:
        super().__init__(f"Insufficient data for {analysis_type} analysis: {reason}")
        self.analysis_type = analysis_type
        self.reason = reason


class InvalidPosition(AnalysisError):
    def __init__(self, position_id: str, reason: str) -> None:
        super().__init__(f"Invalid position '{position_id}': {reason}", position_id=position_id)
        self.position_id = position_id
        self.reason = reason


# --- Output ---


class OutputError(AppError):
    layer_label = "Output"


class FormattingFailed(OutputError):
    def __init__(self, data_type: str, reason: str) -> None:
        super().__init__(f"Failed to format {data_type} for output: {reason}")
        self.data_type = data_type
        self.reason = reason


class WriteFailed(OutputError):
    def __init__(self, destination: str, reason: str) -> None:
        super().__init__(f"Failed to write output to {destination}: {reason}")
        self.destination = destination
        self.reason = reason


# --- Helpers ---


def truncate_for_display(s: str, max_len: int = 200) -> str:
    """Cut s to max_len characters, marking the cut."""
    if len(s) <= max_len:
        return s
    return f"{s[:max_len]}... (truncated)"


def json_error_snippet(text: str, max_len: int = 200) -> str:
    """Bounded, single-line excerpt of raw JSON for error messages."""
    snippet = truncate_for_display(text, max_len)
    return " ".join(line.strip() for line in snippet.splitlines())
