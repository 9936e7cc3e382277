"""Opt-in tracing of outgoing ticketing API requests.

Enabled with RAIL_TICKETING_LOG_REQUESTS=true. Credentials in headers and
card fields in request bodies are replaced before anything is written.
"""

import json
import logging
import os
from collections.abc import Mapping
from typing import Any

logger = logging.getLogger(__name__)

LOG_REQUESTS_ENV = "RAIL_TICKETING_LOG_REQUESTS"
REDACTED = "***REDACTED***"
SENSITIVE_HEADERS = frozenset({"authorization", "cookie", "x-api-key"})
SENSITIVE_PAYLOAD_FIELDS = frozenset({"cardnumber", "cardcvc", "cardexpmonth", "cardexpyear"})


def should_log_requests() -> bool:
    return os.getenv(LOG_REQUESTS_ENV, "").lower() == "true"


def _query_string(params: Mapping[str, Any]) -> str:
    return "&".join(f"{key}={value}" for key, value in sorted(params.items()))


def _full_url(url: str, params: Mapping[str, Any] | None) -> str:
    if not params:
        return url
    separator = "&" if "?" in url else "?"
    return f"{url}{separator}{_query_string(params)}"


def redact_headers(headers: Mapping[str, str]) -> dict[str, str]:
    """Copy of ``headers`` with credential values replaced."""
    return {
        name: REDACTED if name.lower() in SENSITIVE_HEADERS else value
        for name, value in headers.items()
    }


def redact_payload(payload: Any) -> Any:
    """Copy of a JSON-like payload with card data replaced at any depth."""
    if isinstance(payload, Mapping):
        return {
            key: REDACTED if str(key).lower() in SENSITIVE_PAYLOAD_FIELDS else redact_payload(value)
            for key, value in payload.items()
        }
    if isinstance(payload, list):
        return [redact_payload(item) for item in payload]
    return payload


def _dump(payload: Any) -> str:
    if not isinstance(payload, (dict, list)):
        return str(payload)
    try:
        return json.dumps(payload, indent=2, ensure_ascii=False)
    except (TypeError, ValueError):
        return str(payload)


def format_api_request(
    method: str,
    url: str,
    params: Mapping[str, Any] | None = None,
    headers: Mapping[str, str] | None = None,
    payload: Any = None,
) -> str:
    """Render a request for the log with secrets already redacted."""
    lines = [f"{method} {_full_url(url, params)}"]
    if headers:
        lines.append(f"Headers: {_dump(redact_headers(headers))}")
    if payload is not None:
        lines.append(f"Payload: {_dump(redact_payload(payload))}")
    return "\n".join(lines)


def log_api_request(
    method: str,
    url: str,
    params: Mapping[str, Any] | None = None,
    headers: Mapping[str, str] | None = None,
    payload: Any = None,
) -> None:
    """Log the request when tracing is enabled; a no-op otherwise.

    Args:
        method: HTTP method (GET, POST).
        url: Request URL without the query string.
        params: Query parameters, appended to the URL in sorted order.
        headers: Request headers; credentials are redacted.
        payload: JSON body; card fields are redacted.
    """
    if not should_log_requests():
        return
    logger.info("API Request:\n" + format_api_request(method, url, params, headers, payload))
