"""HTTP client for the ticketing REST API.

Wraps an injected aiohttp session: builds URLs, attaches the bearer token,
applies a per-call timeout and maps transport failures onto the domain error
taxonomy. Nothing is retried here.
"""

import asyncio
import json
import logging
from typing import TYPE_CHECKING, Any

import aiohttp

from rail_ticketing.adapters.api_request_logger import log_api_request
from rail_ticketing.adapters.rest_api.constants import DEFAULT_HEADERS
from rail_ticketing.domain.errors import InvalidResponseShape, NetworkError, RequestTimeout
from rail_ticketing.domain.models import ErrorDetails

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from aiohttp import ClientResponse, ClientSession

DEFAULT_TIMEOUT_SECONDS = 15.0


class RestHttpClient:
    """HTTP client bound to one API base URL."""

    def __init__(
        self,
        session: "ClientSession",
        base_url: str,
        token: str | None = None,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        """Initialize with a shared aiohttp session and the API base URL."""
        self._session = session
        self._base_url = base_url.rstrip("/")
        self._token = token
        self._timeout_seconds = timeout_seconds

    @property
    def base_url(self) -> str:
        return self._base_url

    def _headers(self) -> dict[str, str]:
        headers = dict(DEFAULT_HEADERS)
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    def _url(self, path: str) -> str:
        return f"{self._base_url}/{path.lstrip('/')}"

    async def get_json(
        self,
        path: str,
        params: dict[str, Any] | None = None,
        timeout: float | None = None,
    ) -> Any:
        """GET ``path`` and decode the JSON body."""
        body = await self._request("GET", path, params=params, timeout=timeout)
        return self._decode_json(body, path)

    async def get_bytes(self, path: str, timeout: float | None = None) -> bytes:
        """GET ``path`` and return the raw body (e.g. a PNG image)."""
        return await self._request("GET", path, timeout=timeout)

    async def post_json(
        self,
        path: str,
        payload: Any = None,
        timeout: float | None = None,
    ) -> Any:
        """POST ``payload`` as JSON; returns the decoded body or None if it is empty."""
        body = await self._request("POST", path, payload=payload, timeout=timeout)
        if not body.strip():
            return None
        return self._decode_json(body, path)

    @staticmethod
    def _decode_json(body: bytes, path: str) -> Any:
        try:
            return json.loads(body)
        except (UnicodeDecodeError, ValueError) as e:
            raise InvalidResponseShape(f"Response from {path} is not valid JSON") from e

    async def _request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        payload: Any = None,
        timeout: float | None = None,
    ) -> bytes:
        url = self._url(path)
        headers = self._headers()
        log_api_request(method, url, params=params, headers=headers, payload=payload)
        client_timeout = aiohttp.ClientTimeout(total=timeout or self._timeout_seconds)

        try:
            async with self._session.request(
                method,
                url,
                params=params,
                json=payload,
                headers=headers,
                timeout=client_timeout,
            ) as response:
                if response.status >= 400:
                    await self._raise_for_status(response, method, path)
                return await response.read()
        except asyncio.TimeoutError as e:
            logger.warning(f"{method} {path} timed out")
            raise RequestTimeout(
                "The request timed out. Please try again.",
                ErrorDetails(reason=f"{method} {path} timed out"),
            ) from e
        except aiohttp.ClientError as e:
            logger.warning(f"{method} {path} failed: {e}")
            raise NetworkError(
                "Could not reach the ticketing service",
                ErrorDetails(reason=str(e) or type(e).__name__),
            ) from e

    @staticmethod
    async def _raise_for_status(response: "ClientResponse", method: str, path: str) -> None:
        """Raise NetworkError carrying the status and the server's own reason."""
        error_text = await response.text()
        reason = _server_reason(error_text) or response.reason or "Request failed"
        logger.error(f"{method} {path} returned status {response.status}: {error_text[:200]}")
        raise NetworkError(
            f"Request failed with status {response.status}: {reason}",
            ErrorDetails(status_code=response.status, reason=reason),
        )


def _server_reason(error_text: str) -> str:
    """Pick a human-readable message out of an error body, if there is one."""
    if not error_text:
        return ""
    try:
        data = json.loads(error_text)
    except ValueError:
        return error_text.strip()[:200]
    if isinstance(data, dict):
        for key in ("message", "detail", "title", "error"):
            value = data.get(key)
            if isinstance(value, str) and value:
                return value
    return ""
