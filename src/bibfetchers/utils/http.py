"""HTTP utilities shared by the concrete fetchers."""

import logging
from typing import Any

import certifi
import httpx

from bibfetchers.exceptions import NetworkError, RateLimitError

logger = logging.getLogger(__name__)

# Default timeout for HTTP requests (in seconds)
DEFAULT_TIMEOUT = 30.0

DEFAULT_HEADERS = {
    "User-Agent": "bibfetchers/0.3 (+https://github.com/bibfetchers/bibfetchers)",
    "Accept-Language": "en-US,en;q=0.9",
}
"""Default HTTP headers used for outbound requests."""

# User-friendly HTTP error messages
HTTP_ERROR_MESSAGES = {
    400: "Bad request - the server couldn't understand the request",
    401: "Authentication required - check the API key for this source",
    403: "Access denied - the server blocked this request",
    429: "Rate limited - please wait before making more requests",
    500: "Server error - the server encountered an internal problem",
    502: "Bad gateway - the server received an invalid response",
    503: "Service unavailable - the server is temporarily overloaded",
    504: "Gateway timeout - the server took too long to respond",
}


def get_friendly_error_message(status_code: int) -> str:
    """Get a user-friendly error message for an HTTP status code."""
    return HTTP_ERROR_MESSAGES.get(status_code, f"HTTP error {status_code}")


def get_client(**kwargs) -> httpx.Client:
    """Get a configured HTTP client.

    Args:
        **kwargs: Additional arguments to pass to httpx.Client.

    Returns:
        Configured httpx.Client instance.
    """
    return httpx.Client(
        timeout=kwargs.pop("timeout", DEFAULT_TIMEOUT),
        headers={**DEFAULT_HEADERS, **kwargs.pop("headers", {})},
        follow_redirects=True,
        max_redirects=10,
        verify=certifi.where(),
        **kwargs,
    )


def _request(
    method: str,
    url: str,
    params: dict[str, Any] | None = None,
    headers: dict[str, str] | None = None,
    timeout: float = DEFAULT_TIMEOUT,
    json: Any | None = None,
) -> httpx.Response | None:
    """Send a request, mapping 404 to None and other failures to NetworkError.

    Raises:
        RateLimitError: If the source answers 429.
        NetworkError: On connection problems or other HTTP errors.
    """
    logger.debug(f"{method} {url} params={params}")
    try:
        with get_client(timeout=timeout, headers=headers or {}) as client:
            response = client.request(method, url, params=params, json=json)
            if response.status_code == 404:
                return None
            if response.status_code == 429:
                raise RateLimitError(
                    "Rate limited by server",
                    details=f"URL: {url}",
                )
            response.raise_for_status()
            return response
    except httpx.HTTPStatusError as e:
        raise NetworkError(
            get_friendly_error_message(e.response.status_code),
            details=f"URL: {url}",
        ) from e
    except httpx.RequestError as e:
        raise NetworkError(
            f"Request failed: {e}",
            details=f"URL: {url}",
        ) from e


def get_json(
    url: str,
    params: dict[str, Any] | None = None,
    headers: dict[str, str] | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> Any | None:
    """GET a JSON document. Returns None when the resource does not exist."""
    response = _request(
        "GET",
        url,
        params=params,
        headers={"Accept": "application/json", **(headers or {})},
        timeout=timeout,
    )
    if response is None:
        return None
    try:
        return response.json()
    except ValueError as e:
        raise NetworkError("Invalid JSON in response", details=f"URL: {url}") from e


def get_text(
    url: str,
    params: dict[str, Any] | None = None,
    headers: dict[str, str] | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> str | None:
    """GET a text document. Returns None when the resource does not exist."""
    response = _request("GET", url, params=params, headers=headers, timeout=timeout)
    return response.text if response is not None else None


def head_url(
    url: str,
    headers: dict[str, str] | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> tuple[str, str] | None:
    """HEAD a URL after redirects.

    Returns:
        (final URL, content type) or None when the resource does not exist.
    """
    response = _request("HEAD", url, headers=headers, timeout=timeout)
    if response is None:
        return None
    return str(response.url), response.headers.get("content-type", "")


def post_json(
    url: str,
    body: Any,
    headers: dict[str, str] | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> Any | None:
    """POST a JSON body and decode the JSON answer."""
    response = _request(
        "POST",
        url,
        headers={"Accept": "application/json", **(headers or {})},
        timeout=timeout,
        json=body,
    )
    if response is None:
        return None
    try:
        return response.json()
    except ValueError as e:
        raise NetworkError("Invalid JSON in response", details=f"URL: {url}") from e
