# docmirror/core/http.py
"""
HTTP client factory and error mapping for the GitHub REST API.

Usage:
    from docmirror.core.http import create_api_client, raise_for_status

    client = create_api_client(
        base_url="https://api.github.com",
        api_key=token,
        auth_scheme="token",
    )
    response = client.get("/rate_limit")
    raise_for_status(response, provider="github", endpoint="/rate_limit")

Design principles:
    - Single place to configure base URL, headers, auth and timeouts
    - HTTP failures surface as APIError subclasses, never raw httpx errors
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

import httpx

from docmirror.logging.logger import get_logger

logger = get_logger(__name__)


# =============================================================================
# Errors
# =============================================================================


@dataclass
class APIError(Exception):
    """
    Structured API error with details.

    Attributes:
        message: Human-readable error message
        status_code: HTTP status code (if available)
        provider: API provider name (e.g., "github")
        endpoint: API endpoint that failed
        details: Additional error details from the API response
        original_error: The original exception that caused this error
    """

    message: str
    status_code: Optional[int] = None
    provider: Optional[str] = None
    endpoint: Optional[str] = None
    details: Optional[str] = None
    original_error: Optional[Exception] = None

    def __str__(self) -> str:
        parts = [self.message]

        if self.status_code:
            parts.append(f"(HTTP {self.status_code})")

        if self.endpoint:
            parts.append(f"[{self.endpoint}]")

        if self.details:
            parts.append(f"- {self.details}")

        return " ".join(parts)


class RateLimitError(APIError):
    """Raised when the API rate limit is exhausted."""

    pass


class AuthenticationError(APIError):
    """Raised when API authentication fails."""

    pass


class NotFoundError(APIError):
    """Raised when a repository, branch, tree or blob doesn't exist."""

    pass


# =============================================================================
# Default Configuration
# =============================================================================

DEFAULT_TIMEOUT = 30.0

DEFAULT_HEADERS = {
    "Accept": "application/vnd.github+json",
    "User-Agent": "docmirror",
}


# =============================================================================
# Client Factory
# =============================================================================


def create_api_client(
    base_url: str,
    api_key: Optional[str] = None,
    timeout: Optional[float] = None,
    auth_scheme: str = "Bearer",
    **kwargs: Any,
) -> httpx.Client:
    """
    Create a configured HTTP client for API calls.

    Args:
        base_url: Base URL for the API (e.g., "https://api.github.com")
        api_key: Credential for authentication (optional)
        timeout: Request timeout in seconds
        auth_scheme: Authentication scheme (GitHub accepts "token" or "Bearer")
        **kwargs: Additional arguments passed to httpx.Client (e.g. transport)

    Returns:
        Configured httpx.Client instance
    """
    if timeout is None:
        timeout = DEFAULT_TIMEOUT

    final_headers = dict(DEFAULT_HEADERS)

    if api_key:
        final_headers["Authorization"] = f"{auth_scheme} {api_key}"

    client = httpx.Client(
        base_url=base_url,
        headers=final_headers,
        timeout=timeout,
        **kwargs,
    )

    logger.debug(f"Created HTTP client for {base_url} (timeout={timeout}s)")

    return client


# =============================================================================
# Error Handling
# =============================================================================


def _error_details(response: httpx.Response) -> Optional[str]:
    try:
        data = response.json()
    except ValueError:
        return response.text[:200] if response.text else None

    if isinstance(data, dict):
        return data.get("message")
    return None


def handle_api_error(
    exc: Exception,
    provider: str = "unknown",
    endpoint: str = "",
) -> APIError:
    """
    Convert an httpx exception to a structured APIError.

    Example:
        try:
            response = client.get("/rate_limit")
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise handle_api_error(exc, provider="github", endpoint="/rate_limit")
    """
    if isinstance(exc, httpx.HTTPStatusError):
        response = exc.response
        status_code = response.status_code
        details = _error_details(response)

        if status_code == 401:
            return AuthenticationError(
                message=f"{provider} authentication failed",
                status_code=status_code,
                provider=provider,
                endpoint=endpoint,
                details=details,
                original_error=exc,
            )

        # GitHub signals an exhausted quota with 403 + X-RateLimit-Remaining: 0
        exhausted = response.headers.get("X-RateLimit-Remaining") == "0"
        if status_code == 429 or (status_code == 403 and exhausted):
            return RateLimitError(
                message=f"{provider} rate limit exceeded",
                status_code=status_code,
                provider=provider,
                endpoint=endpoint,
                details=details,
                original_error=exc,
            )

        if status_code == 404:
            return NotFoundError(
                message=f"{provider} resource not found",
                status_code=status_code,
                provider=provider,
                endpoint=endpoint,
                details=details,
                original_error=exc,
            )

        return APIError(
            message=f"{provider} API request failed",
            status_code=status_code,
            provider=provider,
            endpoint=endpoint,
            details=details,
            original_error=exc,
        )

    if isinstance(exc, httpx.ConnectError):
        return APIError(
            message=f"Failed to connect to {provider}",
            provider=provider,
            endpoint=endpoint,
            details=str(exc),
            original_error=exc,
        )

    if isinstance(exc, httpx.TimeoutException):
        return APIError(
            message=f"{provider} request timed out",
            provider=provider,
            endpoint=endpoint,
            details="Consider increasing github.timeout",
            original_error=exc,
        )

    return APIError(
        message=f"{provider} request failed: {exc}",
        provider=provider,
        endpoint=endpoint,
        original_error=exc,
    )


def raise_for_status(
    response: httpx.Response,
    provider: str = "unknown",
    endpoint: str = "",
) -> None:
    """
    Check response status and raise appropriate APIError if failed.

    Raises:
        APIError: If the response indicates an error
    """
    try:
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise handle_api_error(exc, provider=provider, endpoint=endpoint) from exc


__all__ = [
    "APIError",
    "RateLimitError",
    "AuthenticationError",
    "NotFoundError",
    "create_api_client",
    "handle_api_error",
    "raise_for_status",
]
