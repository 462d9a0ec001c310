"""Stateless JSON transport for the Hue bridge REST API."""

import logging
from typing import Any, Dict, Optional

import httpx

from .config import config

logger = logging.getLogger(__name__)


class HueError(Exception):
    """Base exception for all Hue-related errors."""

    pass


class HueConnectionError(HueError):
    """Network/connection related errors."""

    pass


class HueTimeoutError(HueError):
    """Request timeout errors."""

    pass


class HueValidationError(HueError):
    """Parameter validation errors."""

    pass


class HueApiError(HueError):
    """The bridge answered with an error element (or nothing at all)."""

    def __init__(self, payload: Optional[Dict[str, Any]]):
        self.payload = payload
        error = (payload or {}).get("error") or {}
        self.error_type = error.get("type")
        self.description = error.get("description")
        if payload is None:
            message = "Hue API error: empty response"
        else:
            message = f"Hue API error: {self.description or 'Unknown error'}"
        super().__init__(message)


class AuthorizationError(HueApiError):
    """The bridge refused to authorize this application."""

    pass


class AuthorizationTimeoutError(HueError):
    """The link button was not pressed in time."""

    pass


class BridgeNotFoundError(HueError):
    """Discovery did not list the requested bridge."""

    def __init__(self, bridge_id: Optional[str]):
        self.bridge_id = bridge_id
        super().__init__(f"Bridge not found: {bridge_id}")


def _timeout() -> httpx.Timeout:
    return httpx.Timeout(
        connect=config.timeout_connect,
        read=config.timeout_read,
        write=5.0,
        pool=5.0,
    )


async def perform_json(action: str, url: str, body: Optional[Any] = None) -> Any:
    """Perform a single HTTP call and return the parsed JSON response.

    The bridge reports API errors inside a 200 response, so the body is
    parsed regardless of status code. Every call opens its own client.
    """
    method = action.upper()
    logger.debug(f"{method} {url} {body if body is not None else ''}")

    try:
        async with httpx.AsyncClient(timeout=_timeout()) as client:
            response = await client.request(method, url, json=body)
    except httpx.TimeoutException as e:
        raise HueTimeoutError(f"Request timeout: {method} {url}: {e}") from e
    except httpx.RequestError as e:
        raise HueConnectionError(f"Request failed: {method} {url}: {e}") from e

    try:
        return response.json()
    except ValueError as e:
        raise HueConnectionError(
            f"Invalid JSON response from {url} (HTTP {response.status_code})"
        ) from e


async def get_json(url: str) -> Any:
    return await perform_json("GET", url)


async def post_json(url: str, body: Any) -> Any:
    return await perform_json("POST", url, body)


async def delete_json(url: str) -> Any:
    return await perform_json("DELETE", url)
