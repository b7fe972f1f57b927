"""
Shared HTTP helpers.

Translates transport, status and payload failures into the client error
taxonomy so every API client raises the same exceptions.
"""

from typing import Any, Dict, Optional, TypeVar

import requests
from pydantic import TypeAdapter, ValidationError
from requests import RequestException

from cineclient.api.errors import DecodeError, NetworkError, RejectedError
from cineclient.utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

_MESSAGE_KEYS = ("message", "detail", "error")


def extract_error_message(response: requests.Response) -> Optional[str]:
    """
    Pull a human-readable message out of an error response body.

    Handles both ``{"message": "..."}`` and list-valued messages such as
    ``{"message": ["email must be an email"]}``.
    """
    try:
        body = response.json()
    except ValueError:
        return None

    if not isinstance(body, dict):
        return None

    for key in _MESSAGE_KEYS:
        value = body.get(key)
        if isinstance(value, list):
            value = "; ".join(str(item) for item in value if item)
        if isinstance(value, str) and value.strip():
            return value.strip()

    return None


def request_json(
    session: requests.Session,
    method: str,
    url: str,
    *,
    timeout: float,
    headers: Optional[Dict[str, str]] = None,
    params: Optional[Dict[str, Any]] = None,
    json_data: Any = None,
    files: Optional[Dict[str, Any]] = None,
) -> Any:
    """
    Perform a request and return the decoded JSON body.

    Returns:
        Parsed JSON, or None for an empty success body.

    Raises:
        NetworkError: On transport failure.
        RejectedError: On a non-2xx status.
        DecodeError: On a non-JSON success body.
    """
    try:
        response = session.request(
            method,
            url,
            headers=headers,
            params=params,
            json=json_data,
            files=files,
            timeout=timeout,
        )
    except RequestException as exc:
        logger.exception(
            "HTTP request failed",
            extra={"url": url, "method": method},
        )
        raise NetworkError("Unable to reach the server") from exc

    if not response.ok:
        message = extract_error_message(response)
        logger.warning(
            "Request rejected by server",
            extra={"url": url, "status_code": response.status_code},
        )
        raise RejectedError(
            message or f"Request failed with status {response.status_code}",
            status_code=response.status_code,
        )

    if not response.content:
        return None

    try:
        return response.json()

    except ValueError as exc:
        logger.exception(
            "Invalid JSON response",
            extra={"url": url},
        )
        raise DecodeError("Invalid response from server") from exc


def decode(adapter: TypeAdapter[T], payload: Any, *, url: str) -> T:
    """
    Validate a JSON payload against the expected shape.

    Raises:
        DecodeError: If the payload does not match.
    """
    try:
        return adapter.validate_python(payload)

    except ValidationError as exc:
        logger.exception(
            "Response shape mismatch",
            extra={"url": url, "errors": exc.error_count()},
        )
        raise DecodeError("Unexpected response from server") from exc
