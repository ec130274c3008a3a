"""Shared HTTP helpers used by the repository provider clients.

Encapsulates common request/timeout error handling so the provider clients
avoid duplicating try/except blocks. Every call is a single attempt: failures
are reported to the caller, which decides whether they exclude one
repository or a whole source.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional, Tuple

import requests

from constants import Constants
from common.logging_utils import extra_context, is_debug_enabled, safe_url, Timer
from repository.errors import ProviderRequestError

logger = logging.getLogger(__name__)


def safe_get(url: str, *, context: str, **kwargs: Any) -> requests.Response:
    """Perform a GET request with consistent error handling and DEBUG traces.

    Args:
        url: Target URL.
        context: Human-readable source tag for logs (e.g., "github", "gitlab").
        **kwargs: Passed through to requests.get.

    Returns:
        requests.Response: The HTTP response object.

    Raises:
        ProviderRequestError: On timeout or any other transport failure.
    """
    safe_target = safe_url(url)
    with Timer() as t:
        if is_debug_enabled(logger):
            logger.debug(
                "HTTP request",
                extra=extra_context(
                    event="http_request",
                    component="http_client",
                    action="GET",
                    target=safe_target,
                    source=context
                )
            )
        try:
            res = requests.get(url, timeout=Constants.REQUEST_TIMEOUT, **kwargs)
        except requests.Timeout as exc:
            raise ProviderRequestError(
                f"{context} request to {safe_target} timed out after "
                f"{Constants.REQUEST_TIMEOUT} seconds"
            ) from exc
        except requests.RequestException as exc:  # includes ConnectionError
            raise ProviderRequestError(
                f"{context} connection error for {safe_target}: {exc}"
            ) from exc
        if is_debug_enabled(logger):
            logger.debug(
                "HTTP response",
                extra=extra_context(
                    event="http_response",
                    component="http_client",
                    action="GET",
                    status_code=res.status_code,
                    duration_ms=t.duration_ms(),
                    target=safe_target,
                    source=context
                )
            )
        return res


def get_json(
    url: str,
    *,
    context: str,
    headers: Optional[Dict[str, str]] = None,
    **kwargs: Any
) -> Tuple[int, Dict[str, str], Optional[Any]]:
    """Perform a GET request and parse the JSON response.

    Args:
        url: Target URL
        context: Human-readable source tag for logs
        headers: Optional request headers
        **kwargs: Additional requests.get parameters

    Returns:
        Tuple of (status_code, headers_dict, parsed_json_or_none). Header
        names are lower-cased. The body is None unless the status is 2xx and
        the payload is valid JSON.

    Raises:
        ProviderRequestError: On transport failure.
    """
    res = safe_get(url, context=context, headers=headers, **kwargs)
    response_headers = {k.lower(): v for k, v in res.headers.items()}

    if 200 <= res.status_code < 300 and res.text:
        try:
            return res.status_code, response_headers, json.loads(res.text)
        except json.JSONDecodeError:
            if is_debug_enabled(logger):
                logger.debug(
                    "JSON decode error",
                    extra=extra_context(
                        event="parse",
                        component="http_client",
                        action="get_json",
                        outcome="json_decode_error",
                        status_code=res.status_code,
                        target=safe_url(url)
                    )
                )
            return res.status_code, response_headers, None

    return res.status_code, response_headers, None


def require_json(
    url: str,
    *,
    context: str,
    headers: Optional[Dict[str, str]] = None,
    **kwargs: Any
) -> Tuple[Dict[str, str], Any]:
    """Like get_json, but treat any non-2xx status or unparsable body as an error.

    Returns:
        Tuple of (headers_dict, parsed_json).

    Raises:
        ProviderRequestError: On transport failure, error status or invalid JSON.
    """
    status, response_headers, data = get_json(url, context=context, headers=headers, **kwargs)
    if not 200 <= status < 300:
        raise ProviderRequestError(
            f"{context} request to {safe_url(url)} returned HTTP {status}",
            status_code=status,
        )
    if data is None:
        raise ProviderRequestError(
            f"{context} request to {safe_url(url)} returned an invalid JSON body",
            status_code=status,
        )
    return response_headers, data
