# =============================================================================
# core/api_client.py  —  HTTP Access to the Instant-System API
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Everything the adapters need to talk to the upstream REST API:
#     - build_client(): an httpx.AsyncClient pointed at the InstantCore base URL
#     - fetch_json():   one GET, status check, JSON decode
#     - format_error(): turn any HTTP/JSON failure into ONE readable line
#     - path_segment(): percent-encode an id before it goes into a URL path
#
# ERROR TAXONOMY (what can go wrong on a single GET):
#   a) Transport fault: DNS, connection refused, timeout  → httpx.TransportError
#   b) Non-2xx status                                    → httpx.HTTPStatusError
#   c) Body is not JSON                                   → ValueError
#   All three are folded into UpstreamError, whose message is what the agent
#   will read.  Shape problems (valid JSON, wrong structure) are checked by
#   each adapter, since only the adapter knows what shape it expects.
#
# NO RETRIES, NO CUSTOM TIMEOUTS:
#   A failed call is reported straight back to the agent, which can decide to
#   try again.  Timeouts are httpx's defaults.
# =============================================================================

import logging
from typing import Any, Optional, Union
from urllib.parse import quote

import httpx

from core.config import Settings, settings

logger = logging.getLogger(__name__)


class UpstreamError(Exception):
    """A GET against the Instant-System API failed.  str(exc) is agent-ready."""


def build_client(config: Settings = settings) -> httpx.AsyncClient:
    """Create an AsyncClient rooted at the InstantCore base URL."""
    return httpx.AsyncClient(
        base_url=config.base_url,
        headers={"Content-Type": "application/json"},
    )


def format_error(error: BaseException) -> str:
    """Extract the most useful message from an HTTP failure.

    The upstream API usually explains itself in a JSON body like
    {"message": "Unknown line"}.  That beats httpx's generic
    "Client error '404 Not Found' for url ..." so we prefer it when present.
    """
    if isinstance(error, httpx.HTTPStatusError):
        try:
            body = error.response.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and body.get("message"):
            return str(body["message"])
    return str(error) or type(error).__name__


def normalize_key(key: Union[int, str, None], default: str = "0") -> str:
    """Coerce an optional "key" parameter to the string the API expects.

    The agent may send the key as a JSON number or leave it out entirely;
    the API only understands strings, so 42 becomes "42" and a missing or
    empty key becomes `default`.
    """
    if key is None or key == "":
        return default
    return str(key)


def path_segment(value: Union[int, str]) -> str:
    """Percent-encode one path segment.  ":" is left as is, so "SA:1" stays readable."""
    return quote(str(value), safe=":")


def _clean_params(params: Optional[dict[str, Any]]) -> Optional[dict[str, Any]]:
    # Absent optionals are omitted rather than sent as "param=".
    if params is None:
        return None
    return {key: value for key, value in params.items() if value is not None}


async def _get_json(client: httpx.AsyncClient, path: str, params: Optional[dict[str, Any]]) -> Any:
    logger.debug("GET %s params=%s", path, params)
    try:
        response = await client.get(path, params=_clean_params(params))
        response.raise_for_status()
        return response.json()
    except (httpx.HTTPError, ValueError) as e:
        message = format_error(e)
        logger.warning("GET %s failed: %s", path, message)
        raise UpstreamError(message) from e


async def fetch_json(
    path: str,
    params: Optional[dict[str, Any]] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> Any:
    """GET `path` and return the decoded JSON body.

    Args:
        path: Path below the base URL, e.g. "/v3/networks/3/lines".
        params: Query parameters.  None values are dropped; lists are sent as
            repeated keys.
        client: An existing AsyncClient to reuse.  When omitted, a client is
            opened for this one call and closed afterwards.

    Raises:
        UpstreamError: on transport faults, non-2xx statuses or non-JSON bodies.
    """
    if client is not None:
        return await _get_json(client, path, params)
    async with build_client() as owned:
        return await _get_json(owned, path, params)
