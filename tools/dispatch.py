# =============================================================================
# tools/dispatch.py  —  The Uniform Call Path for Every Tool
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Every MCP tool in mcp_server.py funnels through run_tool():
#
#     1. log the incoming call (CYAN)
#     2. await the core/ adapter
#     3. if the adapter blew up anyway, turn the exception into an
#        error-flagged envelope (never let a raw fault reach the host)
#     4. log the outgoing envelope (GREEN) and return it as a dict
#
#   Adapters in core/ already report EXPECTED failures (HTTP errors, bad
#   payloads) as ToolResponse.error(...).  The try/except here only catches
#   what slipped through, e.g. a formatter tripping over a payload shape
#   nobody anticipated.
#
# LOGGING GOES TO STDERR:
#   stdout is the MCP transport.  A single print() to stdout corrupts the
#   JSON-RPC stream and the host drops the connection.  mcp_server.py points
#   the root logger at stderr; this module only uses `logging`.
#
# ANSI COLOR CODES:
#     - CYAN for incoming requests (tool name + parameters)
#     - GREEN for response envelopes
#     - YELLOW for intermediate status / failures
# =============================================================================

import json
import logging
from typing import Any, Awaitable, Callable, Optional

from core.models import ToolResponse

logger = logging.getLogger(__name__)

# ANSI color codes for terminal output
_CYAN = "\033[36m"     # Requests (tool calls with params)
_GREEN = "\033[32m"    # Responses (JSON output)
_YELLOW = "\033[33m"   # Status/progress messages
_RESET = "\033[0m"     # Reset to default terminal color


def _log_request(tool_name: str, **params) -> None:
    """Log an incoming tool call with its parameters in CYAN."""
    param_str = ", ".join(f"{k}={v!r}" for k, v in params.items())
    logger.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def _log_status(message: str) -> None:
    """Log an intermediate status message in YELLOW."""
    logger.info(f"{_YELLOW}  → {message}{_RESET}")


def _log_response(tool_name: str, result: dict) -> dict:
    """Log the envelope (without the bulky metadata) in GREEN, then return it."""
    summary = {k: v for k, v in result.items() if k != "metadata"}
    logger.info(
        f"{_GREEN}  ← {tool_name} response: "
        f"{json.dumps(summary, separators=(',', ':'), ensure_ascii=False)}{_RESET}"
    )
    return result


async def run_tool(
    tool_name: str,
    adapter: Callable[..., Awaitable[Optional[ToolResponse]]],
    **params: Any,
) -> dict:
    """Run one adapter and always come back with an envelope dict.

    Args:
        tool_name: The MCP tool name, used in logs and fallback messages.
        adapter: An async core/ function returning a ToolResponse.
        **params: Keyword arguments forwarded to the adapter as-is.

    Returns:
        {"content": [{"type": "text", "text": ...}], "isError"?: True, "metadata"?: ...}
    """
    _log_request(tool_name, **params)

    try:
        response = await adapter(**params)
    except Exception as e:
        logger.exception(f"{tool_name} failed")
        response = ToolResponse.error(f"Error running {tool_name}: {e}")

    if response is None:
        response = ToolResponse.error(f"Failed to get a response from {tool_name}")

    if response.is_error:
        _log_status(f"{tool_name} reported an error")
    return _log_response(tool_name, response.to_dict())
