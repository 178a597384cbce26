# =============================================================================
# tools/mcp_server.py  —  FastMCP Tool Server (ALL tools in one place)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Declares the eight MCP tools that expose the Synchro Bus (Instant-System)
#   API to an agent.  Each tool is a thin wrapper around ONE core/ adapter:
#
#     networkGet                    → core.network.network_get
#     linesGet                      → core.network.lines_get
#     lineGet                       → core.network.line_get
#     lineStopAreasGet              → core.network.line_stop_areas_get
#     lineStopAreaSchedulesGet      → core.schedules.line_stop_area_schedules_get
#     disruptionsGet                → core.schedules.disruptions_get
#     vehicleJourneysDirectionsGet  → core.network.vehicle_journeys_directions_get
#     proximityGet                  → core.proximity.proximity_get
#
# HOW IT WORKS (the flow):
#   1. The agent host calls a tool by name over stdio (e.g. "lineGet")
#   2. FastMCP validates the arguments against the schema it derived from
#      the type hints below, then calls the decorated function
#   3. The function hands off to tools.dispatch.run_tool, which awaits the
#      adapter and always returns an envelope dict
#   4. Success → the envelope goes back as the tool result
#      Failure → we raise ToolError so the host sees isError=true
#
# TOOL NAMES:
#   camelCase, because that is what existing clients of this server already
#   call.  Python-side adapters keep snake_case.
#
# RUNNING THIS SERVER:
#     a) Standalone:  python -m tools.mcp_server   (or: synchro-bus-mcp)
#     b) As a subprocess of the agent host in agent/transit_agent.py
# =============================================================================

import logging
import sys
from typing import Annotated, Optional, Union

from dotenv import load_dotenv

# Load .env BEFORE importing core/, which reads the server identity from the
# environment at import time.
load_dotenv()

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from pydantic import Field

from core import network, proximity, schedules
from core.config import settings
from tools.dispatch import run_tool

# =============================================================================
# Logging Setup
# =============================================================================
# STDERR only: stdout is the MCP transport.
# =============================================================================
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [MCP] %(message)s",
    datefmt="%H:%M:%S",
    stream=sys.stderr,
)

LineId = Annotated[str, Field(min_length=1, description="Line ID, e.g. \"B\", \"1\", \"2\"")]


def _respond(envelope: dict) -> dict:
    """Return a successful envelope, or raise ToolError for a failed one."""
    if envelope.get("isError"):
        raise ToolError(envelope["content"][0]["text"])
    return envelope


# =============================================================================
# Create the FastMCP server instance
# =============================================================================
mcp = FastMCP(
    settings.server_name,
    version=settings.server_version,
    instructions=(
        "Real-time and static data for the Synchro Bus network (Chambéry). "
        "Use lineStopAreasGet to find stop area IDs before asking for schedules."
    ),
)


# =============================================================================
# NETWORK & LINES
# =============================================================================
@mcp.tool()
async def networkGet() -> dict:
    """Get information about the Synchro Bus network (name, ID, transport modes)."""
    return _respond(await run_tool("networkGet", network.network_get))


@mcp.tool()
async def linesGet() -> dict:
    """List every line of the network with its short name, long name and ID.

    WHEN TO CALL THIS: When you need a line ID and the user only gave a name
    or number ("the B", "line 3").
    """
    return _respond(await run_tool("linesGet", network.lines_get))


@mcp.tool()
async def lineGet(lineId: LineId) -> dict:
    """Get information about one line.

    Args:
        lineId: The ID of the line (e.g. "B", "1", "2").
    """
    return _respond(await run_tool("lineGet", network.line_get, line_id=lineId))


@mcp.tool()
async def lineStopAreasGet(lineId: LineId) -> dict:
    """List the stop areas served by a line, with their IDs.

    WHEN TO CALL THIS: BEFORE lineStopAreaSchedulesGet.  The stop area IDs
    returned here are the stopAreaId values the schedules tool expects.

    Args:
        lineId: The ID of the line (e.g. "B", "1", "2").

    Returns an error if the line has no stop areas, which usually means the
    line ID is wrong.
    """
    return _respond(await run_tool("lineStopAreasGet", network.line_stop_areas_get, line_id=lineId))


@mcp.tool()
async def vehicleJourneysDirectionsGet(lineId: LineId) -> dict:
    """List the directions a line runs in (e.g. outbound / return terminus).

    Args:
        lineId: The ID of the line (e.g. "B", "1", "2").
    """
    return _respond(await run_tool(
        "vehicleJourneysDirectionsGet",
        network.vehicle_journeys_directions_get,
        line_id=lineId,
    ))


# =============================================================================
# SCHEDULES & DISRUPTIONS
# =============================================================================
@mcp.tool()
async def lineStopAreaSchedulesGet(
    lineId: LineId,
    stopAreaId: Annotated[str, Field(min_length=1, description="Stop area ID from lineStopAreasGet")],
    displayName: Optional[str] = None,
    key: Optional[int] = None,
    userlatlon: Optional[str] = None,
) -> dict:
    """Get upcoming departures of a line at a stop area.

    Args:
        lineId: The ID of the line.
        stopAreaId: A stop area ID obtained from lineStopAreasGet.
        displayName: Optional display name.
        key: Optional numeric key.
        userlatlon: Optional rider position as "lat,lon".
    """
    return _respond(await run_tool(
        "lineStopAreaSchedulesGet",
        schedules.line_stop_area_schedules_get,
        line_id=lineId,
        stop_area_id=stopAreaId,
        display_name=displayName or "",
        key=key,
        userlatlon=userlatlon or "",
    ))


@mcp.tool()
async def disruptionsGet(
    subNetworks: Optional[str] = None,
    key: Optional[int] = None,
    userlatlon: Optional[str] = None,
) -> dict:
    """Get the service disruptions currently published for the network.

    WHEN TO CALL THIS: Before recommending a line or a departure, to warn the
    user about detours, cancellations or closed stops.

    Args:
        subNetworks: Optional sub-network to restrict the results to.
        key: Optional numeric key.
        userlatlon: Optional rider position as "lat,lon".
    """
    return _respond(await run_tool(
        "disruptionsGet",
        schedules.disruptions_get,
        sub_networks=subNetworks,
        key=key,
        userlatlon=userlatlon or "",
    ))


# =============================================================================
# PROXIMITY
# =============================================================================
@mcp.tool()
async def proximityGet(
    lat: Annotated[float, Field(description="Latitude of the location")],
    lon: Annotated[float, Field(description="Longitude of the location")],
    precision: Annotated[Optional[Union[int, float]], Field(description="Search precision")] = None,
    accessibility: Annotated[Optional[bool], Field(description="Whether to consider accessibility")] = None,
    scholar: Annotated[Optional[int], Field(description="Scholar mode")] = None,
    context: Annotated[Optional[str], Field(description="Context for the search")] = None,
    key: Annotated[Optional[Union[str, int]], Field(description="API key")] = None,
) -> dict:
    """Find bus stops, bike parks, park-and-rides and car-sharing stations near a coordinate.

    Results are grouped by category, each entry with its distance in metres
    and its ID.  A bus stop ID found here can be used as stopAreaId.

    Example: proximityGet(lat=45.5646, lon=5.9178) for central Chambéry.
    """
    return _respond(await run_tool(
        "proximityGet",
        proximity.proximity_get,
        lat=lat,
        lon=lon,
        precision=precision,
        accessibility=accessibility,
        scholar=scholar,
        context=context,
        key=key,
    ))


def main() -> None:
    """Console-script entry point: serve over stdio."""
    logging.info(f"Starting {settings.server_name} v{settings.server_version}")
    mcp.run()


# =============================================================================
# Server entry point
# =============================================================================
if __name__ == "__main__":
    main()
