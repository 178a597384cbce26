# =============================================================================
# core/network.py  —  Network, Lines, Stop Areas & Directions
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   The "static" side of the network: what the network is, which lines it
#   runs, which stops a line serves and which directions it runs in.
#
#   Each function here is ONE adapter:
#     1. build the path (always under /v3/networks/{network_id})
#     2. one GET via core.api_client.fetch_json
#     3. shape a short text summary for the LLM
#     4. hand the raw JSON back as metadata for drill-down
#
#   Failures never raise: they come back as ToolResponse.error(...) so the
#   dispatcher can pass them on untouched.
#
# TYPICAL AGENT FLOW:
#   linesGet → lineStopAreasGet(lineId) → lineStopAreaSchedulesGet(...)
#   The stop area ids printed by line_stop_areas_get are exactly what the
#   schedules tool expects, which is why its summary says so explicitly.
# =============================================================================

from typing import Optional

import httpx

from core.api_client import UpstreamError, fetch_json, path_segment
from core.config import settings
from core.models import Line, Network, StopArea, ToolResponse, VehicleJourneyDirection


def _invalid_format(data) -> str:
    return f"Invalid response format. Response: {data!r}"


async def network_get(client: Optional[httpx.AsyncClient] = None) -> ToolResponse:
    """Describe the configured network (name, id, modes)."""
    try:
        data = await fetch_json(settings.network_path, client=client)
    except UpstreamError as e:
        return ToolResponse.error(f"Error getting network: {e}")

    if not isinstance(data, dict):
        return ToolResponse.error(f"Error getting network: {_invalid_format(data)}")

    network = Network.from_dict(data)
    text = f"Network: {network.name} (ID: {network.id})"
    if network.modes:
        text += f"\nModes: {', '.join(network.modes)}"
    return ToolResponse.ok(text, metadata=data)


async def lines_get(client: Optional[httpx.AsyncClient] = None) -> ToolResponse:
    """List every line of the network."""
    try:
        data = await fetch_json(f"{settings.network_path}/lines", client=client)
    except UpstreamError as e:
        return ToolResponse.error(f"Error getting lines: {e}")

    if not isinstance(data, list):
        return ToolResponse.error(f"Error getting lines: {_invalid_format(data)}")

    lines = [Line.from_dict(item) for item in data if isinstance(item, dict)]
    text = f"Found {len(lines)} lines for network {settings.network_id}"
    if lines:
        text += ":\n" + "\n".join(
            f"- {line.s_name}: {line.l_name} (ID: {line.id})" for line in lines
        )
    return ToolResponse.ok(text, metadata={"lines": data})


async def line_get(line_id: str, client: Optional[httpx.AsyncClient] = None) -> ToolResponse:
    """Describe one line."""
    try:
        data = await fetch_json(f"{settings.network_path}/lines/{path_segment(line_id)}", client=client)
    except UpstreamError as e:
        return ToolResponse.error(f"Error getting line: {e}")

    if not isinstance(data, dict):
        return ToolResponse.error(f"Error getting line: {_invalid_format(data)}")

    line = Line.from_dict(data)
    return ToolResponse.ok(f"Line {line.s_name}: {line.l_name} (ID: {line.id})", metadata=data)


async def line_stop_areas_get(line_id: str, client: Optional[httpx.AsyncClient] = None) -> ToolResponse:
    """List the stop areas served by a line.

    This is the tool that yields stop area ids; lineStopAreaSchedulesGet
    needs one of them.  Unlike the other list tools, an EMPTY result is
    reported as an error: a line with no stops almost always means the agent
    passed a wrong line id, and it should be told so.
    """
    hint = (
        "\n\nMake sure to call this function first to get the stop area IDs "
        "before using lineStopAreaSchedulesGet."
    )
    try:
        data = await fetch_json(f"{settings.network_path}/lines/{path_segment(line_id)}/stopAreas", client=client)
    except UpstreamError as e:
        return ToolResponse.error(f"Error getting stop areas: {e}{hint}")

    raw_stop_areas = data.get("stopAreas") if isinstance(data, dict) else None
    if not isinstance(raw_stop_areas, list):
        return ToolResponse.error(f"Error getting stop areas: {_invalid_format(data)}{hint}")

    if not raw_stop_areas:
        return ToolResponse.error(
            f"No stop areas found for line {line_id}. Please verify the line ID is correct."
        )

    stop_areas = [StopArea.from_dict(item) for item in raw_stop_areas if isinstance(item, dict)]
    listing = "\n".join(f"- {stop.name} (ID: {stop.id})" for stop in stop_areas)
    text = (
        f"Found {len(stop_areas)} stop areas for line {line_id}:\n{listing}\n\n"
        "Use these stop area IDs with lineStopAreaSchedulesGet to get schedules "
        "for specific stops."
    )
    return ToolResponse.ok(text, metadata={"stopAreas": raw_stop_areas})


async def vehicle_journeys_directions_get(
    line_id: str,
    client: Optional[httpx.AsyncClient] = None,
) -> ToolResponse:
    """List the directions a line runs in, with their terminus stops."""
    try:
        data = await fetch_json(
            f"{settings.network_path}/lines/{path_segment(line_id)}/vehicleJourneys/directions",
            params={"key": str(settings.network_id)},
            client=client,
        )
    except UpstreamError as e:
        return ToolResponse.error(f"Error getting directions: {e}")

    if not isinstance(data, list):
        return ToolResponse.error(f"Error getting directions: {_invalid_format(data)}")

    directions = [VehicleJourneyDirection.from_dict(item) for item in data if isinstance(item, dict)]
    text = f"Found {len(directions)} directions for line {line_id}"
    if directions:
        rows = []
        for direction in directions:
            label = direction.l_name or direction.direction or direction.s_name
            row = f"- {label} (ID: {direction.id})"
            if direction.stop_areas:
                row += f", {len(direction.stop_areas)} stops"
            rows.append(row)
        text += ":\n" + "\n".join(rows)
    return ToolResponse.ok(text, metadata={"directions": data})
