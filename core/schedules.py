# =============================================================================
# core/schedules.py  —  Departures & Disruptions
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   The "live" side of the network: upcoming departures at a stop, and the
#   service disruptions currently published for the network.
#
# PARAMETER NORMALIZATION:
#   The upstream API is picky about its query strings, so both adapters
#   normalize optional parameters before sending them:
#     - key         → always a string; a missing key becomes "0"
#     - displayName → "" when not given
#     - userlatlon  → "" when not given
#     - subNetworks → one-element list, or omitted entirely
#   A numeric key coming from the agent (JSON numbers are common) is
#   therefore transmitted as "42", never 42.
#
# SUMMARIZING, NOT DUMPING:
#   A busy stop can return dozens of departures.  The text summary lists
#   them one per line in a compact form; the full records are still in
#   metadata for the agent to inspect if it needs to.
# =============================================================================

from typing import Any, Optional, Union

import httpx

from core.api_client import UpstreamError, fetch_json, normalize_key, path_segment
from core.config import settings
from core.models import Disruption, Schedule, ToolResponse


def _as_list(data: Any, field_name: str) -> Optional[list]:
    # Endpoints answer with either a bare list or {"<field_name>": [...]}.
    if isinstance(data, list):
        return data
    if isinstance(data, dict) and isinstance(data.get(field_name), list):
        return data[field_name]
    return None


def _describe_departure(schedule: Schedule) -> str:
    row = f"- {schedule.destination_display or 'Unknown destination'} at {schedule.departure_date_time}"
    if schedule.departure_wait:
        row += f" (in {schedule.departure_wait} min)"
    if schedule.real_time:
        row += " [real time]"
    return row


async def line_stop_area_schedules_get(
    line_id: str,
    stop_area_id: str,
    display_name: str = "",
    key: Union[int, str, None] = None,
    userlatlon: str = "",
    client: Optional[httpx.AsyncClient] = None,
) -> ToolResponse:
    """Upcoming departures of one line at one stop area.

    Args:
        line_id: Line id, as returned by linesGet.
        stop_area_id: Stop area id, as returned by lineStopAreasGet.
        display_name: Optional display name forwarded to the API.
        key: Optional numeric key; sent as a string, "0" when absent.
        userlatlon: Optional "lat,lon" of the rider.
    """
    path = (
        f"{settings.network_path}/lines/{path_segment(line_id)}"
        f"/stopAreas/{path_segment(stop_area_id)}/schedules"
    )
    try:
        data = await fetch_json(
            path,
            params={
                "displayName": display_name or "",
                "key": normalize_key(key),
                "userlatlon": userlatlon or "",
            },
            client=client,
        )
    except UpstreamError as e:
        return ToolResponse.error(f"Error getting schedules: {e}")

    raw_schedules = _as_list(data, "schedules")
    if raw_schedules is None:
        return ToolResponse.error(f"Error getting schedules: Invalid response format. Response: {data!r}")

    schedules = [Schedule.from_dict(item) for item in raw_schedules if isinstance(item, dict)]
    text = f"Found {len(schedules)} schedules for stop area {stop_area_id} on line {line_id}"
    if schedules:
        text += ":\n" + "\n".join(_describe_departure(schedule) for schedule in schedules)
    return ToolResponse.ok(text, metadata={"schedules": raw_schedules})


async def disruptions_get(
    sub_networks: Optional[str] = None,
    key: Union[int, str, None] = None,
    userlatlon: str = "",
    client: Optional[httpx.AsyncClient] = None,
) -> ToolResponse:
    """Disruptions currently published for the network's lines."""
    try:
        data = await fetch_json(
            f"{settings.network_path}/lines/disruptions",
            params={
                "subNetworks": [sub_networks] if sub_networks else [],
                "key": normalize_key(key),
                "userlatlon": userlatlon or "",
            },
            client=client,
        )
    except UpstreamError as e:
        return ToolResponse.error(f"Error getting disruptions: {e}")

    raw_disruptions = _as_list(data, "disruptions")
    if raw_disruptions is None:
        return ToolResponse.error(f"Error getting disruptions: Invalid response format. Response: {data!r}")

    disruptions = [Disruption.from_dict(item) for item in raw_disruptions if isinstance(item, dict)]
    text = f"Found {len(disruptions)} disruptions for network {settings.network_id}"
    if disruptions:
        rows = []
        for disruption in disruptions:
            level = f"[{disruption.level}] " if disruption.level else ""
            rows.append(f"- {level}{disruption.title} (ID: {disruption.id})")
            if disruption.start_validity or disruption.end_validity:
                rows.append(f"  Valid: {disruption.start_validity or '?'} to {disruption.end_validity or '?'}")
            rows.extend(f"  {message}" for message in disruption.messages if message)
        text += ":\n" + "\n".join(rows)
    return ToolResponse.ok(text, metadata={"disruptions": raw_disruptions})
