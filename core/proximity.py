# =============================================================================
# core/proximity.py  —  "What's Near Me?" Search
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Wraps the proximity endpoint, which answers "what is around (lat, lon)?"
#   with a MIXED bag of results: bus stops, bike parks, park-and-rides and
#   car-sharing stations, each with a distance in metres.
#
# WHY GROUP BY CATEGORY?
#   A flat list sorted by distance reads badly to an LLM ("a bike park, then
#   a stop, then a car-sharing station, then another stop...").  Grouping
#   gives the agent four short labeled blocks it can quote directly:
#
#       Bus Stops (2):
#       - Gare (Chambéry) - 120m away
#         Lines: A, B
#         ID: SA:123
#
#       Bike Parks (1):
#       - ...
#
#   Sections always appear in the same order, and empty ones are skipped.
#
# EMPTY IS NOT AN ERROR:
#   Zero results is a perfectly valid answer (the user is in a field).  It
#   comes back as a normal informational message, NOT isError.
# =============================================================================

import json
import logging
from typing import Optional, Union

import httpx

from core.api_client import UpstreamError, fetch_json, normalize_key
from core.config import settings
from core.models import Proximity, ToolResponse

logger = logging.getLogger(__name__)


def _stop_area_entry(proximity: Proximity) -> str:
    stop = proximity.stop_area
    return (
        f"- {stop.name} ({stop.city}) - {proximity.distance}m away\n"
        f"  Lines: {', '.join(stop.line_names)}\n"
        f"  ID: {stop.id}"
    )


def _bike_park_entry(proximity: Proximity) -> str:
    park = proximity.bike_park
    capacity = park.capacity if park.capacity > 0 else "unknown"
    return (
        f"- {park.name} ({park.city}) - {proximity.distance}m away\n"
        f"  Capacity: {capacity}\n"
        f"  Covered: {'yes' if park.covered else 'no'}\n"
        f"  ID: {park.id}"
    )


def _park_and_ride_entry(proximity: Proximity) -> str:
    park = proximity.park_and_ride
    return (
        f"- {park.name} ({park.city}) - {proximity.distance}m away\n"
        f"  Available spots: {park.available_parks}\n"
        f"  ID: {park.id}"
    )


def _car_sharing_entry(proximity: Proximity) -> str:
    station = proximity.car_sharing_station
    return (
        f"- {station.name} ({station.city}) - {proximity.distance}m away\n"
        f"  Available vehicles: {station.available_vehicles}\n"
        f"  Address: {station.address}\n"
        f"  ID: {station.id}"
    )


# (section label, variant attribute, entry formatter), in display order
_SECTIONS = (
    ("Bus Stops", "stop_area", _stop_area_entry),
    ("Bike Parks", "bike_park", _bike_park_entry),
    ("Park & Ride", "park_and_ride", _park_and_ride_entry),
    ("Car Sharing Stations", "car_sharing_station", _car_sharing_entry),
)


def format_proximities(proximities: list[Proximity], lat: float, lon: float) -> str:
    """Render proximity hits as grouped, labeled text blocks."""
    text = f"Found {len(proximities)} points of interest near the location ({lat}, {lon}):\n\n"
    for label, attribute, render in _SECTIONS:
        members = [p for p in proximities if getattr(p, attribute) is not None]
        if not members:
            continue
        text += f"{label} ({len(members)}):\n"
        text += "\n".join(render(p) for p in members) + "\n\n"
    return text


async def proximity_get(
    lat: float,
    lon: float,
    precision: Union[int, float, None] = None,
    accessibility: Optional[bool] = None,
    scholar: Optional[int] = None,
    context: Optional[str] = None,
    key: Union[str, int, None] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> ToolResponse:
    """Find stops and other points of interest around a coordinate.

    Optional filters are only sent when given.  `key` defaults to the network
    id and is always transmitted as a string.
    """
    # Whole numbers go out as "500", not "500.0".
    if isinstance(precision, float) and precision.is_integer():
        precision = int(precision)
    hint = (
        "\n\nMake sure the coordinates are valid and within the network's coverage area."
    )
    try:
        data = await fetch_json(
            f"{settings.network_path}/proximity",
            params={
                "lat": lat,
                "lon": lon,
                "precision": precision,
                "accessibility": accessibility,
                "scholar": scholar,
                "context": context,
                "key": normalize_key(key, default=str(settings.network_id)),
            },
            client=client,
        )
    except UpstreamError as e:
        return ToolResponse.error(f"Error finding nearby points of interest: {e}{hint}")

    if not isinstance(data, dict) or not isinstance(data.get("proximities"), list):
        logger.warning("Unexpected proximity payload: %r", data)
        return ToolResponse.error(
            f"Invalid response format from proximity API. Response: {json.dumps(data)}"
        )

    raw_proximities = data["proximities"]
    shapes = data.get("shapes") or []

    if not raw_proximities:
        return ToolResponse.ok(
            f"No points of interest found near the specified location ({lat}, {lon}). "
            "Try adjusting the search area."
        )

    proximities = [Proximity.from_dict(item) for item in raw_proximities if isinstance(item, dict)]
    return ToolResponse.ok(
        format_proximities(proximities, lat, lon),
        metadata={"proximities": raw_proximities, "shapes": shapes},
    )
