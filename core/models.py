# =============================================================================
# core/models.py  —  Data Models (the "nouns" of the system)
# =============================================================================
#
# These dataclasses mirror the JSON shapes returned by the Instant-System API.
# They are pass-through DTOs: nothing is persisted, nothing lives longer than
# one tool call, and nothing is validated beyond the fields we actually read
# when building text summaries.
#
# WHY DATACLASSES AND NOT RAW DICTS EVERYWHERE?
#   - The formatters read `stop.name` instead of `stop.get("name", "")`
#     twenty times over.
#   - Reading these classes tells you which upstream fields the tools care
#     about.
#
# "No Phantom Fields":
#   Upstream objects carry far more than we model here (action lists,
#   pictograms, translated names...).  We keep only what the text summaries
#   use.  The FULL raw JSON is still handed back to the agent in `metadata`,
#   so nothing is lost, it just isn't modelled.
#
# Every DTO has a `from_dict` classmethod that tolerates missing keys, since
# the upstream shape is not under our control.
# =============================================================================

from dataclasses import dataclass, field
from typing import Any, Optional


def _str(data: dict, key: str) -> str:
    value = data.get(key)
    return "" if value is None else str(value)


def _num(data: dict, key: str) -> float:
    value = data.get(key)
    return value if isinstance(value, (int, float)) else 0


# -----------------------------------------------------------------------------
# Network — the transit network itself (one per server)
# -----------------------------------------------------------------------------
@dataclass
class Network:
    """A transit network as described by `/networks/{id}`."""

    id: int
    name: str
    modes: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> "Network":
        return cls(
            id=data.get("id", 0),
            name=_str(data, "name"),
            modes=list(data.get("modes") or []),
        )


# -----------------------------------------------------------------------------
# Line — a bus line ("B", "1", "Chrono C"...)
# -----------------------------------------------------------------------------
@dataclass
class Line:
    """One line of the network.  sName is the short label riders see."""

    id: str
    s_name: str                        # Short name, e.g. "B"
    l_name: str                        # Long name, e.g. "Chambéry Le Haut - Bissy"

    @classmethod
    def from_dict(cls, data: dict) -> "Line":
        return cls(
            id=_str(data, "id"),
            s_name=_str(data, "sName"),
            l_name=_str(data, "lName"),
        )


# -----------------------------------------------------------------------------
# StopArea — a named stop, possibly grouping several physical poles
# -----------------------------------------------------------------------------
@dataclass
class StopArea:
    """A stop area.  Its id is what lineStopAreaSchedulesGet expects."""

    id: str
    name: str

    @classmethod
    def from_dict(cls, data: dict) -> "StopArea":
        return cls(
            id=_str(data, "id"),
            name=_str(data, "name"),
        )


# -----------------------------------------------------------------------------
# Schedule — one upcoming departure at a stop
# -----------------------------------------------------------------------------
@dataclass
class Schedule:
    """One departure.  realTime is non-zero when the time comes from AVL data."""

    destination_display: str
    departure_date_time: str
    departure_wait: int = 0            # Minutes until departure
    real_time: bool = False

    @classmethod
    def from_dict(cls, data: dict) -> "Schedule":
        return cls(
            destination_display=_str(data, "destinationDisplay"),
            departure_date_time=_str(data, "departureDateTime"),
            departure_wait=int(_num(data, "departureWait")),
            real_time=bool(data.get("realTime")),
        )


# -----------------------------------------------------------------------------
# Disruption — a service alert
# -----------------------------------------------------------------------------
@dataclass
class Disruption:
    """A disruption notice.  `messages` keeps only the text bodies."""

    id: str
    title: str
    level: str = ""
    messages: list[str] = field(default_factory=list)
    start_validity: str = ""
    end_validity: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "Disruption":
        messages = [
            _str(message, "text")
            for message in data.get("messages") or []
            if isinstance(message, dict)
        ]
        return cls(
            id=_str(data, "id"),
            title=_str(data, "title"),
            level=_str(data, "level"),
            messages=messages,
            start_validity=_str(data, "startValidity"),
            end_validity=_str(data, "endValidity"),
        )


# -----------------------------------------------------------------------------
# VehicleJourneyDirection — one direction a line runs in
# -----------------------------------------------------------------------------
@dataclass
class VehicleJourneyDirection:
    id: str
    s_name: str
    l_name: str
    direction: str = ""
    stop_areas: list[StopArea] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> "VehicleJourneyDirection":
        return cls(
            id=_str(data, "id"),
            s_name=_str(data, "sName"),
            l_name=_str(data, "lName"),
            direction=_str(data, "direction"),
            stop_areas=[
                StopArea.from_dict(stop)
                for stop in data.get("stopAreas") or []
                if isinstance(stop, dict)
            ],
        )


# -----------------------------------------------------------------------------
# Proximity — one nearby point of interest
# -----------------------------------------------------------------------------
# The proximity endpoint returns a HETEROGENEOUS list: each entry has a
# `distance` and exactly one of `stopArea`, `bikePark`, `parkAndRide` or
# `carSharingStation`.  We model each variant separately and let `Proximity`
# carry whichever one is present.
# -----------------------------------------------------------------------------
@dataclass
class NearbyStopArea:
    id: str
    name: str
    city: str = ""
    line_names: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> "NearbyStopArea":
        return cls(
            id=_str(data, "id"),
            name=_str(data, "name"),
            city=_str(data, "city"),
            line_names=[
                _str(line, "sName")
                for line in data.get("lines") or []
                if isinstance(line, dict)
            ],
        )


@dataclass
class BikePark:
    id: str
    name: str
    city: str = ""
    capacity: int = 0                  # 0 or negative means "unknown"
    covered: bool = False

    @classmethod
    def from_dict(cls, data: dict) -> "BikePark":
        return cls(
            id=_str(data, "id"),
            name=_str(data, "name"),
            city=_str(data, "city"),
            capacity=int(_num(data, "capacity")),
            covered=bool(data.get("covered")),
        )


@dataclass
class ParkAndRide:
    id: str
    name: str
    city: str = ""
    available_parks: int = 0

    @classmethod
    def from_dict(cls, data: dict) -> "ParkAndRide":
        return cls(
            id=_str(data, "id"),
            name=_str(data, "name"),
            city=_str(data, "city"),
            available_parks=int(_num(data, "availableParks")),
        )


@dataclass
class CarSharingStation:
    id: str
    name: str
    city: str = ""
    address: str = ""
    available_vehicles: int = 0

    @classmethod
    def from_dict(cls, data: dict) -> "CarSharingStation":
        return cls(
            id=_str(data, "id"),
            name=_str(data, "name"),
            city=_str(data, "city"),
            address=_str(data, "address"),
            available_vehicles=int(_num(data, "availableVehicles")),
        )


@dataclass
class Proximity:
    """One proximity hit.  Exactly one of the variant fields is set."""

    distance: float
    stop_area: Optional[NearbyStopArea] = None
    bike_park: Optional[BikePark] = None
    park_and_ride: Optional[ParkAndRide] = None
    car_sharing_station: Optional[CarSharingStation] = None

    @classmethod
    def from_dict(cls, data: dict) -> "Proximity":
        def variant(key, model):
            value = data.get(key)
            return model.from_dict(value) if isinstance(value, dict) else None

        return cls(
            distance=_num(data, "distance"),
            stop_area=variant("stopArea", NearbyStopArea),
            bike_park=variant("bikePark", BikePark),
            park_and_ride=variant("parkAndRide", ParkAndRide),
            car_sharing_station=variant("carSharingStation", CarSharingStation),
        )


# -----------------------------------------------------------------------------
# ToolResponse — the envelope every tool returns
# -----------------------------------------------------------------------------
# This is the ONE shape the agent host ever sees:
#
#     {"content": [{"type": "text", "text": "..."}],
#      "isError": true,          # only when something went wrong
#      "metadata": {...}}        # only when there is raw data to hand back
#
# Think of it as a result type: adapters return an error-flagged
# ToolResponse instead of raising, and the dispatcher just passes it on.
# -----------------------------------------------------------------------------
@dataclass
class ToolResponse:
    """Text summary for the LLM, plus the raw upstream data for drill-down."""

    text: str
    is_error: bool = False
    metadata: Optional[Any] = None

    @classmethod
    def ok(cls, text: str, metadata: Optional[Any] = None) -> "ToolResponse":
        return cls(text=text, metadata=metadata)

    @classmethod
    def error(cls, text: str) -> "ToolResponse":
        return cls(text=text, is_error=True)

    def to_dict(self) -> dict:
        """Serialize into the MCP-style envelope (camelCase, optional keys omitted)."""
        result: dict[str, Any] = {"content": [{"type": "text", "text": self.text}]}
        if self.is_error:
            result["isError"] = True
        if self.metadata is not None:
            result["metadata"] = self.metadata
        return result
