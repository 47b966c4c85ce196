"""
Homes topology (/api/homesdata): homes, rooms, modules and thermostat schedules.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Optional

from .. import config as _config
from ._decode import (
    float_list,
    object_list,
    optional,
    optional_float,
    optional_object,
    require,
    require_object,
    string_list,
)

if TYPE_CHECKING:
    from ..client import AuthenticatedClient


class GatewayType(str, Enum):
    NAPLUG = "NAPlug"
    NACAMERA = "NACamera"
    NOC = "NOC"
    NSD = "NSD"
    NCO = "NCO"
    NDB = "NDB"
    NAMAIN = "NAMain"
    NHC = "NHC"


@dataclass(frozen=True)
class Parameters:
    home_id: Optional[str] = None
    gateway_types: tuple[GatewayType, ...] = ()

    def to_params(self) -> dict[str, str]:
        params: dict[str, str] = {}
        if self.home_id is not None:
            params["home_id"] = self.home_id
        if self.gateway_types:
            params["gateway_types"] = ",".join(t.value for t in self.gateway_types)
        return params


@dataclass(frozen=True)
class Room:
    id: str
    name: Optional[str]
    type: Optional[str]
    module_ids: tuple[str, ...]

    @classmethod
    def from_dict(cls, obj: dict[str, Any]) -> Room:
        return cls(
            id=require(obj, "id", str, what="room"),
            name=optional(obj, "name", str, what="room"),
            type=optional(obj, "type", str, what="room"),
            module_ids=string_list(obj, "module_ids", what="room"),
        )


@dataclass(frozen=True)
class HomeModule:
    id: str
    type: str
    name: Optional[str]
    setup_date: Optional[int]
    room_id: Optional[str]
    bridge: Optional[str]
    modules_bridged: tuple[str, ...]

    @classmethod
    def from_dict(cls, obj: dict[str, Any]) -> HomeModule:
        what = "module"
        return cls(
            id=require(obj, "id", str, what=what),
            type=require(obj, "type", str, what=what),
            name=optional(obj, "name", str, what=what),
            setup_date=optional(obj, "setup_date", int, what=what),
            room_id=optional(obj, "room_id", str, what=what),
            bridge=optional(obj, "bridge", str, what=what),
            modules_bridged=string_list(obj, "modules_bridged", what=what),
        )


@dataclass(frozen=True)
class TimetableEntry:
    zone_id: int
    # Minutes since Monday 00:00.
    m_offset: int

    @classmethod
    def from_dict(cls, obj: dict[str, Any]) -> TimetableEntry:
        return cls(
            zone_id=require(obj, "zone_id", int, what="timetable"),
            m_offset=require(obj, "m_offset", int, what="timetable"),
        )


@dataclass(frozen=True)
class ZoneRoom:
    id: str
    therm_setpoint_temperature: Optional[float]

    @classmethod
    def from_dict(cls, obj: dict[str, Any]) -> ZoneRoom:
        return cls(
            id=require(obj, "id", str, what="zone room"),
            therm_setpoint_temperature=optional_float(obj, "therm_setpoint_temperature", what="zone room"),
        )


@dataclass(frozen=True)
class Zone:
    id: int
    name: Optional[str]
    type: Optional[int]
    rooms: tuple[ZoneRoom, ...]

    @classmethod
    def from_dict(cls, obj: dict[str, Any]) -> Zone:
        return cls(
            id=require(obj, "id", int, what="zone"),
            name=optional(obj, "name", str, what="zone"),
            type=optional(obj, "type", int, what="zone"),
            rooms=object_list(obj, "rooms", ZoneRoom.from_dict, what="zone"),
        )


@dataclass(frozen=True)
class Schedule:
    id: str
    name: Optional[str]
    type: Optional[str]
    default: Optional[bool]
    selected: Optional[bool]
    hg_temp: Optional[float]
    away_temp: Optional[float]
    timetable: tuple[TimetableEntry, ...]
    zones: tuple[Zone, ...]

    @classmethod
    def from_dict(cls, obj: dict[str, Any]) -> Schedule:
        what = "schedule"
        return cls(
            id=require(obj, "id", str, what=what),
            name=optional(obj, "name", str, what=what),
            type=optional(obj, "type", str, what=what),
            default=optional(obj, "default", bool, what=what),
            selected=optional(obj, "selected", bool, what=what),
            hg_temp=optional_float(obj, "hg_temp", what=what),
            away_temp=optional_float(obj, "away_temp", what=what),
            timetable=object_list(obj, "timetable", TimetableEntry.from_dict, what=what),
            zones=object_list(obj, "zones", Zone.from_dict, what=what),
        )


@dataclass(frozen=True)
class Home:
    id: str
    name: Optional[str]
    altitude: Optional[float]
    coordinates: tuple[float, ...]
    country: Optional[str]
    timezone: Optional[str]
    therm_mode: Optional[str]
    therm_setpoint_default_duration: Optional[int]
    rooms: tuple[Room, ...]
    modules: tuple[HomeModule, ...]
    schedules: tuple[Schedule, ...]

    @classmethod
    def from_dict(cls, obj: dict[str, Any]) -> Home:
        what = "home"
        return cls(
            id=require(obj, "id", str, what=what),
            name=optional(obj, "name", str, what=what),
            altitude=optional_float(obj, "altitude", what=what),
            coordinates=float_list(obj, "coordinates", what=what),
            country=optional(obj, "country", str, what=what),
            timezone=optional(obj, "timezone", str, what=what),
            therm_mode=optional(obj, "therm_mode", str, what=what),
            therm_setpoint_default_duration=optional(obj, "therm_setpoint_default_duration", int, what=what),
            rooms=object_list(obj, "rooms", Room.from_dict, what=what),
            modules=object_list(obj, "modules", HomeModule.from_dict, what=what),
            schedules=object_list(obj, "schedules", Schedule.from_dict, what=what),
        )


@dataclass(frozen=True)
class User:
    id: Optional[str]
    email: Optional[str]
    language: Optional[str]
    locale: Optional[str]
    feel_like_algorithm: Optional[int]
    unit_pressure: Optional[int]
    unit_system: Optional[int]
    unit_wind: Optional[int]

    @classmethod
    def from_dict(cls, obj: dict[str, Any]) -> User:
        what = "user"
        return cls(
            id=optional(obj, "id", str, what=what),
            email=optional(obj, "email", str, what=what),
            language=optional(obj, "language", str, what=what),
            locale=optional(obj, "locale", str, what=what),
            feel_like_algorithm=optional(obj, "feel_like_algorithm", int, what=what),
            unit_pressure=optional(obj, "unit_pressure", int, what=what),
            unit_system=optional(obj, "unit_system", int, what=what),
            unit_wind=optional(obj, "unit_wind", int, what=what),
        )


@dataclass(frozen=True)
class HomesData:
    homes: tuple[Home, ...]
    user: Optional[User]
    status: str
    time_exec: Optional[float]
    time_server: int

    @classmethod
    def from_dict(cls, payload: Any) -> HomesData:
        what = "homes data response"
        obj = require_object(payload, what=what)
        body = require(obj, "body", dict, what=what)
        return cls(
            homes=object_list(body, "homes", Home.from_dict, what="body", required=True),
            user=optional_object(body, "user", User.from_dict, what="body"),
            status=require(obj, "status", str, what=what),
            time_exec=optional_float(obj, "time_exec", what=what),
            time_server=require(obj, "time_server", int, what=what),
        )


def get_homes_data(client: AuthenticatedClient, parameters: Parameters) -> HomesData:
    return client.call(
        "get_homes_data",
        _config.get_homes_data_url(),
        parameters.to_params(),
        HomesData.from_dict,
    )


__all__ = [
    "GatewayType",
    "Home",
    "HomeModule",
    "HomesData",
    "Parameters",
    "Room",
    "Schedule",
    "TimetableEntry",
    "User",
    "Zone",
    "ZoneRoom",
    "get_homes_data",
]
