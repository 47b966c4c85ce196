"""
Current state of a home's rooms and modules (/api/homestatus).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Optional

from .. import config as _config
from ._decode import object_list, optional, optional_float, require, require_object

if TYPE_CHECKING:
    from ..client import AuthenticatedClient


class DeviceType(str, Enum):
    NAPLUG = "NAPlug"
    NATHERM1 = "NATherm1"
    NRV = "NRV"
    NACAMERA = "NACamera"
    NOC = "NOC"
    NSD = "NSD"
    NCO = "NCO"
    NDB = "NDB"


@dataclass(frozen=True)
class Parameters:
    home_id: str
    device_types: tuple[DeviceType, ...] = ()

    def to_params(self) -> dict[str, str]:
        params = {"home_id": self.home_id}
        if self.device_types:
            params["device_types"] = ",".join(t.value for t in self.device_types)
        return params


@dataclass(frozen=True)
class Room:
    id: str
    reachable: Optional[bool]
    anticipating: Optional[bool]
    open_window: Optional[bool]
    heating_power_request: Optional[int]
    therm_measured_temperature: Optional[float]
    therm_setpoint_temperature: Optional[float]
    therm_setpoint_mode: Optional[str]
    therm_setpoint_start_time: Optional[int]
    therm_setpoint_end_time: Optional[int]

    @classmethod
    def from_dict(cls, obj: dict[str, Any]) -> Room:
        what = "room"
        return cls(
            id=require(obj, "id", str, what=what),
            reachable=optional(obj, "reachable", bool, what=what),
            anticipating=optional(obj, "anticipating", bool, what=what),
            open_window=optional(obj, "open_window", bool, what=what),
            heating_power_request=optional(obj, "heating_power_request", int, what=what),
            therm_measured_temperature=optional_float(obj, "therm_measured_temperature", what=what),
            therm_setpoint_temperature=optional_float(obj, "therm_setpoint_temperature", what=what),
            therm_setpoint_mode=optional(obj, "therm_setpoint_mode", str, what=what),
            therm_setpoint_start_time=optional(obj, "therm_setpoint_start_time", int, what=what),
            therm_setpoint_end_time=optional(obj, "therm_setpoint_end_time", int, what=what),
        )


@dataclass(frozen=True)
class HomeModule:
    id: str
    type: str
    firmware_revision: Optional[int]
    rf_strength: Optional[int]
    wifi_strength: Optional[int]
    reachable: Optional[bool]
    bridge: Optional[str]
    battery_state: Optional[str]
    battery_level: Optional[int]
    boiler_status: Optional[bool]
    boiler_valve_comfort_boost: Optional[bool]

    @classmethod
    def from_dict(cls, obj: dict[str, Any]) -> HomeModule:
        what = "module"
        return cls(
            id=require(obj, "id", str, what=what),
            type=require(obj, "type", str, what=what),
            firmware_revision=optional(obj, "firmware_revision", int, what=what),
            rf_strength=optional(obj, "rf_strength", int, what=what),
            wifi_strength=optional(obj, "wifi_strength", int, what=what),
            reachable=optional(obj, "reachable", bool, what=what),
            bridge=optional(obj, "bridge", str, what=what),
            battery_state=optional(obj, "battery_state", str, what=what),
            battery_level=optional(obj, "battery_level", int, what=what),
            boiler_status=optional(obj, "boiler_status", bool, what=what),
            boiler_valve_comfort_boost=optional(obj, "boiler_valve_comfort_boost", bool, what=what),
        )


@dataclass(frozen=True)
class ModuleError:
    """Per-device error the API reports next to an otherwise successful status."""

    code: int
    id: str

    @classmethod
    def from_dict(cls, obj: dict[str, Any]) -> ModuleError:
        return cls(code=require(obj, "code", int, what="error"), id=require(obj, "id", str, what="error"))


@dataclass(frozen=True)
class Home:
    id: str
    rooms: tuple[Room, ...]
    modules: tuple[HomeModule, ...]

    @classmethod
    def from_dict(cls, obj: dict[str, Any]) -> Home:
        return cls(
            id=require(obj, "id", str, what="home"),
            rooms=object_list(obj, "rooms", Room.from_dict, what="home"),
            modules=object_list(obj, "modules", HomeModule.from_dict, what="home"),
        )


@dataclass(frozen=True)
class HomeStatus:
    home: Home
    errors: tuple[ModuleError, ...]
    status: str
    time_server: int

    @classmethod
    def from_dict(cls, payload: Any) -> HomeStatus:
        what = "home status response"
        obj = require_object(payload, what=what)
        body = require(obj, "body", dict, what=what)
        return cls(
            home=Home.from_dict(require(body, "home", dict, what="body")),
            errors=object_list(body, "errors", ModuleError.from_dict, what="body"),
            status=require(obj, "status", str, what=what),
            time_server=require(obj, "time_server", int, what=what),
        )


def get_home_status(client: AuthenticatedClient, parameters: Parameters) -> HomeStatus:
    return client.call(
        "get_home_status",
        _config.get_home_status_url(),
        parameters.to_params(),
        HomeStatus.from_dict,
    )


__all__ = [
    "DeviceType",
    "Home",
    "HomeModule",
    "HomeStatus",
    "ModuleError",
    "Parameters",
    "Room",
    "get_home_status",
]
