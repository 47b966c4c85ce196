"""
Weather station (/api/getstationsdata) and home coach (/api/gethomecoachsdata) data.

Both endpoints return the same payload shape: a list of devices, each with its
latest dashboard measurements and (for stations) its attached modules.
"""

from __future__ import annotations

from dataclasses import dataclass
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


@dataclass(frozen=True)
class DashboardData:
    """Latest measurements. The API uses CamelCase keys for the sensor values."""

    time_utc: Optional[int] = None
    temperature: Optional[float] = None
    humidity: Optional[int] = None
    co2: Optional[int] = None
    noise: Optional[int] = None
    pressure: Optional[float] = None
    absolute_pressure: Optional[float] = None
    min_temp: Optional[float] = None
    max_temp: Optional[float] = None
    date_min_temp: Optional[int] = None
    date_max_temp: Optional[int] = None
    temp_trend: Optional[str] = None
    pressure_trend: Optional[str] = None
    rain: Optional[float] = None
    sum_rain_1: Optional[float] = None
    sum_rain_24: Optional[float] = None
    wind_strength: Optional[int] = None
    wind_angle: Optional[int] = None
    gust_strength: Optional[int] = None
    gust_angle: Optional[int] = None
    health_idx: Optional[int] = None

    @classmethod
    def from_dict(cls, obj: dict[str, Any]) -> DashboardData:
        what = "dashboard_data"
        return cls(
            time_utc=optional(obj, "time_utc", int, what=what),
            temperature=optional_float(obj, "Temperature", what=what),
            humidity=optional(obj, "Humidity", int, what=what),
            co2=optional(obj, "CO2", int, what=what),
            noise=optional(obj, "Noise", int, what=what),
            pressure=optional_float(obj, "Pressure", what=what),
            absolute_pressure=optional_float(obj, "AbsolutePressure", what=what),
            min_temp=optional_float(obj, "min_temp", what=what),
            max_temp=optional_float(obj, "max_temp", what=what),
            date_min_temp=optional(obj, "date_min_temp", int, what=what),
            date_max_temp=optional(obj, "date_max_temp", int, what=what),
            temp_trend=optional(obj, "temp_trend", str, what=what),
            pressure_trend=optional(obj, "pressure_trend", str, what=what),
            rain=optional_float(obj, "Rain", what=what),
            sum_rain_1=optional_float(obj, "sum_rain_1", what=what),
            sum_rain_24=optional_float(obj, "sum_rain_24", what=what),
            wind_strength=optional(obj, "WindStrength", int, what=what),
            wind_angle=optional(obj, "WindAngle", int, what=what),
            gust_strength=optional(obj, "GustStrength", int, what=what),
            gust_angle=optional(obj, "GustAngle", int, what=what),
            health_idx=optional(obj, "health_idx", int, what=what),
        )


@dataclass(frozen=True)
class Place:
    altitude: Optional[float]
    city: Optional[str]
    country: Optional[str]
    timezone: Optional[str]
    location: tuple[float, ...]

    @classmethod
    def from_dict(cls, obj: dict[str, Any]) -> Place:
        what = "place"
        return cls(
            altitude=optional_float(obj, "altitude", what=what),
            city=optional(obj, "city", str, what=what),
            country=optional(obj, "country", str, what=what),
            timezone=optional(obj, "timezone", str, what=what),
            location=float_list(obj, "location", what=what),
        )


@dataclass(frozen=True)
class Module:
    id: str
    type: str
    module_name: Optional[str]
    data_type: tuple[str, ...]
    reachable: Optional[bool]
    firmware: Optional[int]
    last_setup: Optional[int]
    last_seen: Optional[int]
    last_message: Optional[int]
    battery_percent: Optional[int]
    battery_vp: Optional[int]
    rf_status: Optional[int]
    dashboard_data: Optional[DashboardData]

    @classmethod
    def from_dict(cls, obj: dict[str, Any]) -> Module:
        what = "module"
        return cls(
            id=require(obj, "_id", str, what=what),
            type=require(obj, "type", str, what=what),
            module_name=optional(obj, "module_name", str, what=what),
            data_type=string_list(obj, "data_type", what=what),
            reachable=optional(obj, "reachable", bool, what=what),
            firmware=optional(obj, "firmware", int, what=what),
            last_setup=optional(obj, "last_setup", int, what=what),
            last_seen=optional(obj, "last_seen", int, what=what),
            last_message=optional(obj, "last_message", int, what=what),
            battery_percent=optional(obj, "battery_percent", int, what=what),
            battery_vp=optional(obj, "battery_vp", int, what=what),
            rf_status=optional(obj, "rf_status", int, what=what),
            dashboard_data=optional_object(obj, "dashboard_data", DashboardData.from_dict, what=what),
        )


@dataclass(frozen=True)
class Device:
    id: str
    type: str
    # Stations report station_name; home coaches report name.
    station_name: Optional[str]
    module_name: Optional[str]
    data_type: tuple[str, ...]
    reachable: Optional[bool]
    co2_calibrating: Optional[bool]
    firmware: Optional[int]
    wifi_status: Optional[int]
    date_setup: Optional[int]
    last_setup: Optional[int]
    last_status_store: Optional[int]
    last_upgrade: Optional[int]
    place: Optional[Place]
    dashboard_data: Optional[DashboardData]
    modules: tuple[Module, ...]

    @classmethod
    def from_dict(cls, obj: dict[str, Any]) -> Device:
        what = "device"
        station_name = optional(obj, "station_name", str, what=what)
        if station_name is None:
            station_name = optional(obj, "name", str, what=what)
        return cls(
            id=require(obj, "_id", str, what=what),
            type=require(obj, "type", str, what=what),
            station_name=station_name,
            module_name=optional(obj, "module_name", str, what=what),
            data_type=string_list(obj, "data_type", what=what),
            reachable=optional(obj, "reachable", bool, what=what),
            co2_calibrating=optional(obj, "co2_calibrating", bool, what=what),
            firmware=optional(obj, "firmware", int, what=what),
            wifi_status=optional(obj, "wifi_status", int, what=what),
            date_setup=optional(obj, "date_setup", int, what=what),
            last_setup=optional(obj, "last_setup", int, what=what),
            last_status_store=optional(obj, "last_status_store", int, what=what),
            last_upgrade=optional(obj, "last_upgrade", int, what=what),
            place=optional_object(obj, "place", Place.from_dict, what=what),
            dashboard_data=optional_object(obj, "dashboard_data", DashboardData.from_dict, what=what),
            modules=object_list(obj, "modules", Module.from_dict, what=what),
        )


@dataclass(frozen=True)
class UserAdministrative:
    lang: Optional[str]
    reg_locale: Optional[str]
    country: Optional[str]
    unit: Optional[int]
    windunit: Optional[int]
    pressureunit: Optional[int]
    feel_like_algo: Optional[int]

    @classmethod
    def from_dict(cls, obj: dict[str, Any]) -> UserAdministrative:
        what = "user.administrative"
        return cls(
            lang=optional(obj, "lang", str, what=what),
            reg_locale=optional(obj, "reg_locale", str, what=what),
            country=optional(obj, "country", str, what=what),
            unit=optional(obj, "unit", int, what=what),
            windunit=optional(obj, "windunit", int, what=what),
            pressureunit=optional(obj, "pressureunit", int, what=what),
            feel_like_algo=optional(obj, "feel_like_algo", int, what=what),
        )


@dataclass(frozen=True)
class User:
    mail: Optional[str]
    administrative: Optional[UserAdministrative]

    @classmethod
    def from_dict(cls, obj: dict[str, Any]) -> User:
        return cls(
            mail=optional(obj, "mail", str, what="user"),
            administrative=optional_object(obj, "administrative", UserAdministrative.from_dict, what="user"),
        )


@dataclass(frozen=True)
class StationData:
    devices: tuple[Device, ...]
    user: Optional[User]
    status: str
    time_exec: Optional[float]
    time_server: int

    @classmethod
    def from_dict(cls, payload: Any) -> StationData:
        what = "station data response"
        obj = require_object(payload, what=what)
        body = require(obj, "body", dict, what=what)
        return cls(
            devices=object_list(body, "devices", Device.from_dict, what="body", required=True),
            user=optional_object(body, "user", User.from_dict, what="body"),
            status=require(obj, "status", str, what=what),
            time_exec=optional_float(obj, "time_exec", what=what),
            time_server=require(obj, "time_server", int, what=what),
        )


def get_station_data(client: AuthenticatedClient, device_id: str) -> StationData:
    params = {"device_id": device_id}
    return client.call("get_station_data", _config.get_station_data_url(), params, StationData.from_dict)


def get_homecoachs_data(client: AuthenticatedClient, device_id: str) -> StationData:
    params = {"device_id": device_id}
    return client.call("get_homecoachs_data", _config.get_homecoachs_data_url(), params, StationData.from_dict)


__all__ = [
    "DashboardData",
    "Device",
    "Module",
    "Place",
    "StationData",
    "User",
    "UserAdministrative",
    "get_homecoachs_data",
    "get_station_data",
]
