"""
Historical measurements of a device or module (/api/getmeasure).

The API answers in one of two shapes depending on `optimize`:

- optimize=false: {"<timestamp>": [v1, v2, ...], ...}
- optimize=true:  [{"beg_time": t0, "step_time": s, "value": [[v1, v2], ...]}, ...]

Both are normalized into `Measure.values`: timestamp -> one value per
requested measure type (None where the device reported no value).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Optional

from .. import config as _config
from ._decode import (
    PayloadShapeError,
    bool_param,
    optional,
    optional_float,
    require,
    require_object,
)

if TYPE_CHECKING:
    from ..client import AuthenticatedClient


# The API rejects larger limits.
MAX_LIMIT = 1024


class Scale(str, Enum):
    MAX = "max"
    MIN_30 = "30min"
    HOUR_1 = "1hour"
    HOURS_3 = "3hours"
    DAY_1 = "1day"
    WEEK_1 = "1week"
    MONTH_1 = "1month"


class MeasureType(str, Enum):
    TEMPERATURE = "temperature"
    CO2 = "co2"
    HUMIDITY = "humidity"
    PRESSURE = "pressure"
    NOISE = "noise"
    RAIN = "rain"
    WIND_STRENGTH = "windstrength"
    WIND_ANGLE = "windangle"
    GUST_STRENGTH = "guststrength"
    GUST_ANGLE = "gustangle"
    MIN_TEMP = "min_temp"
    MAX_TEMP = "max_temp"
    MIN_HUM = "min_hum"
    MAX_HUM = "max_hum"
    MIN_PRESSURE = "min_pressure"
    MAX_PRESSURE = "max_pressure"
    MIN_NOISE = "min_noise"
    MAX_NOISE = "max_noise"
    SUM_RAIN = "sum_rain"
    DATE_MIN_TEMP = "date_min_temp"
    DATE_MAX_TEMP = "date_max_temp"
    DATE_MAX_GUST = "date_max_gust"
    SUM_BOILER_ON = "sum_boiler_on"
    SUM_BOILER_OFF = "sum_boiler_off"
    BOILER_ON = "boileron"
    BOILER_OFF = "boileroff"


@dataclass(frozen=True)
class Parameters:
    device_id: str
    scale: Scale
    types: tuple[MeasureType, ...]
    module_id: Optional[str] = None
    date_begin: Optional[int] = None
    date_end: Optional[int] = None
    limit: Optional[int] = None
    optimize: Optional[bool] = None
    real_time: Optional[bool] = None

    def __post_init__(self) -> None:
        if not self.types:
            raise ValueError("get_measure needs at least one measure type")
        if self.limit is not None and not 1 <= self.limit <= MAX_LIMIT:
            raise ValueError(f"limit must be 1..{MAX_LIMIT}")
        if self.date_begin is not None and self.date_end is not None and self.date_end < self.date_begin:
            raise ValueError("date_end must not be before date_begin")

    def to_params(self) -> dict[str, str]:
        params = {
            "device_id": self.device_id,
            "scale": self.scale.value,
            "type": ",".join(t.value for t in self.types),
        }
        if self.module_id is not None:
            params["module_id"] = self.module_id
        if self.date_begin is not None:
            params["date_begin"] = str(self.date_begin)
        if self.date_end is not None:
            params["date_end"] = str(self.date_end)
        if self.limit is not None:
            params["limit"] = str(self.limit)
        if self.optimize is not None:
            params["optimize"] = bool_param(self.optimize)
        if self.real_time is not None:
            params["real_time"] = bool_param(self.real_time)
        return params


def _value_row(row: Any, *, what: str) -> tuple[Optional[float], ...]:
    if not isinstance(row, list):
        raise PayloadShapeError(f"Expected a list of values in {what}, got {type(row).__name__}.")
    out: list[Optional[float]] = []
    for v in row:
        if v is None:
            out.append(None)
        elif isinstance(v, (int, float)) and not isinstance(v, bool):
            out.append(float(v))
        else:
            raise PayloadShapeError(f"Expected a number or null in {what}, got {type(v).__name__}.")
    return tuple(out)


def _values_from_mapping(body: dict[str, Any]) -> dict[int, tuple[Optional[float], ...]]:
    values: dict[int, tuple[Optional[float], ...]] = {}
    for ts, row in body.items():
        try:
            timestamp = int(ts)
        except ValueError as e:
            raise PayloadShapeError(f"Measure key {ts!r} is not a timestamp.") from e
        values[timestamp] = _value_row(row, what=f"body[{ts!r}]")
    return values


def _values_from_series(body: list[Any]) -> dict[int, tuple[Optional[float], ...]]:
    values: dict[int, tuple[Optional[float], ...]] = {}
    for item in body:
        series = require_object(item, what="measure series")
        beg_time = require(series, "beg_time", int, what="measure series")
        rows = require(series, "value", list, what="measure series")
        step_time = optional(series, "step_time", int, what="measure series")
        if step_time is None and len(rows) > 1:
            raise PayloadShapeError("Measure series with several values has no step_time.")
        for i, row in enumerate(rows):
            values[beg_time + i * (step_time or 0)] = _value_row(row, what="measure series value")
    return values


@dataclass(frozen=True)
class Measure:
    values: dict[int, tuple[Optional[float], ...]]
    status: str
    time_exec: Optional[float]
    time_server: int

    @classmethod
    def from_dict(cls, payload: Any) -> Measure:
        what = "measure response"
        obj = require_object(payload, what=what)
        body = require(obj, "body", (dict, list), what=what)
        values = _values_from_mapping(body) if isinstance(body, dict) else _values_from_series(body)
        return cls(
            values=dict(sorted(values.items())),
            status=require(obj, "status", str, what=what),
            time_exec=optional_float(obj, "time_exec", what=what),
            time_server=require(obj, "time_server", int, what=what),
        )


def get_measure(client: AuthenticatedClient, parameters: Parameters) -> Measure:
    return client.call("get_measure", _config.get_measure_url(), parameters.to_params(), Measure.from_dict)


__all__ = ["MAX_LIMIT", "Measure", "MeasureType", "Parameters", "Scale", "get_measure"]
