"""
Room thermostat setpoint command (/api/setroomthermpoint).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Optional

from .. import config as _config
from ._decode import require, require_object

if TYPE_CHECKING:
    from ..client import AuthenticatedClient


class Mode(str, Enum):
    MANUAL = "manual"
    MAX = "max"
    HOME = "home"


@dataclass(frozen=True)
class Parameters:
    """
    `temp` is required for manual mode. `endtime` (unix seconds) bounds a
    manual or max setpoint; without it the home's default duration applies.
    """

    home_id: str
    room_id: str
    mode: Mode
    temp: Optional[float] = None
    endtime: Optional[int] = None

    def __post_init__(self) -> None:
        if self.mode is Mode.MANUAL and self.temp is None:
            raise ValueError("manual mode needs a target temperature")

    def to_params(self) -> dict[str, str]:
        params = {
            "home_id": self.home_id,
            "room_id": self.room_id,
            "mode": self.mode.value,
        }
        if self.temp is not None:
            params["temp"] = str(self.temp)
        if self.endtime is not None:
            params["endtime"] = str(self.endtime)
        return params


@dataclass(frozen=True)
class SetRoomThermpointResponse:
    status: str
    time_server: int

    @classmethod
    def from_dict(cls, payload: Any) -> SetRoomThermpointResponse:
        what = "setroomthermpoint response"
        obj = require_object(payload, what=what)
        return cls(
            status=require(obj, "status", str, what=what),
            time_server=require(obj, "time_server", int, what=what),
        )


def set_room_thermpoint(client: AuthenticatedClient, parameters: Parameters) -> SetRoomThermpointResponse:
    return client.call(
        "set_room_thermpoint",
        _config.get_set_room_thermpoint_url(),
        parameters.to_params(),
        SetRoomThermpointResponse.from_dict,
    )


__all__ = ["Mode", "Parameters", "SetRoomThermpointResponse", "set_room_thermpoint"]
