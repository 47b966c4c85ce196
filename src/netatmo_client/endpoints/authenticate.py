"""
Refresh-token exchange against the Netatmo OAuth token endpoint.

POSTs grant_type=refresh_token together with the app credentials and decodes
the returned token. The client in `..client` wraps failures of this call in
AuthenticationFailedError.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Optional

from .. import config as _config
from ._decode import optional, require, require_object

if TYPE_CHECKING:
    from ..client import UnauthenticatedClient


class Scope(str, Enum):
    READ_STATION = "read_station"
    READ_THERMOSTAT = "read_thermostat"
    WRITE_THERMOSTAT = "write_thermostat"
    READ_CAMERA = "read_camera"
    WRITE_CAMERA = "write_camera"
    ACCESS_CAMERA = "access_camera"
    READ_PRESENCE = "read_presence"
    WRITE_PRESENCE = "write_presence"
    ACCESS_PRESENCE = "access_presence"
    READ_DOORBELL = "read_doorbell"
    ACCESS_DOORBELL = "access_doorbell"
    READ_HOMECOACH = "read_homecoach"
    READ_SMOKEDETECTOR = "read_smokedetector"
    READ_CARBONMONOXIDEDETECTOR = "read_carbonmonoxidedetector"
    READ_MAGELLAN = "read_magellan"
    WRITE_MAGELLAN = "write_magellan"
    READ_BUBENDORFF = "read_bubendorff"
    WRITE_BUBENDORFF = "write_bubendorff"
    READ_MX = "read_mx"
    WRITE_MX = "write_mx"


@dataclass(frozen=True)
class Token:
    """
    OAuth token as returned by /oauth2/token.

    `expires_in` is informational only; nothing in this package refreshes a
    token when it expires.
    """

    access_token: str = field(repr=False)
    refresh_token: str = field(repr=False)
    expires_in: Optional[int] = None
    scope: tuple[Scope, ...] = ()

    @classmethod
    def from_dict(cls, payload: Any) -> Token:
        what = "token response"
        obj = require_object(payload, what=what)
        expires_in = optional(obj, "expires_in", int, what=what)
        if expires_in is None:
            # Older responses only carry the misspelled variant.
            expires_in = optional(obj, "expire_in", int, what=what)
        scopes = optional(obj, "scope", list, what=what) or []
        return cls(
            access_token=require(obj, "access_token", str, what=what),
            refresh_token=require(obj, "refresh_token", str, what=what),
            expires_in=expires_in,
            scope=tuple(Scope(s) for s in scopes),
        )


def refresh_token(client: UnauthenticatedClient, refresh_token: str) -> Token:
    credentials = client.credentials
    params = {
        "grant_type": "refresh_token",
        "refresh_token": refresh_token,
        "client_id": credentials.client_id,
        "client_secret": credentials.client_secret,
    }
    return client.call("refresh_token", _config.get_token_url(), params, Token.from_dict)


__all__ = ["Scope", "Token", "refresh_token"]
