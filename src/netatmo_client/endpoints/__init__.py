"""
Endpoint bindings for the Netatmo API.

Each module owns one remote procedure: its URL, its parameter structure and
the typed payload the response decodes into. Call them through
`AuthenticatedClient` (or `UnauthenticatedClient.authenticate` for the token
exchange) rather than directly.
"""
from . import (
    authenticate,
    get_home_status,
    get_homes_data,
    get_measure,
    get_station_data,
    set_room_thermpoint,
)

__all__: list[str] = [
    "authenticate",
    "get_home_status",
    "get_homes_data",
    "get_measure",
    "get_station_data",
    "set_room_thermpoint",
]
