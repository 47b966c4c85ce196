"""
Top-level package for `netatmo_client`.

A typed, synchronous client for the Netatmo weather station, home coach and
thermostat API.
"""
from .client import (
    AuthenticatedClient,
    ClientCredentials,
    NetatmoClient,
    UnauthenticatedClient,
)
from .endpoints.authenticate import Scope, Token
from .errors import (
    ApiCallFailedError,
    AuthenticationFailedError,
    ClientConsumedError,
    ConfigError,
    FailedToReadResponseError,
    FailedToSendRequestError,
    JsonDeserializationFailedError,
    NetatmoError,
    UnknownApiCallFailureError,
)

__all__: list[str] = [
    "ApiCallFailedError",
    "AuthenticatedClient",
    "AuthenticationFailedError",
    "ClientConsumedError",
    "ClientCredentials",
    "ConfigError",
    "FailedToReadResponseError",
    "FailedToSendRequestError",
    "JsonDeserializationFailedError",
    "NetatmoClient",
    "NetatmoError",
    "Scope",
    "Token",
    "UnauthenticatedClient",
    "UnknownApiCallFailureError",
]
