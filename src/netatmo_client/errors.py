"""
Error taxonomy for the Netatmo client.

Every failure of a remote call surfaces as exactly one of these exceptions. The
stage that failed is the exception type; the lower-level error (requests,
json, decode) is kept as ``__cause__`` via ``raise ... from err``.
"""

from __future__ import annotations


class NetatmoError(RuntimeError):
    """Base class for all client failures."""


class ConfigError(NetatmoError):
    """Missing or invalid configuration with a user-facing message."""


class ClientConsumedError(NetatmoError):
    """An unauthenticated client was used after it was turned into an authenticated one."""


class AuthenticationFailedError(NetatmoError):
    """The refresh-token exchange failed; the pipeline error is the ``__cause__``."""

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message)


class FailedToSendRequestError(NetatmoError):
    """Transport failure before any response was received (DNS, connect, timeout)."""

    def __init__(self, url: str) -> None:
        super().__init__(f"Failed to send request to {url}")
        self.url = url


class FailedToReadResponseError(NetatmoError):
    """A response arrived but its body could not be read."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Failed to read response of API call '{name}'")
        self.name = name


class JsonDeserializationFailedError(NetatmoError):
    """The body was read but did not decode into the expected payload type."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Failed to deserialize response of API call '{name}'")
        self.name = name


class ApiCallFailedError(NetatmoError):
    """The API reported a logical failure with its own error code and message."""

    def __init__(self, name: str, code: int, message: str) -> None:
        super().__init__(f"API call '{name}' failed with code {code}: {message}")
        self.name = name
        self.code = code
        self.message = message


class UnknownApiCallFailureError(NetatmoError):
    """Unexpected status, or an error status whose envelope could not be decoded."""

    def __init__(self, name: str, status_code: int) -> None:
        super().__init__(f"API call '{name}' failed with unexpected HTTP status {status_code}")
        self.name = name
        self.status_code = status_code


__all__ = [
    "ApiCallFailedError",
    "AuthenticationFailedError",
    "ClientConsumedError",
    "ConfigError",
    "FailedToReadResponseError",
    "FailedToSendRequestError",
    "JsonDeserializationFailedError",
    "NetatmoError",
    "UnknownApiCallFailureError",
]
