"""
Netatmo API client: authentication states, request pipeline and error classifier.

A client starts out unauthenticated (holding app credentials) and becomes
authenticated by exchanging a refresh token for an access token:

    client = NetatmoClient.new(ClientCredentials(client_id="...", client_secret="..."))
    authed = client.authenticate(refresh_token)
    station = authed.get_station_data(device_id)

Data endpoints only exist on `AuthenticatedClient`. Callers that already hold a
token can skip the exchange with `NetatmoClient.with_token(token)`.

Every remote call goes through `api_call()`: form-encoded POST, status
classification via `general_err_handler()`, body read, JSON decode into the
endpoint's payload type. Each failure stage raises its own exception from
`errors`, chained to the lower-level cause.
"""

from __future__ import annotations

import json
import logging
import time
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, Optional, TypeVar

import requests

from . import log_utils
from .endpoints import authenticate as authenticate_mod
from .endpoints import get_home_status as get_home_status_mod
from .endpoints import get_homes_data as get_homes_data_mod
from .endpoints import get_measure as get_measure_mod
from .endpoints import get_station_data as get_station_data_mod
from .endpoints import set_room_thermpoint as set_room_thermpoint_mod
from .endpoints.authenticate import Token
from .errors import (
    ApiCallFailedError,
    AuthenticationFailedError,
    ClientConsumedError,
    FailedToReadResponseError,
    FailedToSendRequestError,
    JsonDeserializationFailedError,
    NetatmoError,
    UnknownApiCallFailureError,
)

T = TypeVar("T")

# The API signals success with 200 on every endpoint.
EXPECTED_STATUS = 200

# Statuses on which the API sends an {"error": {"code", "message"}} envelope.
ERROR_ELIGIBLE_STATUSES = frozenset({400, 401, 403, 404, 406, 500})

DEFAULT_TIMEOUT_SECONDS = 30.0

# Upper bound on how much of a response body ends up in DEBUG logs.
_LOG_BODY_LIMIT = 800

# What json.loads and the payload decoders raise on bodies of the wrong shape.
# Huge integers overflow float(); deeply nested arrays exhaust the recursion limit.
_DECODE_ERRORS = (ValueError, KeyError, TypeError, OverflowError, RecursionError)


@dataclass(frozen=True)
class ClientCredentials:
    client_id: str
    client_secret: str = field(repr=False)


@dataclass(frozen=True)
class Transport:
    """
    The HTTP handle a client owns: a requests session plus its per-call options.

    Exactly one client value owns a given Transport at a time.
    """

    session: requests.Session
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    ssl_verify: bool = True

    def __post_init__(self) -> None:
        # Also rejects NaN.
        if not self.timeout_seconds > 0:
            raise ValueError(f"timeout_seconds must be positive, got {self.timeout_seconds!r}")

    @classmethod
    def create(
        cls,
        *,
        session: Optional[requests.Session] = None,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        ssl_verify: bool = True,
    ) -> Transport:
        return cls(
            session=session if session is not None else requests.Session(),
            timeout_seconds=float(timeout_seconds),
            ssl_verify=bool(ssl_verify),
        )


def _decode_api_error(body: str) -> tuple[int, str]:
    """
    Decode the API error envelope {"error": {"code": <int>, "message": <str>}}.

    Raises one of _DECODE_ERRORS when the body does not have that shape.
    """
    payload = json.loads(body)
    details = payload["error"]
    code = details["code"]
    message = details["message"]
    if isinstance(code, bool) or not isinstance(code, int):
        raise TypeError(f"error.code must be an integer, got {type(code).__name__}")
    if not isinstance(message, str):
        raise TypeError(f"error.message must be a string, got {type(message).__name__}")
    return code, message


def general_err_handler(
    response: requests.Response,
    name: str,
    expected_status: int,
    *,
    log: Optional[logging.LoggerAdapter] = None,
) -> requests.Response:
    """
    Pass `response` through when it has `expected_status`, otherwise raise.

    - expected status: returned unchanged, body untouched
    - status in ERROR_ELIGIBLE_STATUSES: the body is decoded as an API error
      envelope -> ApiCallFailedError(name, code, message); if the body cannot be
      read or does not match the envelope -> UnknownApiCallFailureError
    - any other status: UnknownApiCallFailureError, body untouched
    """
    status = response.status_code
    if status == expected_status:
        return response

    if status in ERROR_ELIGIBLE_STATUSES:
        try:
            code, message = _decode_api_error(response.text)
        except (requests.RequestException, *_DECODE_ERRORS) as e:
            if log is not None:
                log.debug("%s: HTTP %s without a decodable error envelope: %s", name, status, e)
            raise UnknownApiCallFailureError(name, status) from e
        if log is not None:
            log.debug("%s: API error (HTTP %s) code=%s message=%r", name, status, code, message)
        raise ApiCallFailedError(name, code, message)

    if log is not None:
        log.debug("%s: unexpected HTTP status %s", name, status)
    raise UnknownApiCallFailureError(name, status)


def api_call(
    name: str,
    transport: Transport,
    url: str,
    params: Mapping[str, str],
    decode: Callable[[Any], T],
    *,
    log: logging.LoggerAdapter,
) -> T:
    """
    Execute one remote call and decode its JSON body with `decode`.

    Raises:
        FailedToSendRequestError: the POST itself failed (connect, DNS, timeout).
        ApiCallFailedError / UnknownApiCallFailureError: non-success status.
        FailedToReadResponseError: the body could not be read.
        JsonDeserializationFailedError: the body is not JSON of the expected shape.
    """
    log.debug(
        "%s request details (sanitized): %s",
        name,
        {
            "url": url,
            "params": log_utils.sanitize_mapping(dict(params)),
            "timeout_seconds": transport.timeout_seconds,
            "ssl_verify": transport.ssl_verify,
        },
    )

    start = time.perf_counter()
    try:
        resp = transport.session.post(
            url,
            data=dict(params),
            timeout=transport.timeout_seconds,
            verify=transport.ssl_verify,
        )
    except requests.RequestException as e:
        log.debug("%s: request to %s failed: %s", name, url, e)
        raise FailedToSendRequestError(url) from e
    elapsed_ms = int((time.perf_counter() - start) * 1000)
    log.debug(
        "%s response details: %s",
        name,
        {
            "status_code": resp.status_code,
            "elapsed_ms": elapsed_ms,
            "content_type": resp.headers.get("Content-Type") or resp.headers.get("content-type"),
        },
    )

    general_err_handler(resp, name, EXPECTED_STATUS, log=log)

    try:
        body = resp.text
    except requests.RequestException as e:
        raise FailedToReadResponseError(name) from e
    log.debug(
        "%s successful (%s) response (truncated, sanitized): %r",
        name,
        resp.status_code,
        log_utils.sanitize_text((body or "")[:_LOG_BODY_LIMIT]),
    )

    try:
        return decode(json.loads(body))
    except _DECODE_ERRORS as e:
        log.debug("%s: response did not decode: %s", name, e)
        raise JsonDeserializationFailedError(name) from e


class NetatmoClient:
    """Factory for clients in either authentication state."""

    @staticmethod
    def new(
        credentials: ClientCredentials,
        *,
        session: Optional[requests.Session] = None,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        ssl_verify: bool = True,
        log: Optional[logging.LoggerAdapter] = None,
    ) -> UnauthenticatedClient:
        """Build an unauthenticated client. No network activity."""
        transport = Transport.create(session=session, timeout_seconds=timeout_seconds, ssl_verify=ssl_verify)
        return UnauthenticatedClient(credentials, transport, log=log)

    @staticmethod
    def with_token(
        token: Token,
        *,
        session: Optional[requests.Session] = None,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        ssl_verify: bool = True,
        log: Optional[logging.LoggerAdapter] = None,
    ) -> AuthenticatedClient:
        """
        Build an authenticated client from a token obtained earlier.

        The token is not verified; an invalid one only shows up as failures
        of later calls.
        """
        transport = Transport.create(session=session, timeout_seconds=timeout_seconds, ssl_verify=ssl_verify)
        return AuthenticatedClient(token, transport, log=log)


class UnauthenticatedClient:
    def __init__(
        self,
        credentials: ClientCredentials,
        transport: Transport,
        *,
        log: Optional[logging.LoggerAdapter] = None,
    ) -> None:
        self._credentials = credentials
        self._transport: Optional[Transport] = transport
        self._log = log if log is not None else log_utils.default_logger()

    def __repr__(self) -> str:
        state = "consumed" if self._transport is None else "ready"
        return f"UnauthenticatedClient(client_id={self._credentials.client_id!r}, state={state})"

    @property
    def credentials(self) -> ClientCredentials:
        return self._credentials

    def _require_transport(self) -> Transport:
        if self._transport is None:
            raise ClientConsumedError(
                "This client was already authenticated; use the AuthenticatedClient it returned."
            )
        return self._transport

    def authenticate(self, refresh_token: str) -> AuthenticatedClient:
        """
        Exchange `refresh_token` for an access token.

        On success this client is consumed: its transport moves to the returned
        AuthenticatedClient and further use raises ClientConsumedError. On
        failure raises AuthenticationFailedError chained to the pipeline error,
        and this client stays usable.
        """
        transport = self._require_transport()
        self._log.info("exchanging refresh token for access token")
        try:
            token = authenticate_mod.refresh_token(self, refresh_token)
        except NetatmoError as e:
            self._log.warning("authentication failed: %s", log_utils.sanitize_text(str(e)))
            raise AuthenticationFailedError() from e

        self._transport = None
        self._log.info("access token acquired")
        self._log.debug(
            "token details (sanitized): %s",
            {
                "access_token": log_utils.redact_sensitive(token.access_token),
                "expires_in": token.expires_in,
                "scope": [s.value for s in token.scope],
            },
        )
        return AuthenticatedClient(token, transport, log=self._log)

    def call(self, name: str, url: str, params: Mapping[str, str], decode: Callable[[Any], T]) -> T:
        return api_call(name, self._require_transport(), url, params, decode, log=self._log)


class AuthenticatedClient:
    def __init__(
        self,
        token: Token,
        transport: Transport,
        *,
        log: Optional[logging.LoggerAdapter] = None,
    ) -> None:
        self._token = token
        self._transport = transport
        self._log = log if log is not None else log_utils.default_logger()

    def __repr__(self) -> str:
        return "AuthenticatedClient(token=<redacted>)"

    @property
    def token(self) -> Token:
        return self._token

    def call(self, name: str, url: str, params: Mapping[str, str], decode: Callable[[Any], T]) -> T:
        """
        Run `api_call` with the access token added to a copy of `params`.

        This is the only place token material enters a request.
        """
        params = dict(params)
        params["access_token"] = self._token.access_token
        return api_call(name, self._transport, url, params, decode, log=self._log)

    def get_homes_data(
        self, parameters: get_homes_data_mod.Parameters
    ) -> get_homes_data_mod.HomesData:
        return get_homes_data_mod.get_homes_data(self, parameters)

    def get_home_status(
        self, parameters: get_home_status_mod.Parameters
    ) -> get_home_status_mod.HomeStatus:
        return get_home_status_mod.get_home_status(self, parameters)

    def get_station_data(self, device_id: str) -> get_station_data_mod.StationData:
        return get_station_data_mod.get_station_data(self, device_id)

    def get_homecoachs_data(self, device_id: str) -> get_station_data_mod.StationData:
        return get_station_data_mod.get_homecoachs_data(self, device_id)

    def get_measure(self, parameters: get_measure_mod.Parameters) -> get_measure_mod.Measure:
        return get_measure_mod.get_measure(self, parameters)

    def set_room_thermpoint(
        self, parameters: set_room_thermpoint_mod.Parameters
    ) -> set_room_thermpoint_mod.SetRoomThermpointResponse:
        return set_room_thermpoint_mod.set_room_thermpoint(self, parameters)


__all__ = [
    "AuthenticatedClient",
    "ClientCredentials",
    "ERROR_ELIGIBLE_STATUSES",
    "EXPECTED_STATUS",
    "NetatmoClient",
    "Transport",
    "UnauthenticatedClient",
    "api_call",
    "general_err_handler",
]
