"""
Unit tests for the endpoint bindings: parameter encoding, request routing and
typed payload decoding.
"""

from __future__ import annotations

import json
from unittest.mock import Mock

import pytest
import requests

import netatmo_client.config as config_mod
import netatmo_client.endpoints.get_home_status as home_status_mod
import netatmo_client.endpoints.get_homes_data as homes_data_mod
import netatmo_client.endpoints.get_measure as measure_mod
import netatmo_client.endpoints.get_station_data as station_mod
import netatmo_client.endpoints.set_room_thermpoint as thermpoint_mod
from netatmo_client import JsonDeserializationFailedError, NetatmoClient, Token


def _make_json_response(payload: object, *, status_code: int = 200) -> requests.Response:
    resp = requests.Response()
    resp.status_code = status_code
    resp.headers["Content-Type"] = "application/json"
    resp._content = json.dumps(payload).encode("utf-8")  # noqa: SLF001
    resp.encoding = "utf-8"
    resp.url = "https://example.invalid/api"
    return resp


def _client_returning(payload: object):
    session = Mock()
    session.post.return_value = _make_json_response(payload)
    client = NetatmoClient.with_token(Token(access_token="tok-1", refresh_token="rt"), session=session)
    return client, session


STATION_PAYLOAD = {
    "body": {
        "devices": [
            {
                "_id": "70:ee:50:00:00:01",
                "type": "NAMain",
                "station_name": "Home (Indoor)",
                "module_name": "Indoor",
                "data_type": ["Temperature", "CO2", "Humidity", "Noise", "Pressure"],
                "reachable": True,
                "co2_calibrating": False,
                "firmware": 181,
                "wifi_status": 56,
                "date_setup": 1600000000,
                "last_setup": 1600000000,
                "last_status_store": 1700000000,
                "last_upgrade": 1650000000,
                "place": {
                    "altitude": 35,
                    "city": "Berlin",
                    "country": "DE",
                    "timezone": "Europe/Berlin",
                    "location": [13.4, 52.5],
                },
                "dashboard_data": {
                    "time_utc": 1700000000,
                    "Temperature": 21.3,
                    "CO2": 612,
                    "Humidity": 48,
                    "Noise": 38,
                    "Pressure": 1013.2,
                    "AbsolutePressure": 1009.1,
                    "min_temp": 20.1,
                    "max_temp": 22,
                    "date_min_temp": 1699990000,
                    "date_max_temp": 1699970000,
                    "temp_trend": "stable",
                    "pressure_trend": "up",
                },
                "modules": [
                    {
                        "_id": "02:00:00:00:00:01",
                        "type": "NAModule1",
                        "module_name": "Outdoor",
                        "data_type": ["Temperature", "Humidity"],
                        "reachable": True,
                        "firmware": 50,
                        "last_setup": 1600000000,
                        "last_seen": 1699999990,
                        "last_message": 1699999995,
                        "battery_percent": 80,
                        "battery_vp": 5600,
                        "rf_status": 70,
                        "dashboard_data": {"time_utc": 1699999990, "Temperature": 4, "Humidity": 90},
                    },
                    {
                        "_id": "05:00:00:00:00:01",
                        "type": "NAModule3",
                        "module_name": "Rain",
                        "data_type": ["Rain"],
                        "dashboard_data": {"Rain": 0, "sum_rain_1": 0.2, "sum_rain_24": 1.515},
                    },
                ],
            }
        ],
        "user": {
            "mail": "user@example.com",
            "administrative": {"lang": "de", "reg_locale": "de-DE", "unit": 0, "windunit": 0, "pressureunit": 0},
        },
    },
    "status": "ok",
    "time_exec": 0.04,
    "time_server": 1700000005,
}


# ============================================================================
# Station / home coach data
# ============================================================================


def test_get_station_data_posts_device_id_and_decodes_payload() -> None:
    client, session = _client_returning(STATION_PAYLOAD)

    data = client.get_station_data("70:ee:50:00:00:01")

    args, kwargs = session.post.call_args
    assert args == (config_mod.get_station_data_url(),)
    assert kwargs["data"] == {"device_id": "70:ee:50:00:00:01", "access_token": "tok-1"}

    assert data.status == "ok"
    assert data.time_exec == 0.04
    assert data.time_server == 1700000005
    device = data.devices[0]
    raw = STATION_PAYLOAD["body"]["devices"][0]
    assert device.id == raw["_id"]
    assert device.type == raw["type"]
    assert device.station_name == raw["station_name"]
    assert device.data_type == tuple(raw["data_type"])
    assert device.reachable is True
    assert device.co2_calibrating is False
    assert device.firmware == raw["firmware"]
    assert device.place.altitude == 35.0
    assert device.place.location == (13.4, 52.5)
    assert device.dashboard_data.temperature == 21.3
    assert device.dashboard_data.co2 == 612
    assert device.dashboard_data.absolute_pressure == 1009.1
    assert device.dashboard_data.max_temp == 22.0
    assert device.dashboard_data.pressure_trend == "up"
    outdoor, rain = device.modules
    assert outdoor.id == "02:00:00:00:00:01"
    assert outdoor.battery_percent == 80
    assert outdoor.dashboard_data.temperature == 4.0
    assert rain.dashboard_data.sum_rain_24 == 1.515
    assert rain.reachable is None
    assert data.user.mail == "user@example.com"
    assert data.user.administrative.reg_locale == "de-DE"


def test_get_homecoachs_data_uses_homecoach_endpoint_and_name_field() -> None:
    client, session = _client_returning(
        {
            "body": {
                "devices": [
                    {
                        "_id": "70:ee:50:00:00:02",
                        "type": "NHC",
                        "name": "Bedroom",
                        "dashboard_data": {"Temperature": 20.5, "CO2": 900, "health_idx": 1},
                    }
                ]
            },
            "status": "ok",
            "time_server": 1700000000,
        }
    )

    data = client.get_homecoachs_data("70:ee:50:00:00:02")

    assert session.post.call_args[0] == (config_mod.get_homecoachs_data_url(),)
    device = data.devices[0]
    assert device.station_name == "Bedroom"
    assert device.dashboard_data.health_idx == 1
    assert device.modules == ()
    assert data.user is None


def test_station_data_with_mistyped_field_fails_deserialization() -> None:
    payload = json.loads(json.dumps(STATION_PAYLOAD))
    payload["body"]["devices"][0]["dashboard_data"]["CO2"] = "high"
    client, _ = _client_returning(payload)

    with pytest.raises(JsonDeserializationFailedError) as excinfo:
        client.get_station_data("70:ee:50:00:00:01")

    assert excinfo.value.name == "get_station_data"
    assert "CO2" in str(excinfo.value.__cause__)


def test_station_data_rejects_boolean_for_numeric_field() -> None:
    payload = json.loads(json.dumps(STATION_PAYLOAD))
    payload["body"]["devices"][0]["firmware"] = True

    with pytest.raises(ValueError):
        station_mod.StationData.from_dict(payload)


# ============================================================================
# Homes data / home status
# ============================================================================


def test_homes_data_parameters_omit_unset_fields() -> None:
    assert homes_data_mod.Parameters().to_params() == {}
    params = homes_data_mod.Parameters(
        home_id="home-1",
        gateway_types=(homes_data_mod.GatewayType.NAPLUG, homes_data_mod.GatewayType.NACAMERA),
    ).to_params()
    assert params == {"home_id": "home-1", "gateway_types": "NAPlug,NACamera"}


def test_get_homes_data_decodes_homes_rooms_and_schedules() -> None:
    client, session = _client_returning(
        {
            "body": {
                "homes": [
                    {
                        "id": "home-1",
                        "name": "Home",
                        "altitude": 40,
                        "coordinates": [13.4, 52.5],
                        "country": "DE",
                        "timezone": "Europe/Berlin",
                        "therm_mode": "schedule",
                        "therm_setpoint_default_duration": 180,
                        "rooms": [{"id": "room-1", "name": "Living", "type": "livingroom", "module_ids": ["04:00:00:00:00:01"]}],
                        "modules": [
                            {"id": "70:ee:50:00:00:10", "type": "NAPlug", "name": "Relay", "modules_bridged": ["04:00:00:00:00:01"]},
                            {"id": "04:00:00:00:00:01", "type": "NATherm1", "room_id": "room-1", "bridge": "70:ee:50:00:00:10"},
                        ],
                        "schedules": [
                            {
                                "id": "sched-1",
                                "name": "Default",
                                "type": "therm",
                                "default": True,
                                "selected": True,
                                "hg_temp": 7,
                                "away_temp": 12,
                                "timetable": [{"zone_id": 0, "m_offset": 0}, {"zone_id": 1, "m_offset": 420}],
                                "zones": [
                                    {"id": 0, "name": "Comfort", "type": 0, "rooms": [{"id": "room-1", "therm_setpoint_temperature": 21}]},
                                    {"id": 1, "name": "Night", "type": 1, "rooms": [{"id": "room-1", "therm_setpoint_temperature": 17.5}]},
                                ],
                            }
                        ],
                    }
                ],
                "user": {"id": "user-1", "email": "user@example.com", "language": "de-DE", "unit_system": 0},
            },
            "status": "ok",
            "time_exec": 0.02,
            "time_server": 1700000000,
        }
    )

    data = client.get_homes_data(homes_data_mod.Parameters(home_id="home-1"))

    assert session.post.call_args[0] == (config_mod.get_homes_data_url(),)
    assert session.post.call_args[1]["data"] == {"home_id": "home-1", "access_token": "tok-1"}
    home = data.homes[0]
    assert home.altitude == 40.0
    assert home.coordinates == (13.4, 52.5)
    assert home.rooms[0].module_ids == ("04:00:00:00:00:01",)
    assert home.modules[0].modules_bridged == ("04:00:00:00:00:01",)
    assert home.modules[1].bridge == "70:ee:50:00:00:10"
    schedule = home.schedules[0]
    assert schedule.default is True
    assert schedule.hg_temp == 7.0
    assert schedule.timetable[1].m_offset == 420
    assert schedule.zones[1].rooms[0].therm_setpoint_temperature == 17.5
    assert data.user.email == "user@example.com"


def test_home_status_parameters_join_device_types() -> None:
    params = home_status_mod.Parameters(
        home_id="home-1",
        device_types=(home_status_mod.DeviceType.NAPLUG, home_status_mod.DeviceType.NRV),
    ).to_params()

    assert params == {"home_id": "home-1", "device_types": "NAPlug,NRV"}
    assert home_status_mod.Parameters(home_id="home-1").to_params() == {"home_id": "home-1"}


def test_get_home_status_decodes_rooms_modules_and_errors() -> None:
    client, session = _client_returning(
        {
            "body": {
                "home": {
                    "id": "home-1",
                    "rooms": [
                        {
                            "id": "room-1",
                            "reachable": True,
                            "anticipating": False,
                            "open_window": False,
                            "heating_power_request": 0,
                            "therm_measured_temperature": 20.6,
                            "therm_setpoint_temperature": 21,
                            "therm_setpoint_mode": "schedule",
                            "therm_setpoint_start_time": 1699990000,
                            "therm_setpoint_end_time": 1700010000,
                        }
                    ],
                    "modules": [
                        {"id": "70:ee:50:00:00:10", "type": "NAPlug", "wifi_strength": 60, "firmware_revision": 212},
                        {
                            "id": "04:00:00:00:00:01",
                            "type": "NATherm1",
                            "reachable": True,
                            "boiler_status": False,
                            "battery_state": "full",
                            "battery_level": 4100,
                            "rf_strength": 70,
                            "bridge": "70:ee:50:00:00:10",
                        },
                    ],
                },
                "errors": [{"code": 6, "id": "09:00:00:00:00:01"}],
            },
            "status": "ok",
            "time_server": 1700000000,
        }
    )

    status = client.get_home_status(home_status_mod.Parameters(home_id="home-1"))

    assert session.post.call_args[0] == (config_mod.get_home_status_url(),)
    room = status.home.rooms[0]
    assert room.therm_measured_temperature == 20.6
    assert room.therm_setpoint_temperature == 21.0
    assert room.therm_setpoint_mode == "schedule"
    plug, therm = status.home.modules
    assert plug.wifi_strength == 60
    assert therm.boiler_status is False
    assert therm.battery_level == 4100
    assert status.errors == (home_status_mod.ModuleError(code=6, id="09:00:00:00:00:01"),)


def test_home_status_without_home_fails_deserialization() -> None:
    client, _ = _client_returning({"body": {}, "status": "ok", "time_server": 1700000000})

    with pytest.raises(JsonDeserializationFailedError):
        client.get_home_status(home_status_mod.Parameters(home_id="home-1"))


# ============================================================================
# Measures
# ============================================================================


def test_measure_parameters_encode_all_fields() -> None:
    params = measure_mod.Parameters(
        device_id="70:ee:50:00:00:01",
        module_id="02:00:00:00:00:01",
        scale=measure_mod.Scale.MIN_30,
        types=(measure_mod.MeasureType.TEMPERATURE, measure_mod.MeasureType.HUMIDITY),
        date_begin=1700000000,
        date_end=1700086400,
        limit=1024,
        optimize=False,
        real_time=True,
    ).to_params()

    assert params == {
        "device_id": "70:ee:50:00:00:01",
        "module_id": "02:00:00:00:00:01",
        "scale": "30min",
        "type": "temperature,humidity",
        "date_begin": "1700000000",
        "date_end": "1700086400",
        "limit": "1024",
        "optimize": "false",
        "real_time": "true",
    }


@pytest.mark.parametrize(
    "kwargs",
    [
        {"types": ()},
        {"limit": 0},
        {"limit": 1025},
        {"date_begin": 1700000100, "date_end": 1700000000},
    ],
)
def test_measure_parameters_reject_invalid_values(kwargs) -> None:
    base = {
        "device_id": "70:ee:50:00:00:01",
        "scale": measure_mod.Scale.MAX,
        "types": (measure_mod.MeasureType.TEMPERATURE,),
    }
    base.update(kwargs)

    with pytest.raises(ValueError):
        measure_mod.Parameters(**base)


def test_get_measure_decodes_timestamp_mapping() -> None:
    client, session = _client_returning(
        {
            "body": {"1700000300": [21.4, None], "1700000000": [21.5, 45]},
            "status": "ok",
            "time_exec": 0.03,
            "time_server": 1700000400,
        }
    )
    parameters = measure_mod.Parameters(
        device_id="70:ee:50:00:00:01",
        scale=measure_mod.Scale.MAX,
        types=(measure_mod.MeasureType.TEMPERATURE, measure_mod.MeasureType.HUMIDITY),
        optimize=False,
    )

    measure = client.get_measure(parameters)

    assert session.post.call_args[0] == (config_mod.get_measure_url(),)
    assert list(measure.values) == [1700000000, 1700000300]
    assert measure.values[1700000000] == (21.5, 45.0)
    assert measure.values[1700000300] == (21.4, None)


def test_measure_expands_optimized_series() -> None:
    measure = measure_mod.Measure.from_dict(
        {
            "body": [
                {"beg_time": 1700000000, "step_time": 300, "value": [[21.5, 45], [21.4, 44]]},
                {"beg_time": 1700003600, "value": [[20.0, 50]]},
            ],
            "status": "ok",
            "time_server": 1700004000,
        }
    )

    assert measure.values == {
        1700000000: (21.5, 45.0),
        1700000300: (21.4, 44.0),
        1700003600: (20.0, 50.0),
    }


def test_measure_rejects_non_timestamp_keys() -> None:
    with pytest.raises(ValueError):
        measure_mod.Measure.from_dict({"body": {"yesterday": [1.0]}, "status": "ok", "time_server": 1})


# ============================================================================
# Room thermpoint
# ============================================================================


def test_manual_thermpoint_requires_temperature() -> None:
    with pytest.raises(ValueError):
        thermpoint_mod.Parameters(home_id="home-1", room_id="room-1", mode=thermpoint_mod.Mode.MANUAL)


def test_set_room_thermpoint_posts_command() -> None:
    client, session = _client_returning({"status": "ok", "time_server": 1700000000})

    response = client.set_room_thermpoint(
        thermpoint_mod.Parameters(
            home_id="home-1",
            room_id="room-1",
            mode=thermpoint_mod.Mode.MANUAL,
            temp=19.5,
            endtime=1700003600,
        )
    )

    args, kwargs = session.post.call_args
    assert args == (config_mod.get_set_room_thermpoint_url(),)
    assert kwargs["data"] == {
        "home_id": "home-1",
        "room_id": "room-1",
        "mode": "manual",
        "temp": "19.5",
        "endtime": "1700003600",
        "access_token": "tok-1",
    }
    assert response == thermpoint_mod.SetRoomThermpointResponse(status="ok", time_server=1700000000)


def test_home_mode_thermpoint_sends_no_temperature() -> None:
    params = thermpoint_mod.Parameters(home_id="home-1", room_id="room-1", mode=thermpoint_mod.Mode.HOME).to_params()

    assert params == {"home_id": "home-1", "room_id": "room-1", "mode": "home"}
