from __future__ import annotations

import asyncio

import httpx
import pytest

from app.domain.errors import MalformedDataError, NetworkError, UpstreamStatusError
from app.infra.weather.openweather_client import OpenWeatherClient
from app.providers.weather.openweather import OpenWeatherProvider, parse_current

LONDON = 2643743

SAMPLE_PAYLOAD = {
    "main": {"temp": 293.15, "feels_like": 292.15, "humidity": 65},
    "wind": {"speed": 3.5},
    "clouds": {"all": 40},
    "weather": [{"description": "scattered clouds"}],
}


def _client(handler) -> OpenWeatherClient:
    return OpenWeatherClient("test-key", transport=httpx.MockTransport(handler))


def test_fetch_current_sends_city_and_key():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["params"] = dict(request.url.params)
        return httpx.Response(200, json=SAMPLE_PAYLOAD)

    provider = OpenWeatherProvider(_client(handler))
    raw = asyncio.run(provider.fetch_current(LONDON))

    assert seen["params"] == {"id": str(LONDON), "appid": "test-key"}
    assert raw.temp_k == 293.15
    assert raw.feels_like_k == 292.15
    assert raw.humidity == 65
    assert raw.wind_speed == 3.5
    assert raw.cloudiness == 40
    assert raw.description == "scattered clouds"


@pytest.mark.parametrize("status", [401, 404, 429, 500, 503])
def test_error_statuses_raise_upstream_error(status):
    client = _client(lambda request: httpx.Response(status, text="nope"))
    with pytest.raises(UpstreamStatusError) as excinfo:
        asyncio.run(client.fetch_current(LONDON))
    assert excinfo.value.status_code == status


def test_invalid_json_is_malformed():
    client = _client(lambda request: httpx.Response(200, text="{not json"))
    with pytest.raises(MalformedDataError):
        asyncio.run(client.fetch_current(LONDON))


def test_null_body_is_malformed():
    client = _client(lambda request: httpx.Response(200, text="null"))
    with pytest.raises(MalformedDataError):
        asyncio.run(client.fetch_current(LONDON))


def test_timeout_is_network_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(NetworkError):
        asyncio.run(_client(handler).fetch_current(LONDON))


def test_connection_error_is_network_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(NetworkError):
        asyncio.run(_client(handler).fetch_current(LONDON))


def test_missing_api_key_is_rejected():
    with pytest.raises(RuntimeError):
        OpenWeatherClient(None)


def test_optional_blocks_default_to_zero():
    raw = parse_current({"main": {"temp": 280.0, "feels_like": 279.0, "humidity": 80}, "weather": [{}]}, 1)
    assert raw.wind_speed == 0
    assert raw.cloudiness == 0
    assert raw.description == ""


@pytest.mark.parametrize("weather", [None, []])
def test_missing_description_means_no_data(weather):
    payload = dict(SAMPLE_PAYLOAD, weather=weather)
    assert parse_current(payload, 1).description is None


def test_missing_main_block_is_malformed():
    with pytest.raises(MalformedDataError):
        parse_current({"weather": [{"description": "rain"}]}, 1)


@pytest.mark.parametrize("key, block", [("wind", [1]), ("clouds", "x"), ("wind", 5)])
def test_non_object_optional_block_is_malformed(key, block):
    payload = dict(SAMPLE_PAYLOAD, **{key: block})
    with pytest.raises(MalformedDataError):
        parse_current(payload, 1)
