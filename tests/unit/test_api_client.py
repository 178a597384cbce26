import asyncio

import httpx
import pytest

from core.api_client import UpstreamError, fetch_json, format_error, normalize_key, path_segment
from core.config import Settings


def _status_error(status: int, **response_kwargs) -> httpx.HTTPStatusError:
    request = httpx.Request("GET", "https://example.test/v3/networks/3")
    response = httpx.Response(status, request=request, **response_kwargs)
    return httpx.HTTPStatusError("boom", request=request, response=response)


@pytest.mark.unit
def test_format_error_prefers_upstream_message():
    error = _status_error(404, json={"message": "Unknown line XYZ"})
    assert format_error(error) == "Unknown line XYZ"


@pytest.mark.unit
def test_format_error_falls_back_to_transport_message():
    assert format_error(_status_error(500, text="<html>oops</html>")) == "boom"
    assert format_error(_status_error(502, json={"detail": "no message key"})) == "boom"
    assert format_error(httpx.ConnectError("Connection refused")) == "Connection refused"


@pytest.mark.unit
def test_format_error_never_returns_empty_string():
    assert format_error(httpx.ReadTimeout("")) == "ReadTimeout"


@pytest.mark.unit
@pytest.mark.parametrize(
    "key, default, expected",
    [
        (42, "0", "42"),
        ("7", "0", "7"),
        (None, "0", "0"),
        ("", "3", "3"),
        (0, "3", "0"),
    ],
)
def test_normalize_key(key, default, expected):
    assert normalize_key(key, default=default) == expected


@pytest.mark.unit
def test_fetch_json_drops_none_params_and_keeps_lists(upstream):
    upstream.reply(json=[{"id": "B"}])

    async def go():
        async with upstream.client() as client:
            return await fetch_json(
                "/v3/networks/3/lines",
                params={"a": None, "b": "x", "c": ["1", "2"], "d": []},
                client=client,
            )

    assert asyncio.run(go()) == [{"id": "B"}]
    params = upstream.last.url.params
    assert "a" not in params
    assert params["b"] == "x"
    assert params.get_list("c") == ["1", "2"]
    assert "d" not in params


@pytest.mark.unit
def test_fetch_json_wraps_failures(patched_upstream):
    patched_upstream.reply(status=503, json={"message": "Maintenance"})
    with pytest.raises(UpstreamError, match="Maintenance"):
        asyncio.run(fetch_json("/v3/networks/3"))

    patched_upstream.reply(text="not json")
    with pytest.raises(UpstreamError):
        asyncio.run(fetch_json("/v3/networks/3"))


@pytest.mark.unit
def test_settings_network_path_and_env_overrides(monkeypatch):
    monkeypatch.setenv("SYNCHRO_MCP_SERVER_NAME", "custom-name")
    config = Settings.from_env()
    assert config.server_name == "custom-name"
    assert config.server_version == "1.0.0"
    assert config.network_id == 3
    assert config.network_path == "/v3/networks/3"


@pytest.mark.unit
def test_path_segment_escapes_reserved_characters():
    assert path_segment("B") == "B"
    assert path_segment("SA:1") == "SA:1"
    assert path_segment(12) == "12"
    assert path_segment("B?key=evil") == "B%3Fkey%3Devil"
    assert path_segment("a/b c#d") == "a%2Fb%20c%23d"
