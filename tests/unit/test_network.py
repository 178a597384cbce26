import pytest

from core.network import (
    line_get,
    line_stop_areas_get,
    lines_get,
    network_get,
    vehicle_journeys_directions_get,
)


@pytest.mark.unit
def test_network_summary(upstream):
    network = {"id": 3, "name": "Synchro Bus", "modes": ["BUS"], "lat": 45.56, "lon": 5.92}
    upstream.reply(json=network)

    response = upstream.call(network_get)

    assert response.text.startswith("Network: Synchro Bus (ID: 3)")
    assert "BUS" in response.text
    assert response.metadata == network


@pytest.mark.unit
def test_lines_listed_one_per_row(upstream):
    lines = [
        {"id": "A", "sName": "A", "lName": "Chambéry Le Haut - Gare"},
        {"id": "B", "sName": "B", "lName": "Bissy - Barberaz", "subNetwork": {"id": "1", "name": "Urbain"}},
    ]
    upstream.reply(json=lines)

    response = upstream.call(lines_get)

    assert "Found 2 lines for network 3" in response.text
    assert "- B: Bissy - Barberaz (ID: B)" in response.text
    assert response.metadata == {"lines": lines}


@pytest.mark.unit
def test_lines_rejects_unexpected_shape(upstream):
    upstream.reply(json={"lines": "nope"})

    response = upstream.call(lines_get)

    assert response.is_error
    assert "Invalid response format" in response.text


@pytest.mark.unit
def test_line_summary(upstream):
    upstream.reply(json={"id": "C", "sName": "C", "lName": "Chrono C"})

    response = upstream.call(line_get, line_id="C")

    assert response.text == "Line C: Chrono C (ID: C)"


@pytest.mark.unit
def test_line_id_is_escaped_in_path(upstream):
    upstream.reply(json={"id": "B", "sName": "B", "lName": "Bissy"})

    upstream.call(line_get, line_id="B?key=evil")

    assert upstream.last.url.raw_path == b"/InstantCore/v3/networks/3/lines/B%3Fkey=evil"
    assert "key" not in upstream.last.url.params


@pytest.mark.unit
def test_stop_areas_listed_with_ids_and_hint(upstream):
    stops = [
        {"id": "SA:1", "name": "Gare", "city": "Chambéry"},
        {"id": "SA:2", "name": "Curial", "city": "Chambéry"},
    ]
    upstream.reply(json={"stopAreas": stops})

    response = upstream.call(line_stop_areas_get, line_id="B")

    assert not response.is_error
    assert "Found 2 stop areas for line B" in response.text
    assert "- Gare (ID: SA:1)" in response.text
    assert "- Curial (ID: SA:2)" in response.text
    assert "lineStopAreaSchedulesGet" in response.text
    assert response.metadata == {"stopAreas": stops}


@pytest.mark.unit
def test_empty_stop_area_list_is_an_error(upstream):
    upstream.reply(json={"stopAreas": []})

    envelope = upstream.call(line_stop_areas_get, line_id="ZZ").to_dict()

    assert envelope["isError"] is True
    assert "No stop areas found for line ZZ" in envelope["content"][0]["text"]


@pytest.mark.unit
def test_stop_area_failure_carries_hint(upstream):
    upstream.reply(status=500, json={"message": "Internal error"})

    response = upstream.call(line_stop_areas_get, line_id="B")

    assert response.is_error
    assert response.text.startswith("Error getting stop areas: Internal error")
    assert "Make sure to call this function first" in response.text


@pytest.mark.unit
def test_directions_send_network_key(upstream):
    directions = [
        {"id": "B:A", "lName": "Vers Bissy", "stopAreas": [{"id": "SA:1", "name": "Gare"}]},
        {"id": "B:R", "lName": "Vers Barberaz", "stopAreas": []},
    ]
    upstream.reply(json=directions)

    response = upstream.call(vehicle_journeys_directions_get, line_id="B")

    assert upstream.last.url.params["key"] == "3"
    assert "Found 2 directions for line B" in response.text
    assert "- Vers Bissy (ID: B:A), 1 stops" in response.text
    assert response.metadata == {"directions": directions}
