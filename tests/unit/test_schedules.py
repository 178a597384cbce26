import pytest

from core.schedules import disruptions_get, line_stop_area_schedules_get


@pytest.mark.unit
def test_schedules_numeric_key_sent_as_string(upstream):
    upstream.reply(json=[])

    upstream.call(line_stop_area_schedules_get, line_id="B", stop_area_id="SA:1", key=42)

    params = upstream.last.url.params
    assert params["key"] == "42"
    assert params["displayName"] == ""
    assert params["userlatlon"] == ""


@pytest.mark.unit
def test_schedules_missing_key_defaults_to_zero(upstream):
    upstream.reply(json=[])

    upstream.call(
        line_stop_area_schedules_get,
        line_id="B",
        stop_area_id="SA:1",
        display_name="Gare",
        userlatlon="45.56,5.92",
    )

    params = upstream.last.url.params
    assert params["key"] == "0"
    assert params["displayName"] == "Gare"
    assert params["userlatlon"] == "45.56,5.92"


@pytest.mark.unit
def test_schedules_listed_with_wait_and_realtime(upstream):
    schedules = [
        {
            "vehicleJourneyId": "VJ1",
            "destinationDisplay": "Bissy",
            "departureDateTime": "2024-05-02T08:15:00",
            "departureWait": 4,
            "realTime": 1,
        },
        {
            "vehicleJourneyId": "VJ2",
            "destinationDisplay": "Bissy",
            "departureDateTime": "2024-05-02T08:35:00",
            "departureWait": 24,
            "realTime": 0,
        },
    ]
    upstream.reply(json=schedules)

    response = upstream.call(line_stop_area_schedules_get, line_id="B", stop_area_id="SA:1")

    assert "Found 2 schedules for stop area SA:1 on line B" in response.text
    assert "- Bissy at 2024-05-02T08:15:00 (in 4 min) [real time]" in response.text
    assert "- Bissy at 2024-05-02T08:35:00 (in 24 min)\n" not in response.text
    assert response.text.endswith("- Bissy at 2024-05-02T08:35:00 (in 24 min)")
    assert response.metadata == {"schedules": schedules}


@pytest.mark.unit
def test_schedules_accept_wrapped_list(upstream):
    upstream.reply(json={"schedules": [{"destinationDisplay": "Gare"}]})

    response = upstream.call(line_stop_area_schedules_get, line_id="B", stop_area_id="SA:1")

    assert not response.is_error
    assert "Found 1 schedules" in response.text


@pytest.mark.unit
def test_disruptions_sub_network_and_key(upstream):
    upstream.reply(json=[])

    upstream.call(disruptions_get, sub_networks="urbain", key=7)

    params = upstream.last.url.params
    assert params.get_list("subNetworks") == ["urbain"]
    assert params["key"] == "7"


@pytest.mark.unit
def test_disruptions_without_sub_network_omit_it(upstream):
    upstream.reply(json=[])

    response = upstream.call(disruptions_get)

    params = upstream.last.url.params
    assert "subNetworks" not in params
    assert params["key"] == "0"
    assert not response.is_error
    assert response.text == "Found 0 disruptions for network 3"


@pytest.mark.unit
def test_disruptions_summary(upstream):
    disruptions = [
        {
            "id": "D1",
            "title": "Travaux avenue de Lyon",
            "level": "warning",
            "messages": [{"text": "Arrêt Curial non desservi"}],
            "startValidity": "2024-05-02T05:00:00",
            "endValidity": "2024-05-10T23:00:00",
        },
    ]
    upstream.reply(json=disruptions)

    response = upstream.call(disruptions_get)

    assert "Found 1 disruptions for network 3" in response.text
    assert "- [warning] Travaux avenue de Lyon (ID: D1)" in response.text
    assert "  Valid: 2024-05-02T05:00:00 to 2024-05-10T23:00:00\n  Arrêt Curial non desservi" in response.text
    assert response.metadata == {"disruptions": disruptions}


@pytest.mark.unit
def test_disruptions_reject_unexpected_shape(upstream):
    upstream.reply(json={"unexpected": True})

    response = upstream.call(disruptions_get)

    assert response.is_error
    assert "Invalid response format" in response.text


@pytest.mark.unit
def test_schedules_path_segments_escaped(upstream):
    upstream.reply(json=[])

    upstream.call(line_stop_area_schedules_get, line_id="B/../A", stop_area_id="SA:1")

    assert upstream.last.url.raw_path.startswith(
        b"/InstantCore/v3/networks/3/lines/B%2F..%2FA/stopAreas/SA:1/schedules?"
    )
