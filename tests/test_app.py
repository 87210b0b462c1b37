import json

import pytest

from palette_ramp.app import create_app


@pytest.fixture
def client():
    app = create_app({"TESTING": True})
    return app.test_client()


def test_index(client):
    res = client.get("/")
    assert res.status_code == 200
    assert b"Palette Ramp" in res.data


def test_palette_endpoint(client):
    res = client.get("/palette", query_string={"color": "#f64466", "count": 8})
    assert res.status_code == 200
    body = res.get_json()
    assert body["base"] == "#f64466"
    assert body["params"] == {"count": 8, "steepness": 0.5, "chroma_height": 1.0}
    assert len(body["palette"]) == 8
    assert sum(p["is_original"] for p in body["palette"]) == 1


def test_palette_accepts_rgb_and_clamps_count(client):
    res = client.get("/palette", query_string={"color": "rgb(246, 68, 102)", "count": 40})
    assert res.status_code == 200
    assert len(res.get_json()["palette"]) == 15


def test_palette_rejects_bad_input(client):
    assert client.get("/palette", query_string={"color": "bogus"}).status_code == 400
    res = client.get("/palette", query_string={"color": "#f64466", "count": "many"})
    assert res.status_code == 400
    assert "error" in res.get_json()


def test_palette_uses_configured_defaults():
    app = create_app({"TESTING": True, "DEFAULT_COLOR": "#3366cc", "DEFAULT_COUNT": 5})
    body = app.test_client().get("/palette").get_json()
    assert body["base"] == "#3366cc"
    assert len(body["palette"]) == 5


def test_curves_endpoint(client):
    body = client.get("/curves", query_string={"steepness": 1.0, "chroma_height": 0}).get_json()
    assert len(body["positions"]) == 101
    assert body["chroma"] == [1.0] * 101


def test_export_css(client):
    res = client.get("/export/css", query_string={"color": "#f64466"})
    assert res.status_code == 200
    assert res.mimetype == "text/css"
    assert "color-palette.css" in res.headers["Content-Disposition"]
    assert "--color-primary: #f64466;" in res.get_data(as_text=True)


def test_export_json(client):
    res = client.get("/export/json", query_string={"color": "#f64466", "count": 6})
    assert res.mimetype == "application/json"
    doc = json.loads(res.get_data(as_text=True))
    assert doc["total"] == 6


def test_export_errors(client):
    res = client.get("/export/xml")
    assert res.status_code == 400
    assert set(res.get_json()["supported"]) == {"css", "json"}
    assert client.get("/export/css", query_string={"color": "bogus"}).status_code == 400


def test_state_endpoint(client):
    res = client.post("/state", json={"state": None, "event": {"kind": "picker", "value": "#3366cc"}})
    assert res.status_code == 200
    state = res.get_json()
    assert state["visible"] is True
    assert state["hex_input"] == "#3366cc"

    res = client.post(
        "/state",
        json={"state": state, "event": {"kind": "params", "value": {"count": 4}}},
    )
    assert len(res.get_json()["palette"]) == 4


def test_state_endpoint_rejects_bad_event(client):
    assert client.post("/state", json={"event": {"kind": "nope"}}).status_code == 400
    assert client.post("/state", json=[1, 2]).status_code == 400


@pytest.mark.parametrize("value", ["nan", "inf", "-inf"])
def test_palette_rejects_non_finite_params(client, value):
    res = client.get("/palette", query_string={"color": "#f64466", "steepness": value})
    assert res.status_code == 400
    json.loads(res.get_data(as_text=True), parse_constant=pytest.fail)
    res = client.get("/palette", query_string={"color": "#f64466", "chroma_height": value})
    assert res.status_code == 400


def test_curves_points_are_bounded(client):
    body = client.get("/curves", query_string={"points": 2000000}).get_json()
    assert len(body["positions"]) == 513
    body = client.get("/curves", query_string={"points": -5}).get_json()
    assert len(body["positions"]) == 2


def test_state_endpoint_rejects_non_finite_params(client):
    res = client.post("/state", json={"event": {"kind": "params", "value": {"steepness": "nan"}}})
    assert res.status_code == 400
