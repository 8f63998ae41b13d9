"""Tests for the HTTP routes."""

import json
from datetime import datetime
from unittest.mock import MagicMock

import pytest

from viberoute.api.llm import GenerationError
from viberoute.api.services.guide_service import GuideService
from viberoute.api.services.view_state import ViewStateStore
from viberoute.app import create_app

from .conftest import ROMA_ITINERARY, FakeModelClient


class TestApi:
    def test_health(self, http) -> None:
        response = http.get("/api/health")

        assert response.status_code == 200
        body = response.get_json()
        assert body["status"] == "ok"
        datetime.fromisoformat(body["time"])

    def test_spots_is_a_static_list(self, http) -> None:
        body = http.get("/api/spots").get_json()

        assert [spot["id"] for spot in body] == [1, 2, 3]
        assert {"name", "type", "price", "safety", "lat", "lng", "description"} <= set(body[0])

    def test_config(self, http, monkeypatch) -> None:
        monkeypatch.delenv("GOOGLE_MAPS_API_KEY", raising=False)
        monkeypatch.delenv("LLM_PROVIDER", raising=False)

        body = http.get("/api/config").get_json()

        assert body["provider"] == "gemini"
        assert body["google_maps_configured"] is False
        assert "Roma" in body["suggestions"]

    def test_query_returns_data_and_sources(self, http) -> None:
        response = http.post("/api/query/itinerary", json={"city": "Roma", "hours": 4})

        assert response.status_code == 200
        body = response.get_json()
        assert body["data"] == ROMA_ITINERARY
        assert body["sources"][0] == {"uri": "https://example.com/roma", "title": "Guida di Roma"}
        assert body["error"] is None

    def test_query_unknown_tab_returns_null_data(self, http) -> None:
        body = http.post("/api/query/xyz", json={"city": "Roma"}).get_json()

        assert body == {"data": None, "sources": []}

    def test_query_without_city_is_bad_request(self, http) -> None:
        response = http.post("/api/query/safety", json={})

        assert response.status_code == 400
        assert "error" in response.get_json()

    def test_query_with_bad_hours_is_bad_request(self, http) -> None:
        response = http.post("/api/query/itinerary", json={"city": "Roma", "hours": "many"})

        assert response.status_code == 400

    def test_query_with_fractional_hours_is_bad_request(self, http, fake_client) -> None:
        response = http.post("/api/query/itinerary", json={"city": "Roma", "hours": 4.7})

        assert response.status_code == 400
        assert fake_client.calls == []

    def test_query_accepts_integral_float_hours(self, http, fake_client) -> None:
        response = http.post("/api/query/itinerary", json={"city": "Roma", "hours": 6.0})

        assert response.status_code == 200
        prompt, _ = fake_client.calls[0]
        assert "6 ore" in prompt

    @pytest.mark.parametrize("body", [["Roma"], "Roma", 4])
    def test_query_with_non_object_body_is_bad_request(self, http, body) -> None:
        response = http.post("/api/query/itinerary", json=body)

        assert response.status_code == 400
        assert response.get_json()["error"] == "Request body must be a JSON object"

    def test_query_failure_is_reported(self) -> None:
        service = GuideService(client=FakeModelClient(error=GenerationError("down")), geocode=False)
        app, _ = create_app(guide_service=service, state_store=ViewStateStore(start_cleanup=False))

        body = app.test_client().post("/api/query/social", json={"city": "Roma"}).get_json()

        assert body["data"] == []
        assert body["sources"] == []
        assert body["error"]


class TestPageFlow:
    def test_landing_page(self, http) -> None:
        response = http.get("/")

        assert response.status_code == 200
        assert "Esplora qualsiasi città" in response.get_data(as_text=True)

    def test_city_then_category(self, http) -> None:
        assert http.post("/city", data={"city": "Roma"}).status_code == 302
        assert http.get("/api/state").get_json()["active_tab"] == "menu"

        assert http.post("/tab/itinerary", data={"hours": "4"}).status_code == 302

        state = http.get("/api/state").get_json()
        assert state["active_tab"] == "itinerary"
        assert state["loading"] is False
        assert state["data"] == ROMA_ITINERARY
        assert len(state["sources"]) == 2

        page = http.get("/").get_data(as_text=True)
        assert "Colazione al Pantheon" in page
        assert "Guida di Roma" in page

    def test_back_to_menu(self, http) -> None:
        http.post("/city", json={"city": "Roma"})
        http.post("/tab/safety", json={})

        http.post("/back")

        assert http.get("/api/state").get_json()["active_tab"] == "menu"

    def test_category_before_city_conflicts(self, http) -> None:
        response = http.post("/tab/itinerary", json={})

        assert response.status_code == 409

    def test_empty_city_conflicts(self, http) -> None:
        assert http.post("/city", data={"city": ""}).status_code == 409

    def test_invalid_hours_leave_state_idle(self, http) -> None:
        http.post("/city", json={"city": "Roma"})

        response = http.post("/tab/itinerary", json={"hours": 99})

        assert response.status_code == 400
        state = http.get("/api/state").get_json()
        assert state["loading"] is False
        assert state["active_tab"] == "menu"

    def test_failed_query_shows_error(self) -> None:
        service = GuideService(client=FakeModelClient(error=GenerationError("down")), geocode=False)
        app, _ = create_app(guide_service=service, state_store=ViewStateStore(start_cleanup=False))
        http = app.test_client()

        http.post("/city", json={"city": "Roma"})
        http.post("/tab/overview-detail", json={})

        state = http.get("/api/state").get_json()
        assert state["loading"] is False
        assert state["data"] == {}
        assert state["error"]
        assert state["error"] in http.get("/").get_data(as_text=True)

    def test_clients_have_separate_state(self, app) -> None:
        first, second = app.test_client(), app.test_client()

        first.post("/city", json={"city": "Roma"})

        assert first.get("/api/state").get_json()["city"] == "Roma"
        assert second.get("/api/state").get_json()["city"] == ""

    def test_menu_with_bad_hours_is_rejected(self, http) -> None:
        http.post("/city", json={"city": "Roma"})

        response = http.post("/tab/menu", json={"hours": 99})

        assert response.status_code == 400
        assert http.get("/api/state").get_json()["hours"] == 4
        assert http.post("/tab/safety", data={}).status_code == 302
        assert http.get("/api/state").get_json()["active_tab"] == "safety"

    def test_menu_does_not_change_hours(self, http) -> None:
        http.post("/city", json={"city": "Roma"})

        assert http.post("/tab/menu", json={"hours": 8}).status_code == 302

        assert http.get("/api/state").get_json()["hours"] == 4

    def test_fractional_hours_leave_state_idle(self, http) -> None:
        http.post("/city", json={"city": "Roma"})

        response = http.post("/tab/itinerary", data={"hours": "4.7"})

        assert response.status_code == 400
        state = http.get("/api/state").get_json()
        assert state["hours"] == 4
        assert state["loading"] is False

    def test_non_object_city_body_is_bad_request(self, http) -> None:
        response = http.post("/city", json=["Roma"])

        assert response.status_code == 400
        assert http.get("/api/state").get_json()["active_tab"] == "explore"

    def test_non_text_city_is_bad_request(self, http) -> None:
        assert http.post("/city", json={"city": 42}).status_code == 400

    def test_unexpected_service_error_releases_loading(self, http, guide_service, monkeypatch) -> None:
        monkeypatch.setattr(guide_service, "run_query", MagicMock(side_effect=RuntimeError("boom")))
        http.post("/city", json={"city": "Roma"})

        with pytest.raises(RuntimeError):
            http.post("/tab/safety", json={})

        state = http.get("/api/state").get_json()
        assert state["loading"] is False
        assert http.post("/reset").status_code == 302

    def test_geocoded_stops_link_to_coordinates(self, fake_client) -> None:
        stop = dict(ROMA_ITINERARY[0], lat=41.8986, lng=12.4769)
        fake_client.text = json.dumps([stop])
        app, _ = create_app(
            guide_service=GuideService(client=fake_client, geocode=False),
            state_store=ViewStateStore(start_cleanup=False),
        )
        http = app.test_client()

        http.post("/city", json={"city": "Roma"})
        http.post("/tab/itinerary", json={"hours": 4})
        page = http.get("/").get_data(as_text=True)

        assert "41.89860, 12.47690" in page
        assert "query=41.8986,12.4769" in page

    def test_stops_without_coordinates_have_no_map_link(self, http) -> None:
        http.post("/city", json={"city": "Roma"})
        http.post("/tab/itinerary", json={"hours": 4})

        assert 'class="coords"' not in http.get("/").get_data(as_text=True)
