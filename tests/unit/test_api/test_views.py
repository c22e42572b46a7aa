"""Unit tests for the server-rendered map page."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from poll_map.api.views import page_url, views_router
from poll_map.services.map_service import POLL_DATA_ERROR, MapDataset, Notice


@pytest.fixture
def app(dataset: MapDataset) -> FastAPI:
    app = FastAPI()
    app.include_router(views_router)
    app.state.dataset = dataset
    return app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app)


class TestPageUrl:
    """Tests for page_url()."""

    def test_no_params(self) -> None:
        assert page_url() == "/"

    def test_drops_empty_values(self) -> None:
        assert page_url(county="Oakland", township=None, details=False) == "/?county=Oakland"

    def test_encodes_values(self) -> None:
        url = page_url(county="Grand Traverse", township="Acme Township", details=True)
        assert url == "/?county=Grand+Traverse&township=Acme+Township&details=true"


class TestMapPage:
    """Tests for GET /."""

    def test_prompt_when_nothing_selected(self, client: TestClient) -> None:
        resp = client.get("/")
        assert resp.status_code == 200
        assert "Click on a county to view poll data" in resp.text
        assert resp.text.count('class="county') == 3
        assert 'href="/?county=Oakland&amp;selected=county"' in resp.text

    def test_county_with_data_lists_townships(self, client: TestClient) -> None:
        resp = client.get("/", params={"county": "Oakland", "selected": "county"})
        assert "Oakland County" in resp.text
        assert "Please Select Township" in resp.text
        assert '<option value="Avon Township"' in resp.text
        assert "Election Results" not in resp.text
        assert "Selected county: Oakland" in resp.text
        assert '<input type="hidden" name="selected" value="township">' in resp.text

    def test_county_without_data(self, client: TestClient) -> None:
        resp = client.get("/", params={"county": "Wayne"})
        assert "No poll data has been added for Wayne County yet." in resp.text
        assert "Poll_tickets/Wayne/" in resp.text

    def test_township_summary(self, client: TestClient) -> None:
        resp = client.get("/", params={"county": "Oakland", "township": "Addison Township"})
        assert "Election Results" in resp.text
        assert "Winner: Donald J. Trump, JD Vance - 721 votes" in resp.text
        assert "Show Original Poll Tape" in resp.text
        assert "Straight Party Ticket" not in resp.text
        assert "Detailed Results" not in resp.text

    def test_township_details(self, client: TestClient) -> None:
        resp = client.get("/", params={"county": "Oakland", "township": "Addison Township", "details": "true"})
        assert "Detailed Results" in resp.text
        assert "Straight Party Ticket" in resp.text
        assert "S/N: DS2001234" in resp.text
        assert "Final Counter: 1287" in resp.text
        assert "Show Less" in resp.text

    def test_none_township_shows_no_ticket(self, client: TestClient) -> None:
        resp = client.get("/", params={"county": "Oakland", "township": "none"})
        assert "Election Results" not in resp.text
        assert "Selected county" not in resp.text

    def test_township_choice_is_announced_once(self, client: TestClient) -> None:
        resp = client.get("/", params={"county": "Oakland", "township": "Avon Township", "selected": "township"})
        assert "Selected township: Avon Township" in resp.text
        assert "Selected county" not in resp.text
        toggled = client.get("/", params={"county": "Oakland", "township": "Avon Township", "details": "true"})
        assert "Selected township" not in toggled.text

    def test_load_errors_are_shown(self, app: FastAPI) -> None:
        app.state.dataset = MapDataset(notices=[Notice(level="error", message=POLL_DATA_ERROR)])
        resp = TestClient(app).get("/")
        assert resp.status_code == 200
        assert POLL_DATA_ERROR in resp.text

    def test_names_are_escaped(self, app: FastAPI) -> None:
        resp = TestClient(app).get("/", params={"county": "<script>"})
        assert "<script>" not in resp.text
        assert "&lt;script&gt;" in resp.text
