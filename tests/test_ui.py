"""Server-rendered lookup page."""

import pytest
from fastapi.testclient import TestClient

from countyfinder.app import create_app
from countyfinder.deps.maps import get_maps_client
from countyfinder.services.maps import GoogleMapsClient


@pytest.fixture()
def client(google, settings):
    app = create_app(settings)
    app.dependency_overrides[get_maps_client] = lambda: GoogleMapsClient(
        settings, transport=google.transport
    )
    return TestClient(app)


def test_index_page_renders_empty_form(client, google):
    response = client.get("/")
    assert response.status_code == 200
    assert 'id="address-input"' in response.text
    assert 'class="result-card"' in response.text
    assert google.calls() == []


def test_index_page_lists_suggestions(client, google):
    response = client.get("/", params={"q": "600 Congress"})
    assert response.status_code == 200
    assert 'class="autocomplete-dropdown show"' in response.text
    assert "600 Congress Avenue, Austin, TX, USA" in response.text
    assert "/lookup?place_id=ChIJcongress600" in response.text
    assert len(google.calls("autocomplete")) == 1


def test_index_page_short_query_skips_autocomplete(client, google):
    response = client.get("/", params={"q": "60"})
    assert response.status_code == 200
    assert google.calls() == []


def test_lookup_page_shows_county(client, google):
    response = client.get(
        "/lookup",
        params={"place_id": "ChIJcongress600", "description": "600 Congress Avenue, Austin, TX, USA"},
    )
    assert response.status_code == 200
    assert 'class="result-card show"' in response.text
    assert "Travis County" in response.text
    assert "Texas (TX)" in response.text
    assert "test-key" not in response.text


def test_lookup_page_shows_error(client, google):
    google.envelopes["geocode"] = {"status": "ZERO_RESULTS", "results": []}
    response = client.get("/lookup", params={"place_id": "ChIJcongress600"})
    assert response.status_code == 200
    assert 'class="error show"' in response.text
    assert "Unable to retrieve county information" in response.text
    assert 'class="result-card"' in response.text


def test_lookup_page_requires_place_id(client, google):
    response = client.get("/lookup")
    assert response.status_code == 400
    assert 'class="error show"' in response.text
    assert google.calls() == []


def test_lookup_page_survives_malformed_geocode(client, google):
    google.envelopes["geocode"] = {"status": "OK", "results": {"bogus": 1}}
    response = client.get("/lookup", params={"place_id": "ChIJcongress600"})
    assert response.status_code == 200
    assert 'class="error show"' in response.text
    assert "Unable to retrieve county information" in response.text
