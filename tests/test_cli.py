"""Terminal front end."""

import httpx

from countyfinder import cli
from countyfinder.client.transport import DirectTransport
from countyfinder.services.maps import GoogleMapsClient


def patch_transport(monkeypatch, google, settings):
    def fake_build_transport(_settings, *, kind=None, proxy_url=None):
        return DirectTransport(GoogleMapsClient(settings, transport=google.transport))

    monkeypatch.setattr(cli, "build_transport", fake_build_transport)


def test_cli_prints_county(monkeypatch, capsys, google, settings):
    patch_transport(monkeypatch, google, settings)
    exit_code = cli.main(["600 Congress", "--pick", "1"])
    out = capsys.readouterr().out
    assert exit_code == 0
    assert " 1. 600 Congress Avenue, Austin, TX, USA" in out
    assert "County:  Travis County" in out
    assert "State:   Texas (TX)" in out


def test_cli_can_pick_another_suggestion(monkeypatch, capsys, google, settings):
    patch_transport(monkeypatch, google, settings)
    assert cli.main(["600 Congress", "--pick", "2"]) == 0
    (details,) = google.calls("place_details")
    assert details.url.params["place_id"] == "ChIJcongressboston"


def test_cli_without_suggestions_exits_one(monkeypatch, capsys, google, settings):
    google.envelopes["autocomplete"] = {"status": "ZERO_RESULTS", "predictions": []}
    patch_transport(monkeypatch, google, settings)
    assert cli.main(["zzzzzz"]) == 1
    assert "No suggestions for 'zzzzzz'" in capsys.readouterr().out


def test_cli_reports_autocomplete_failure(monkeypatch, capsys, google, settings):
    google.failures["autocomplete"] = lambda request: httpx.Response(500, text="oops")
    patch_transport(monkeypatch, google, settings)
    assert cli.main(["600 Congress"]) == 1
    assert "Error: Failed to fetch address suggestions" in capsys.readouterr().out


def test_cli_rejects_out_of_range_pick(monkeypatch, capsys, google, settings):
    patch_transport(monkeypatch, google, settings)
    assert cli.main(["600 Congress", "--pick", "5"]) == 1
    assert "--pick must be between 1 and 2" in capsys.readouterr().err
    assert google.calls("place_details") == []


def test_cli_lookup_failure_exits_one(monkeypatch, capsys, google, settings):
    google.envelopes["geocode"] = {"status": "OK", "results": [{"address_components": []}]}
    patch_transport(monkeypatch, google, settings)
    assert cli.main(["600 Congress"]) == 1
    assert "Error: County information not available for this address" in capsys.readouterr().out
