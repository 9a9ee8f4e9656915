from countyfinder.client.presenter import (
    DROPDOWN,
    ERROR,
    LOADING,
    RESULT_CARD,
    ResultPresenter,
)
from countyfinder.schemas.address import CountyInfo, Suggestion


def test_display_result_uses_placeholder_for_absent_fields():
    presenter = ResultPresenter()
    presenter.display_result(CountyInfo(county="Travis County", state="Texas"), None)

    state = presenter.state
    assert state.is_visible(RESULT_CARD)
    assert state.text == {
        "county-name": "Travis County",
        "full-address": "—",
        "city": "—",
        "state": "Texas",
        "zip": "—",
    }


def test_error_suppresses_result_card():
    presenter = ResultPresenter()
    presenter.display_result(CountyInfo(county="Travis County"), "Austin, TX")
    presenter.show_error("Unable to get location details")

    assert presenter.state.is_visible(ERROR)
    assert not presenter.state.is_visible(RESULT_CARD)
    assert presenter.error_message == "Unable to get location details"

    presenter.hide_error()
    assert presenter.error_message is None


def test_loading_is_an_independent_toggle():
    presenter = ResultPresenter()
    presenter.show_loading(True)
    presenter.display_result(CountyInfo(county="Travis County"), "Austin, TX")
    assert presenter.state.is_visible(LOADING)
    presenter.show_loading(False)
    assert not presenter.state.is_visible(LOADING)
    assert presenter.state.is_visible(RESULT_CARD)


def test_render_html_exposes_dom_ids():
    presenter = ResultPresenter()
    presenter.set_input("600 Congress")
    presenter.show_suggestions(
        [Suggestion(description="600 Congress Avenue, Austin, TX, USA", place_id="ChIJ 600&x")]
    )
    presenter.display_result(
        CountyInfo(county="Travis County", city="Austin", state="Texas", state_short="TX", zip="78701"),
        "600 Congress Ave, Austin, TX 78701, USA",
    )
    html = presenter.render_html(title="County Finder")

    for element_id in [
        "address-input",
        "autocomplete-dropdown",
        "result-card",
        "county-name",
        "full-address",
        "city",
        "state",
        "zip",
        "error",
        "loading",
    ]:
        assert f'id="{element_id}"' in html
    assert 'class="result-card show"' in html
    assert "Texas (TX)" in html
    assert 'value="600 Congress"' in html
    assert "place_id=ChIJ%20600%26x" in html


def test_render_text_lists_suggestions_and_card():
    presenter = ResultPresenter()
    presenter.show_suggestions(
        [
            Suggestion(description="600 Congress Avenue, Austin, TX, USA", place_id="a"),
            Suggestion(description="600 Congress Street, Boston, MA, USA", place_id="b"),
        ]
    )
    assert presenter.render_text().splitlines() == [
        " 1. 600 Congress Avenue, Austin, TX, USA",
        " 2. 600 Congress Street, Boston, MA, USA",
    ]

    presenter.hide_suggestions()
    presenter.display_result(CountyInfo(county="Travis County", zip="78701"), None)
    text = presenter.render_text()
    assert "County:  Travis County" in text
    assert "City:    —" in text
    assert "ZIP:     78701" in text
    assert not presenter.state.is_visible(DROPDOWN)
