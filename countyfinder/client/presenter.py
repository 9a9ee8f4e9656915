"""Result presentation for a county lookup.

WHAT: Keeps the visible page state (result card, error, loading, dropdown).
WHEN: Driven by ``SuggestionController`` as a lookup moves through its stages.
WHY: Rendering stays a pure function of state, so the same presenter backs the
HTML page and the terminal output.
HOW: Each element is addressed by its DOM id; ``render_html`` and
``render_text`` read the state and never change it.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Set

from pydantic import BaseModel, Field

from ..core.jinja import PLACEHOLDER, dash, get_templates
from ..schemas.address import CountyInfo, Suggestion

ADDRESS_INPUT = "address-input"
DROPDOWN = "autocomplete-dropdown"
RESULT_CARD = "result-card"
COUNTY_NAME = "county-name"
FULL_ADDRESS = "full-address"
CITY = "city"
STATE = "state"
ZIP = "zip"
ERROR = "error"
LOADING = "loading"

RESULT_FIELDS = (COUNTY_NAME, FULL_ADDRESS, CITY, STATE, ZIP)


class PageState(BaseModel):
    input_value: str = ""
    text: Dict[str, str] = Field(default_factory=dict)
    visible: Set[str] = Field(default_factory=set)
    suggestions: List[Suggestion] = Field(default_factory=list)

    def is_visible(self, element_id: str) -> bool:
        return element_id in self.visible


class ResultPresenter:
    def __init__(self, state: Optional[PageState] = None) -> None:
        self.state = state or PageState()

    def _show(self, element_id: str) -> None:
        self.state.visible.add(element_id)

    def _hide(self, element_id: str) -> None:
        self.state.visible.discard(element_id)

    def set_input(self, value: str) -> None:
        self.state.input_value = value

    def display_result(self, info: CountyInfo, full_address: Optional[str]) -> None:
        self.state.text.update(
            {
                COUNTY_NAME: dash(info.county),
                FULL_ADDRESS: dash(full_address),
                CITY: dash(info.city),
                STATE: dash(info.state_label),
                ZIP: dash(info.zip),
            }
        )
        self._show(RESULT_CARD)

    def hide_result(self) -> None:
        self._hide(RESULT_CARD)

    def show_error(self, message: str) -> None:
        self.state.text[ERROR] = message
        self._show(ERROR)
        self._hide(RESULT_CARD)

    def hide_error(self) -> None:
        self._hide(ERROR)

    def show_loading(self, show: bool) -> None:
        if show:
            self._show(LOADING)
        else:
            self._hide(LOADING)

    def show_suggestions(self, suggestions: List[Suggestion]) -> None:
        self.state.suggestions = list(suggestions)
        self._show(DROPDOWN)

    def hide_suggestions(self) -> None:
        self._hide(DROPDOWN)

    @property
    def error_message(self) -> Optional[str]:
        if not self.state.is_visible(ERROR):
            return None
        return self.state.text.get(ERROR)

    def render_html(self, **context) -> str:
        template = get_templates().get_template("index.html")
        return template.render(state=self.state, placeholder=PLACEHOLDER, **context)

    def render_text(self) -> str:
        lines: List[str] = []
        if self.state.is_visible(LOADING):
            lines.append("Looking up county...")
        if self.state.is_visible(ERROR):
            lines.append(f"Error: {self.state.text.get(ERROR, '')}")
        if self.state.is_visible(DROPDOWN):
            for number, suggestion in enumerate(self.state.suggestions, start=1):
                lines.append(f"{number:>2}. {suggestion.description}")
        if self.state.is_visible(RESULT_CARD):
            text = self.state.text
            lines.extend(
                [
                    f"County:  {text.get(COUNTY_NAME, PLACEHOLDER)}",
                    f"Address: {text.get(FULL_ADDRESS, PLACEHOLDER)}",
                    f"City:    {text.get(CITY, PLACEHOLDER)}",
                    f"State:   {text.get(STATE, PLACEHOLDER)}",
                    f"ZIP:     {text.get(ZIP, PLACEHOLDER)}",
                ]
            )
        return "\n".join(lines)
