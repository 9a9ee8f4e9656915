"""Debounced address suggestions and the selection pipeline.

WHAT: ``SuggestionController`` turns keystrokes into at most one autocomplete
request per pause in typing, and a chosen suggestion into a county record.
WHEN: One instance per page session (web page request, CLI run, test).
WHY: Throttling keeps the autocomplete bill down, and running the pipeline as
explicit stages lets each failure map to its own user-facing message.
HOW: Timers are asyncio tasks. In-flight requests are never cancelled; instead
every search and every selection bumps a generation counter and only results
from the newest one reach the presenter.
"""

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import List, Optional, Set

from ..core.config import AppSettings
from ..core.errors import ConfigError, CountyFinderError, UpstreamError
from ..schemas.address import LookupResult, Suggestion
from ..services.classifier import classify, require_county
from ..services.maps import AUTOCOMPLETE_FAILED
from .presenter import ResultPresenter
from .transport import LookupTransport

logger = logging.getLogger(__name__)

PLACE_UNAVAILABLE = "Unable to get location details"
PLACE_FAILED = "Failed to get place details"
COUNTY_UNAVAILABLE = "Unable to retrieve county information"
COUNTY_FAILED = "Failed to get county information"


class LookupStage(str, Enum):
    IDLE = "idle"
    PENDING = "pending"
    SUGGESTING = "suggesting"
    RESOLVING = "resolving"
    DONE = "done"
    ERROR = "error"


def _stage_error(exc: CountyFinderError, unavailable: str, failed: str) -> UpstreamError:
    if isinstance(exc, UpstreamError) and exc.provider_status:
        return UpstreamError(exc.error, unavailable, provider_status=exc.provider_status)
    return UpstreamError(exc.error, failed)


class SuggestionController:
    def __init__(
        self,
        transport: LookupTransport,
        presenter: ResultPresenter,
        *,
        debounce_seconds: float = 0.3,
        min_chars: int = 3,
        blur_grace_seconds: float = 0.2,
    ) -> None:
        self.transport = transport
        self.presenter = presenter
        self.debounce_seconds = debounce_seconds
        self.min_chars = min_chars
        self.blur_grace_seconds = blur_grace_seconds

        self.stage = LookupStage.IDLE
        self.suggestions: List[Suggestion] = []
        self.selected: Optional[Suggestion] = None
        self.result: Optional[LookupResult] = None

        self._timer: Optional[asyncio.Task] = None
        self._tasks: Set[asyncio.Task] = set()
        self._search_generation = 0
        self._resolve_generation = 0

    @classmethod
    def from_settings(
        cls, settings: AppSettings, transport: LookupTransport, presenter: ResultPresenter
    ) -> "SuggestionController":
        return cls(
            transport,
            presenter,
            debounce_seconds=settings.debounce_seconds,
            min_chars=settings.AUTOCOMPLETE_MIN_CHARS,
            blur_grace_seconds=settings.blur_grace_seconds,
        )

    # ---- task bookkeeping

    def _spawn(self, coro) -> asyncio.Task:
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _enter(self, stage: LookupStage) -> None:
        if stage is not self.stage:
            logger.debug("Lookup stage %s -> %s", self.stage.value, stage.value)
        self.stage = stage

    def _hide_suggestions(self) -> None:
        self.suggestions = []
        self.presenter.hide_suggestions()

    # ---- typing

    def on_input(self, text: str) -> None:
        query = text.strip()
        self.presenter.set_input(text)
        self._search_generation += 1
        self._cancel_timer()
        if len(query) < self.min_chars:
            self._hide_suggestions()
            self._enter(LookupStage.IDLE)
            return
        self._timer = self._spawn(self._debounce(query, self._search_generation))
        self._enter(LookupStage.PENDING)

    async def _debounce(self, query: str, generation: int) -> None:
        await asyncio.sleep(self.debounce_seconds)
        # Past this point the request is in flight and no longer cancellable.
        self._timer = None
        await self._fetch_suggestions(query, generation)

    async def _fetch_suggestions(self, query: str, generation: int) -> None:
        try:
            result = await self.transport.autocomplete(query)
        except CountyFinderError as exc:
            logger.warning("Autocomplete for %r failed: %s", query, exc.error)
            if generation != self._search_generation:
                return
            self._hide_suggestions()
            self._enter(LookupStage.IDLE)
            self.presenter.show_error(AUTOCOMPLETE_FAILED)
            return

        if generation != self._search_generation:
            logger.debug("Dropping stale suggestions for %r", query)
            return
        if result.status == "OK" and result.predictions:
            self.suggestions = list(result.predictions)
            self.presenter.show_suggestions(self.suggestions)
            self._enter(LookupStage.SUGGESTING)
        else:
            self._hide_suggestions()
            self._enter(LookupStage.IDLE)

    def on_blur(self) -> None:
        self._spawn(self._hide_after_grace())

    async def _hide_after_grace(self) -> None:
        # Give a click on a suggestion the chance to land first.
        await asyncio.sleep(self.blur_grace_seconds)
        self._hide_suggestions()
        if self.stage is LookupStage.SUGGESTING:
            self._enter(LookupStage.IDLE)

    # ---- selection

    def select_index(self, index: int) -> Suggestion:
        suggestion = self.suggestions[index]
        self.select(suggestion)
        return suggestion

    def select(self, suggestion: Suggestion) -> None:
        self.selected = suggestion
        self.presenter.set_input(suggestion.description)
        self._search_generation += 1
        self._cancel_timer()
        self._hide_suggestions()
        self._resolve_generation += 1
        self._enter(LookupStage.RESOLVING)
        self._spawn(self._run_pipeline(suggestion.place_id, self._resolve_generation))

    async def resolve(self, place_id: str) -> LookupResult:
        """Place details, then reverse geocode, then classify."""

        try:
            location = await self.transport.place_location(place_id)
        except (UpstreamError, ConfigError) as exc:
            logger.warning("Place details for %s failed: %s", place_id, exc.error)
            raise _stage_error(exc, PLACE_UNAVAILABLE, PLACE_FAILED) from exc

        try:
            geocoded = await self.transport.reverse_geocode(location)
        except (UpstreamError, ConfigError) as exc:
            logger.warning("Reverse geocode for %s failed: %s", place_id, exc.error)
            raise _stage_error(exc, COUNTY_UNAVAILABLE, COUNTY_FAILED) from exc

        info = require_county(classify(geocoded.address_components))
        return LookupResult(
            info=info, formatted_address=geocoded.formatted_address, location=location
        )

    async def _run_pipeline(self, place_id: str, generation: int) -> None:
        self.presenter.show_loading(True)
        self.presenter.hide_error()
        self.presenter.hide_result()
        try:
            result = await self.resolve(place_id)
        except CountyFinderError as exc:
            if generation != self._resolve_generation:
                return
            self.result = None
            self.presenter.show_error(exc.user_message)
            self._enter(LookupStage.ERROR)
        else:
            if generation != self._resolve_generation:
                logger.debug("Dropping stale lookup for %s", place_id)
                return
            self.result = result
            self.presenter.display_result(result.info, result.formatted_address)
            self._enter(LookupStage.DONE)
        finally:
            if generation == self._resolve_generation:
                self.presenter.show_loading(False)

    # ---- lifecycle

    async def wait_idle(self) -> None:
        """Wait until no timer, request or pipeline is outstanding."""

        while True:
            pending = [task for task in self._tasks if not task.done()]
            if not pending:
                return
            await asyncio.gather(*pending, return_exceptions=True)

    async def aclose(self) -> None:
        self._cancel_timer()
        for task in list(self._tasks):
            task.cancel()
        await self.wait_idle()
        await self.transport.aclose()
