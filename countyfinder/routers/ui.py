from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from fastapi.responses import HTMLResponse

from ..client.controller import SuggestionController
from ..client.presenter import ResultPresenter
from ..client.transport import DirectTransport
from ..core.config import get_settings
from ..deps.maps import get_maps_client
from ..schemas.address import Suggestion
from ..services.maps import GoogleMapsClient

router = APIRouter(tags=["ui"])


def _controller(maps: GoogleMapsClient) -> SuggestionController:
    # The page is rendered after the search completes, so there is nothing to debounce.
    settings = get_settings()
    controller = SuggestionController.from_settings(
        settings, DirectTransport(maps), ResultPresenter()
    )
    controller.debounce_seconds = 0
    return controller


@router.get("/", response_class=HTMLResponse)
async def index_page(
    q: str | None = Query(default=None),
    maps: GoogleMapsClient = Depends(get_maps_client),
):
    controller = _controller(maps)
    if q:
        controller.on_input(q)
        await controller.wait_idle()
    return HTMLResponse(controller.presenter.render_html(title=get_settings().APP_NAME))


@router.get("/lookup", response_class=HTMLResponse)
async def lookup_page(
    place_id: str | None = Query(default=None),
    description: str | None = Query(default=None),
    maps: GoogleMapsClient = Depends(get_maps_client),
):
    controller = _controller(maps)
    if not place_id:
        controller.presenter.show_error("Pick an address from the suggestions first")
        return HTMLResponse(
            controller.presenter.render_html(title=get_settings().APP_NAME), status_code=400
        )
    controller.select(Suggestion(description=description or "", place_id=place_id))
    await controller.wait_idle()
    return HTMLResponse(controller.presenter.render_html(title=get_settings().APP_NAME))
