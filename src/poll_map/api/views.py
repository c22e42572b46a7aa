"""Server-rendered map page."""

from pathlib import Path
from typing import Annotated, Any
from urllib.parse import urlencode

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from poll_map.core.dependencies import get_dataset, get_view_state
from poll_map.core.parties import legend_entries
from poll_map.lib.selection import ViewState
from poll_map.services.map_service import MapDataset, build_county_panel, build_map_view, selection_notices

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

views_router = APIRouter(include_in_schema=False)


def page_url(**params: Any) -> str:
    """Build a link to the map page, dropping empty parameters."""
    query = {key: value for key, value in params.items() if value not in (None, "", False)}
    if query.get("details") is True:
        query["details"] = "true"
    return f"/?{urlencode(query)}" if query else "/"


@views_router.get("/", response_class=HTMLResponse)
async def map_page(
    request: Request,
    dataset: Annotated[MapDataset, Depends(get_dataset)],
    view_state: Annotated[ViewState, Depends(get_view_state)],
) -> HTMLResponse:
    """Render the county map with the panel for the current selection."""
    return templates.TemplateResponse(
        request,
        "map.html",
        {
            "map_view": build_map_view(dataset, view_state),
            "panel": build_county_panel(dataset, view_state),
            "notices": [*dataset.notices, *selection_notices(view_state)],
            "legend": legend_entries(),
            "view_state": view_state,
            "page_url": page_url,
        },
    )
