"""Map JSON API endpoints.

GET /map — projected county shapes
GET /counties — county list with data availability
GET /counties/{county} — county panel for a selection
GET /counties/{county}/townships/{township}/ticket — poll ticket view
POST /refresh — reload the dataset from the backend
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from poll_map.core.dependencies import get_dataset, get_view_state
from poll_map.lib.poll_tape import PollTicketView, summarize
from poll_map.lib.selection import ViewState, selection_from_query
from poll_map.schemas.map import CountyListResponse, CountySummary, RefreshResponse
from poll_map.services.map_service import (
    CountyPanel,
    MapDataset,
    MapView,
    build_county_panel,
    build_map_view,
    find_poll_data,
)

maps_router = APIRouter(tags=["map"])


@maps_router.get("/map", response_model=MapView)
async def get_map(
    dataset: Annotated[MapDataset, Depends(get_dataset)],
    view_state: Annotated[ViewState, Depends(get_view_state)],
) -> MapView:
    """Projected county shapes with fill colours and selection flags."""
    return build_map_view(dataset, view_state)


@maps_router.get("/counties", response_model=CountyListResponse)
async def list_counties(dataset: Annotated[MapDataset, Depends(get_dataset)]) -> CountyListResponse:
    """List every county on the map and whether it has poll data."""
    items = []
    for feature in dataset.features:
        townships = find_poll_data(dataset.poll_data, feature.name) or {}
        items.append(
            CountySummary(
                name=feature.name,
                has_data=bool(townships),
                township_count=len(townships),
                winning_party=dataset.county_winners.get(feature.name),
            )
        )
    return CountyListResponse(items=items, total=len(items))


@maps_router.get("/counties/{county}", response_model=CountyPanel)
async def get_county_panel(
    county: str,
    dataset: Annotated[MapDataset, Depends(get_dataset)],
    township: str | None = Query(default=None, description="Selected township, or 'none'"),
    details: bool = Query(default=False, description="Show the full poll tape"),
) -> CountyPanel:
    """County panel for a selection. Counties without data get the fallback panel."""
    view_state = ViewState(selection=selection_from_query(county, township), show_details=details)
    return build_county_panel(dataset, view_state)


@maps_router.get("/counties/{county}/townships/{township}/ticket", response_model=PollTicketView)
async def get_poll_ticket(
    county: str,
    township: str,
    dataset: Annotated[MapDataset, Depends(get_dataset)],
    details: bool = Query(default=False, description="Show the full poll tape"),
) -> PollTicketView:
    """Poll ticket summary for one township."""
    record = (find_poll_data(dataset.poll_data, county) or {}).get(township)
    if record is None:
        raise HTTPException(status_code=404, detail=f"No poll data for {township}, {county} County")
    return summarize(record, county=county, township=township, show_details=details)


@maps_router.post("/refresh", response_model=RefreshResponse)
async def refresh_dataset(request: Request) -> RefreshResponse:
    """Reload boundaries and poll data; county winners follow in the background."""
    from poll_map.main import reload_dataset, winner_lookup_pending

    dataset = await reload_dataset(request.app)
    return RefreshResponse(
        counties=len(dataset.features),
        counties_with_data=len(dataset.poll_data),
        county_winners=len(dataset.county_winners),
        winner_lookup_pending=winner_lookup_pending(request.app),
        errors=[notice.message for notice in dataset.notices if notice.level == "error"],
    )
