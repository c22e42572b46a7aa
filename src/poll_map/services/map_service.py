"""Map service: loads boundaries and poll data, builds map and county panel views.

Loading never raises. A failed fetch is logged and leaves its part of the
dataset empty so the rest of the page still renders.
"""

import asyncio
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

from loguru import logger
from pydantic import BaseModel, Field

from poll_map.core.parties import party_fill
from poll_map.lib.geometry import MAP_TRANSFORM, VIEWBOX, CountyFeature, project, project_point, read_geojson
from poll_map.lib.poll_feed import FetchError, PollFeedClient
from poll_map.lib.poll_tape import PollData, PollRecord, PollTicketView, summarize
from poll_map.lib.selection import (
    NO_TOWNSHIP,
    CountyAndTownshipSelected,
    NoneSelected,
    SelectionEvent,
    SelectionPhase,
    ViewState,
)

POLL_DATA_ERROR = "Failed to load poll data"
SELECT_COUNTY_PROMPT = "Click on a county to view poll data"
TOWNSHIP_PLACEHOLDER = "Please Select Township"


class Notice(BaseModel):
    """Short-lived message shown above the map."""

    level: Literal["success", "error"]
    message: str


@dataclass(frozen=True)
class MapDataset:
    """Everything loaded from the backend at startup."""

    features: list[CountyFeature] = field(default_factory=list)
    poll_data: PollData = field(default_factory=dict)
    county_winners: dict[str, str] = field(default_factory=dict)
    notices: list[Notice] = field(default_factory=list)


class CountyShape(BaseModel):
    name: str
    path: str
    fill: str
    selected: bool = False
    hovered: bool = False
    has_data: bool = False
    label_x: float | None = None
    label_y: float | None = None


class MapView(BaseModel):
    viewbox: str = VIEWBOX
    transform: str = MAP_TRANSFORM
    counties: list[CountyShape] = Field(default_factory=list)


class TownshipOption(BaseModel):
    value: str
    label: str
    selected: bool = False


class CountyPanel(BaseModel):
    """Right-hand panel content for the current selection."""

    phase: SelectionPhase
    county: str | None = None
    township: str | None = None
    title: str | None = None
    message: str | None = None
    hint: str | None = None
    has_data: bool = False
    townships: list[TownshipOption] = Field(default_factory=list)
    ticket: PollTicketView | None = None


async def _load_boundaries(client: PollFeedClient, boundaries_file: str | None) -> list[CountyFeature]:
    try:
        if boundaries_file:
            return await asyncio.to_thread(read_geojson, Path(boundaries_file))
        return await client.fetch_boundaries()
    except (FetchError, ValueError, OSError) as exc:
        logger.error(f"Error loading county boundaries: {exc}")
        return []


async def _load_poll_data(client: PollFeedClient) -> PollData | None:
    try:
        return await client.fetch_poll_data()
    except FetchError as exc:
        logger.error(f"Error loading poll data: {exc}")
        return None


async def load_county_winners(
    client: PollFeedClient,
    counties: list[str],
    *,
    concurrency: int = 8,
) -> dict[str, str]:
    """Look up the winning party of every county concurrently.

    Counties without a result, or whose lookup fails, are left out.
    """
    semaphore = asyncio.Semaphore(concurrency)

    async def _lookup(county: str) -> tuple[str, str | None]:
        async with semaphore:
            try:
                return county, await client.fetch_presidential_winner(county)
            except FetchError as exc:
                logger.error(f"Error fetching winner for {county}: {exc}")
                return county, None

    results = await asyncio.gather(*(_lookup(county) for county in counties))
    return {county: party for county, party in results if party}


async def load_map_dataset(
    client: PollFeedClient,
    *,
    boundaries_file: str | None = None,
    lookup_winners: bool = True,
    winner_concurrency: int = 8,
) -> MapDataset:
    """Load boundaries and poll data concurrently, then county winners.

    Args:
        client: Backend client.
        boundaries_file: Local GeoJSON file to use instead of the backend asset.
        lookup_winners: Tint counties by their winning party.
        winner_concurrency: Maximum concurrent winner lookups.

    Returns:
        The loaded dataset. Failed parts are empty.
    """
    features, poll_data = await asyncio.gather(
        _load_boundaries(client, boundaries_file),
        _load_poll_data(client),
    )

    notices: list[Notice] = []
    if poll_data is None:
        notices.append(Notice(level="error", message=POLL_DATA_ERROR))
        poll_data = {}

    county_winners: dict[str, str] = {}
    if lookup_winners and features:
        county_winners = await load_county_winners(
            client,
            [feature.name for feature in features],
            concurrency=winner_concurrency,
        )

    logger.info(
        f"Map dataset loaded: {len(features)} counties, {len(poll_data)} counties with poll data, "
        f"{len(county_winners)} county winners"
    )
    return MapDataset(features=features, poll_data=poll_data, county_winners=county_winners, notices=notices)


def find_poll_data(poll_data: PollData, county: str | None) -> dict[str, PollRecord] | None:
    """Return the township records of ``county``, or None when it has none."""
    if not county:
        return None
    return poll_data.get(county) or None


def build_map_view(dataset: MapDataset, view_state: ViewState) -> MapView:
    """Project every county and colour it by its winning party."""
    selected = view_state.selection.county
    shapes = []
    for feature in dataset.features:
        label_x = label_y = None
        if feature.label_point is not None:
            label_x, label_y = project_point(*feature.label_point)
        shapes.append(
            CountyShape(
                name=feature.name,
                path=project(feature.coordinates, feature.geometry_type),
                fill=party_fill(dataset.county_winners.get(feature.name)),
                selected=feature.name == selected,
                hovered=feature.name == view_state.hovered_county,
                has_data=find_poll_data(dataset.poll_data, feature.name) is not None,
                label_x=label_x,
                label_y=label_y,
            )
        )
    return MapView(counties=shapes)


def _township_options(townships: dict[str, PollRecord], selected: str | None) -> list[TownshipOption]:
    options = [TownshipOption(value=NO_TOWNSHIP, label=TOWNSHIP_PLACEHOLDER, selected=selected is None)]
    options.extend(TownshipOption(value=name, label=name, selected=name == selected) for name in townships)
    return options


def build_county_panel(dataset: MapDataset, view_state: ViewState) -> CountyPanel:
    """Build the panel for the current selection.

    A county without poll data gets a fallback message; a township is only
    summarized when both it and its county are selected.
    """
    selection = view_state.selection
    if isinstance(selection, NoneSelected):
        return CountyPanel(phase=selection.phase, message=SELECT_COUNTY_PROMPT)

    county = selection.county
    townships = find_poll_data(dataset.poll_data, county)
    if townships is None:
        return CountyPanel(
            phase=selection.phase,
            county=county,
            township=selection.township,
            title=f"{county} County",
            message=f"No poll data has been added for {county} County yet.",
            hint=f"Data files should be added to: Poll_tickets/{county}/",
        )

    panel = CountyPanel(
        phase=selection.phase,
        county=county,
        township=selection.township,
        title=f"{county} County",
        has_data=True,
        townships=_township_options(townships, selection.township),
    )
    if isinstance(selection, CountyAndTownshipSelected):
        record = townships.get(selection.township)
        if record is None:
            panel.message = f"No poll data has been added for {selection.township} yet."
        else:
            panel.ticket = summarize(
                record,
                county=county,
                township=selection.township,
                show_details=view_state.show_details,
            )
    return panel


def selection_notices(view_state: ViewState) -> list[Notice]:
    """Confirmation for the county or township the user just selected.

    Only the request carrying the selection event gets a notice, so toggling
    details or clearing the township does not repeat it.
    """
    selection = view_state.selection
    if view_state.event is SelectionEvent.COUNTY and selection.county:
        return [Notice(level="success", message=f"Selected county: {selection.county}")]
    if view_state.event is SelectionEvent.TOWNSHIP and isinstance(selection, CountyAndTownshipSelected):
        return [Notice(level="success", message=f"Selected township: {selection.township}")]
    return []
