"""FastAPI dependency injection for the loaded map dataset and view state."""

from typing import Annotated

from fastapi import Query, Request

from poll_map.lib.selection import SelectionEvent, ViewState, selection_from_query
from poll_map.services.map_service import MapDataset


def get_dataset(request: Request) -> MapDataset:
    """Return the dataset loaded at startup (empty until the first load finishes)."""
    return getattr(request.app.state, "dataset", None) or MapDataset()


def get_view_state(
    county: Annotated[str | None, Query(description="Selected county")] = None,
    township: Annotated[str | None, Query(description="Selected township, or 'none'")] = None,
    details: Annotated[bool, Query(description="Show the full poll tape")] = False,
    hover: Annotated[str | None, Query(description="Highlighted county")] = None,
    selected: Annotated[SelectionEvent | None, Query(description="Selection just made, announced once")] = None,
) -> ViewState:
    """Rebuild the view state from query parameters."""
    return ViewState(
        selection=selection_from_query(county, township),
        hovered_county=hover or None,
        show_details=details,
        event=selected,
    )
