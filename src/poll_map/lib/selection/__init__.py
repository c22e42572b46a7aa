"""Selection library: county/township selection state machine.

Public API:
    - Selection: NoneSelected | CountySelected | CountyAndTownshipSelected
    - select_county / select_township: State transitions
    - selection_from_query: Replay transitions from request parameters
    - ViewState: Selection plus hover and details toggle
    - SelectionEvent: Which selection the current page announces
"""

from poll_map.lib.selection.state import (
    NO_TOWNSHIP,
    CountyAndTownshipSelected,
    CountySelected,
    NoneSelected,
    Selection,
    SelectionEvent,
    SelectionPhase,
    ViewState,
    select_county,
    select_township,
    selection_from_query,
)

__all__ = [
    "NO_TOWNSHIP",
    "CountyAndTownshipSelected",
    "CountySelected",
    "NoneSelected",
    "Selection",
    "SelectionEvent",
    "SelectionPhase",
    "ViewState",
    "select_county",
    "select_township",
    "selection_from_query",
]
