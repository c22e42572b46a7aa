"""County/township selection as an explicit finite-state value.

The selection is always exactly one of ``NoneSelected``,
``CountySelected`` or ``CountyAndTownshipSelected``, so a township can
never be set without its county. Hover and the details toggle are
transient view state carried alongside it in ``ViewState``, as is the
selection event that produced the current page.
"""

from dataclasses import dataclass, replace
from enum import StrEnum

from loguru import logger

NO_TOWNSHIP = "none"


class SelectionPhase(StrEnum):
    NONE_SELECTED = "none_selected"
    COUNTY_SELECTED = "county_selected"
    COUNTY_AND_TOWNSHIP_SELECTED = "county_and_township_selected"


class SelectionEvent(StrEnum):
    """The selection the user just made, announced once on the page."""

    COUNTY = "county"
    TOWNSHIP = "township"


@dataclass(frozen=True)
class NoneSelected:
    phase = SelectionPhase.NONE_SELECTED

    @property
    def county(self) -> None:
        return None

    @property
    def township(self) -> None:
        return None


@dataclass(frozen=True)
class CountySelected:
    county: str
    phase = SelectionPhase.COUNTY_SELECTED

    @property
    def township(self) -> None:
        return None


@dataclass(frozen=True)
class CountyAndTownshipSelected:
    county: str
    township: str
    phase = SelectionPhase.COUNTY_AND_TOWNSHIP_SELECTED


Selection = NoneSelected | CountySelected | CountyAndTownshipSelected


def select_county(state: Selection, county: str) -> CountySelected:
    """Select a county. Any previously selected township is cleared."""
    return CountySelected(county=county)


def select_township(state: Selection, township: str | None) -> Selection:
    """Select a township within the current county.

    The ``"none"`` sentinel (or a blank value) returns to ``CountySelected``.
    Without a selected county there is nothing to attach a township to, so
    the state is returned unchanged.
    """
    if isinstance(state, NoneSelected):
        logger.debug("Ignoring township {!r} with no county selected", township)
        return state
    if not township or township == NO_TOWNSHIP:
        return CountySelected(county=state.county)
    return CountyAndTownshipSelected(county=state.county, township=township)


def selection_from_query(county: str | None, township: str | None) -> Selection:
    """Rebuild a selection from request parameters by replaying transitions."""
    state: Selection = NoneSelected()
    if county:
        state = select_county(state, county)
    if township:
        state = select_township(state, township)
    return state


@dataclass(frozen=True)
class ViewState:
    """Selection plus transient map and ticket UI state."""

    selection: Selection = NoneSelected()
    hovered_county: str | None = None
    show_details: bool = False
    event: SelectionEvent | None = None

    def select_county(self, county: str) -> "ViewState":
        return replace(
            self,
            selection=select_county(self.selection, county),
            show_details=False,
            event=SelectionEvent.COUNTY,
        )

    def select_township(self, township: str | None) -> "ViewState":
        return replace(self, selection=select_township(self.selection, township), event=SelectionEvent.TOWNSHIP)

    def hover(self, county: str | None) -> "ViewState":
        return replace(self, hovered_county=county or None, event=None)

    def clear_hover(self) -> "ViewState":
        return replace(self, hovered_county=None, event=None)

    def toggle_details(self) -> "ViewState":
        return replace(self, show_details=not self.show_details, event=None)
