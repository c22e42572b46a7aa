"""Poll tape library: models, winner resolution, and ticket summaries.

Public API:
    - PollRecord / Contest / Candidate: Validated poll tape models
    - PollData: ``{county: {township: PollRecord}}``
    - parse_poll_data: Lenient parse of the backend poll-data mapping
    - resolve_winners: Highest-vote candidates of a contest, ties included
    - is_straight_party: Straight-party contest detection
    - summarize: Build the poll ticket view model
"""

from poll_map.lib.poll_tape.formatting import DATE_UNAVAILABLE, format_long_date, format_timestamp
from poll_map.lib.poll_tape.models import Candidate, Contest, PollData, PollRecord, parse_poll_data
from poll_map.lib.poll_tape.summary import PollTicketView, summarize
from poll_map.lib.poll_tape.winners import (
    is_straight_party,
    non_straight_party_contests,
    parse_votes,
    resolve_winners,
)

__all__ = [
    "DATE_UNAVAILABLE",
    "Candidate",
    "Contest",
    "PollData",
    "PollRecord",
    "PollTicketView",
    "format_long_date",
    "format_timestamp",
    "is_straight_party",
    "non_straight_party_contests",
    "parse_poll_data",
    "parse_votes",
    "resolve_winners",
    "summarize",
]
