"""Poll ticket view models.

``summarize`` turns one township's PollRecord into what the ticket card
shows: a summary of contest winners, plus the full tape breakdown when
details are expanded.
"""

from pydantic import BaseModel, Field, computed_field

from poll_map.lib.poll_tape.formatting import format_long_date, format_timestamp
from poll_map.lib.poll_tape.models import Candidate, Contest, PollRecord, PollReport
from poll_map.lib.poll_tape.winners import is_straight_party, non_straight_party_contests, resolve_winners

SHOW_DETAILS_LABEL = "Show Original Poll Tape"
HIDE_DETAILS_LABEL = "Show Less"


def ticket_label(candidate: Candidate) -> str:
    """Join a ticket's names the way the tape lists them."""
    return ", ".join(candidate.ticket)


class WinnerLine(BaseModel):
    names: str
    votes: str

    @computed_field  # type: ignore[prop-decorator]
    @property
    def text(self) -> str:
        return f"Winner: {self.names} - {self.votes} votes"


class ContestSummary(BaseModel):
    title: str
    winners: list[WinnerLine] = Field(default_factory=list)


class CandidateLine(BaseModel):
    names: str
    votes: str
    is_winner: bool = False


class ContestDetail(BaseModel):
    title: str
    is_straight_party: bool
    candidates: list[CandidateLine] = Field(default_factory=list)
    write_ins: str = ""
    undervotes: str = ""
    overvotes: str = ""
    invalid_votes: str = ""


class PollReportView(BaseModel):
    timestamp: str
    ballot_counter: str
    lifetime_counter: str = ""
    polls_open: bool = False
    accepting_ballots: bool = False


class PollTicketDetails(BaseModel):
    voting_system_type: str
    serial_number: str
    version: str
    opened: PollReportView
    closed: PollReportView | None = None
    precincts_included: str = ""
    precinct_name: str = ""
    precinct_total: str = ""
    grand_total: str = ""
    contests: list[ContestDetail] = Field(default_factory=list)


class PollTicketView(BaseModel):
    """Everything the poll ticket card renders for one township."""

    county: str
    township: str
    election_type: str
    election_date: str
    location: str
    precinct: str
    contests: list[ContestSummary] = Field(default_factory=list)
    show_details: bool = False
    toggle_label: str = SHOW_DETAILS_LABEL
    details: PollTicketDetails | None = None


def _report_view(report: PollReport) -> PollReportView:
    return PollReportView(
        timestamp=format_timestamp(report.timestamp),
        ballot_counter=report.counters.ballot_counter,
        lifetime_counter=report.counters.lifetime_counter,
        polls_open=report.status.polls_open,
        accepting_ballots=report.status.accepting_ballots,
    )


def _contest_detail(contest: Contest) -> ContestDetail:
    straight_party = is_straight_party(contest.title)
    # Identity, not equality: two candidates may print identical tickets.
    winner_ids = set() if straight_party else {id(c) for c in resolve_winners(contest)}
    return ContestDetail(
        title=contest.title,
        is_straight_party=straight_party,
        candidates=[
            CandidateLine(names=ticket_label(c), votes=c.votes, is_winner=id(c) in winner_ids)
            for c in contest.candidates
        ],
        write_ins=contest.metadata.write_ins,
        undervotes=contest.metadata.undervotes,
        overvotes=contest.metadata.overvotes,
        invalid_votes=contest.metadata.invalid_votes,
    )


def _details(record: PollRecord) -> PollTicketDetails:
    closed = record.reports.closed_polls
    ballot_count = record.totals.precinct_ballot_count
    return PollTicketDetails(
        voting_system_type=record.voting_system.type,
        serial_number=record.voting_system.serial_number,
        version=record.voting_system.version,
        opened=_report_view(record.reports.open_polls),
        closed=_report_view(closed) if closed is not None else None,
        precincts_included=record.tally_report.precincts_included,
        precinct_name=ballot_count.precinct.name,
        precinct_total=ballot_count.precinct.total,
        grand_total=ballot_count.grand_total,
        contests=[_contest_detail(contest) for contest in record.results.contests],
    )


def summarize(record: PollRecord, *, county: str, township: str, show_details: bool = False) -> PollTicketView:
    """Build the poll ticket view for one township.

    Straight-party contests are left out of the winner summary. In the
    detailed breakdown they are listed with no winner marked.

    Args:
        record: The township's poll tape.
        county: Selected county name.
        township: Selected township name.
        show_details: Include the full tape breakdown.

    Returns:
        The ticket view model.
    """
    header = record.election_header
    location = header.location
    contests = [
        ContestSummary(
            title=contest.title,
            winners=[WinnerLine(names=ticket_label(w), votes=w.votes) for w in resolve_winners(contest)],
        )
        for contest in non_straight_party_contests(record.results.contests)
    ]
    return PollTicketView(
        county=county,
        township=township,
        election_type=header.type,
        election_date=format_long_date(header.date),
        location=f"{location.county} County, {location.state}",
        precinct=f"Precinct: {location.precinct.township} - {location.precinct.number}",
        contests=contests,
        show_details=show_details,
        toggle_label=HIDE_DETAILS_LABEL if show_details else SHOW_DETAILS_LABEL,
        details=_details(record) if show_details else None,
    )
