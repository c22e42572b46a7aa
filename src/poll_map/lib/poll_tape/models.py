"""Poll tape JSON models.

Field names follow the backend's snake_case poll-data structure. Scanned
tapes are often incomplete, so every section defaults to empty values and
explicit JSON nulls are coerced rather than rejected.
"""

from typing import Any

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator


def _coerce_null_to_str(v: Any) -> Any:
    """Coerce explicit JSON null to empty string and numbers to their text."""
    if v is None:
        return ""
    if isinstance(v, (int, float)) and not isinstance(v, bool):
        return str(v)
    return v


class _TapeModel(BaseModel):
    model_config = ConfigDict(extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        """Treat explicit nulls as missing so the field default applies."""
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


class Precinct(_TapeModel):
    township: str = ""
    number: str = ""

    @field_validator("township", "number", mode="before")
    @classmethod
    def _coerce_text(cls, v: Any) -> Any:
        return _coerce_null_to_str(v)


class Location(_TapeModel):
    county: str = ""
    state: str = ""
    precinct: Precinct = Field(default_factory=Precinct)

    @field_validator("county", "state", mode="before")
    @classmethod
    def _coerce_text(cls, v: Any) -> Any:
        return _coerce_null_to_str(v)


class ElectionHeader(_TapeModel):
    type: str = ""
    date: str = ""
    location: Location = Field(default_factory=Location)

    @field_validator("type", "date", mode="before")
    @classmethod
    def _coerce_text(cls, v: Any) -> Any:
        return _coerce_null_to_str(v)


class VotingSystem(_TapeModel):
    type: str = ""
    serial_number: str = ""
    version: str = ""

    @field_validator("type", "serial_number", "version", mode="before")
    @classmethod
    def _coerce_text(cls, v: Any) -> Any:
        return _coerce_null_to_str(v)


class PollCounters(_TapeModel):
    ballot_counter: str = ""
    lifetime_counter: str = ""

    @field_validator("ballot_counter", "lifetime_counter", mode="before")
    @classmethod
    def _coerce_text(cls, v: Any) -> Any:
        return _coerce_null_to_str(v)


class PollStatus(_TapeModel):
    polls_open: bool = False
    accepting_ballots: bool = False


class PollReport(_TapeModel):
    """Open- or close-of-polls report printed on the tape."""

    timestamp: str = ""
    counters: PollCounters = Field(default_factory=PollCounters)
    status: PollStatus = Field(default_factory=PollStatus)

    @field_validator("timestamp", mode="before")
    @classmethod
    def _coerce_text(cls, v: Any) -> Any:
        return _coerce_null_to_str(v)


class PollReports(_TapeModel):
    open_polls: PollReport = Field(default_factory=PollReport)
    closed_polls: PollReport | None = None


class TallyReport(_TapeModel):
    precincts_included: str = ""

    @field_validator("precincts_included", mode="before")
    @classmethod
    def _coerce_text(cls, v: Any) -> Any:
        return _coerce_null_to_str(v)


class Candidate(_TapeModel):
    """A ticket (one or more names) and its vote count as printed."""

    ticket: list[str] = Field(default_factory=list)
    votes: str = ""

    @field_validator("ticket", mode="before")
    @classmethod
    def _coerce_ticket(cls, v: Any) -> Any:
        if v is None:
            return []
        if isinstance(v, str):
            return [v]
        return v

    @field_validator("votes", mode="before")
    @classmethod
    def _coerce_votes(cls, v: Any) -> Any:
        return _coerce_null_to_str(v)


class ContestMetadata(_TapeModel):
    write_ins: str = ""
    undervotes: str = ""
    overvotes: str = ""
    invalid_votes: str = ""

    @field_validator("write_ins", "undervotes", "overvotes", "invalid_votes", mode="before")
    @classmethod
    def _coerce_text(cls, v: Any) -> Any:
        return _coerce_null_to_str(v)


class Contest(_TapeModel):
    """One race or ballot question."""

    title: str = ""
    candidates: list[Candidate] = Field(default_factory=list)
    metadata: ContestMetadata = Field(default_factory=ContestMetadata)

    @field_validator("title", mode="before")
    @classmethod
    def _coerce_title(cls, v: Any) -> Any:
        return _coerce_null_to_str(v)

    @field_validator("candidates", mode="before")
    @classmethod
    def _coerce_candidates(cls, v: Any) -> Any:
        if v is None:
            return []
        return [candidate for candidate in v if candidate is not None] if isinstance(v, list) else v


class ContestResults(_TapeModel):
    contests: list[Contest] = Field(default_factory=list)

    @field_validator("contests", mode="before")
    @classmethod
    def _coerce_contests(cls, v: Any) -> Any:
        if v is None:
            return []
        return [contest for contest in v if contest is not None] if isinstance(v, list) else v


class PrecinctTotal(_TapeModel):
    name: str = ""
    total: str = ""

    @field_validator("name", "total", mode="before")
    @classmethod
    def _coerce_text(cls, v: Any) -> Any:
        return _coerce_null_to_str(v)


class PrecinctBallotCount(_TapeModel):
    precinct: PrecinctTotal = Field(default_factory=PrecinctTotal)
    grand_total: str = ""

    @field_validator("grand_total", mode="before")
    @classmethod
    def _coerce_text(cls, v: Any) -> Any:
        return _coerce_null_to_str(v)


class Totals(_TapeModel):
    precinct_ballot_count: PrecinctBallotCount = Field(default_factory=PrecinctBallotCount)


class PollRecord(_TapeModel):
    """One township's complete poll tape."""

    election_header: ElectionHeader = Field(default_factory=ElectionHeader)
    voting_system: VotingSystem = Field(default_factory=VotingSystem)
    reports: PollReports = Field(default_factory=PollReports)
    tally_report: TallyReport = Field(default_factory=TallyReport)
    results: ContestResults = Field(default_factory=ContestResults)
    totals: Totals = Field(default_factory=Totals)


PollData = dict[str, dict[str, PollRecord]]


def parse_poll_data(raw_json: Any) -> PollData:
    """Parse the backend's ``{county: {township: record}}`` mapping.

    Records that fail validation are skipped with a warning so one bad
    tape does not hide the rest of the county.

    Args:
        raw_json: Decoded JSON from the poll data endpoint.

    Returns:
        Parsed poll data keyed by county, then township.

    Raises:
        ValueError: If the top level is not a county mapping.
    """
    if not isinstance(raw_json, dict):
        msg = f"Expected a mapping of counties, got {type(raw_json).__name__}"
        raise ValueError(msg)

    poll_data: PollData = {}
    for county, townships in raw_json.items():
        if not isinstance(townships, dict):
            logger.warning(f"Skipping county {county}: expected a mapping of townships")
            continue
        parsed: dict[str, PollRecord] = {}
        for township, record in townships.items():
            try:
                parsed[township] = PollRecord.model_validate(record)
            except ValidationError as exc:
                logger.warning(f"Skipping poll record {county}/{township}: {exc.error_count()} validation errors")
        poll_data[county] = parsed
    return poll_data
