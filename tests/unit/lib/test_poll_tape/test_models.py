"""Unit tests for poll tape models and poll-data parsing."""

import pytest

from poll_map.lib.poll_tape.models import PollRecord, parse_poll_data


class TestPollRecord:
    """Tests for PollRecord validation."""

    def test_full_record(self, poll_record_json: dict) -> None:
        record = PollRecord.model_validate(poll_record_json)
        assert record.election_header.location.precinct.township == "Addison Township"
        assert record.voting_system.serial_number == "DS2001234"
        assert record.reports.closed_polls is not None
        assert record.reports.closed_polls.counters.ballot_counter == "1287"
        assert len(record.results.contests) == 3
        assert record.results.contests[1].candidates[0].ticket == ["Kamala D. Harris", "Tim Walz"]
        assert record.totals.precinct_ballot_count.grand_total == "1287"

    def test_missing_sections_default_to_empty(self) -> None:
        record = PollRecord.model_validate({})
        assert record.election_header.type == ""
        assert record.reports.closed_polls is None
        assert record.results.contests == []

    def test_nulls_and_numbers_are_coerced(self, poll_record_json: dict) -> None:
        poll_record_json["voting_system"]["version"] = None
        poll_record_json["results"]["contests"][1]["candidates"][0]["votes"] = 540
        poll_record_json["results"]["contests"][0]["candidates"] = None
        record = PollRecord.model_validate(poll_record_json)
        assert record.voting_system.version == ""
        assert record.results.contests[1].candidates[0].votes == "540"
        assert record.results.contests[0].candidates == []

    def test_null_sections_fall_back_to_defaults(self, poll_record_json: dict) -> None:
        poll_record_json["election_header"]["location"] = None
        poll_record_json["reports"]["open_polls"]["counters"] = None
        poll_record_json["reports"]["open_polls"]["status"]["polls_open"] = None
        poll_record_json["reports"]["closed_polls"] = None
        poll_record_json["results"]["contests"][2]["candidates"].append(None)
        record = PollRecord.model_validate(poll_record_json)
        assert record.election_header.location.precinct.township == ""
        assert record.reports.open_polls.counters.ballot_counter == ""
        assert record.reports.open_polls.status.polls_open is False
        assert record.reports.open_polls.status.accepting_ballots is True
        assert record.reports.closed_polls is None
        assert len(record.results.contests[2].candidates) == 2

    def test_single_name_ticket_becomes_list(self) -> None:
        record = PollRecord.model_validate(
            {"results": {"contests": [{"title": "Mayor", "candidates": [{"ticket": "Pat Smith", "votes": "3"}]}]}}
        )
        assert record.results.contests[0].candidates[0].ticket == ["Pat Smith"]


class TestParsePollData:
    """Tests for parse_poll_data()."""

    def test_parses_county_township_mapping(self, poll_data_json: dict) -> None:
        poll_data = parse_poll_data(poll_data_json)
        assert list(poll_data) == ["Oakland"]
        assert list(poll_data["Oakland"]) == ["Addison Township", "Avon Township"]
        assert isinstance(poll_data["Oakland"]["Avon Township"], PollRecord)

    def test_invalid_record_is_skipped(self, poll_data_json: dict) -> None:
        poll_data_json["Oakland"]["Broken Township"] = {"results": {"contests": "not a list"}}
        poll_data = parse_poll_data(poll_data_json)
        assert "Broken Township" not in poll_data["Oakland"]
        assert len(poll_data["Oakland"]) == 2

    def test_records_with_null_sections_are_kept(self, poll_data_json: dict) -> None:
        poll_data_json["Oakland"]["Avon Township"]["election_header"]["location"]["precinct"] = None
        poll_data_json["Oakland"]["Addison Township"]["reports"]["open_polls"]["status"]["polls_open"] = None
        poll_data = parse_poll_data(poll_data_json)
        assert list(poll_data["Oakland"]) == ["Addison Township", "Avon Township"]
        assert poll_data["Oakland"]["Avon Township"].election_header.location.precinct.number == ""

    def test_non_mapping_county_is_skipped(self, poll_data_json: dict) -> None:
        poll_data_json["Wayne"] = ["not", "a", "mapping"]
        assert "Wayne" not in parse_poll_data(poll_data_json)

    def test_top_level_must_be_mapping(self) -> None:
        with pytest.raises(ValueError, match="Expected a mapping of counties"):
            parse_poll_data([])
