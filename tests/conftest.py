"""Shared test fixtures: poll tape payloads, boundary collections, and settings."""

import copy
from typing import Any

import pytest

from poll_map.core.config import Settings
from poll_map.lib.geometry import parse_feature_collection
from poll_map.lib.poll_tape import parse_poll_data
from poll_map.services.map_service import MapDataset

_POLL_RECORD: dict[str, Any] = {
    "election_header": {
        "type": "General Election",
        "date": "2024-11-05",
        "location": {
            "county": "Oakland",
            "state": "Michigan",
            "precinct": {"township": "Addison Township", "number": "1"},
        },
    },
    "voting_system": {"type": "DS200", "serial_number": "DS2001234", "version": "2.17.4.0"},
    "reports": {
        "open_polls": {
            "timestamp": "2024-11-05T06:45:12",
            "counters": {"ballot_counter": "0", "lifetime_counter": "10452"},
            "status": {"polls_open": True, "accepting_ballots": True},
        },
        "closed_polls": {
            "timestamp": "2024-11-05T20:03:40",
            "counters": {"ballot_counter": "1287", "lifetime_counter": "11739"},
            "status": {"polls_open": False, "accepting_ballots": False},
        },
    },
    "tally_report": {"precincts_included": "1"},
    "results": {
        "contests": [
            {
                "title": "Straight Party Ticket",
                "candidates": [
                    {"ticket": ["Democratic Party"], "votes": "301"},
                    {"ticket": ["Republican Party"], "votes": "412"},
                ],
                "metadata": {"write_ins": "0", "undervotes": "574", "overvotes": "0", "invalid_votes": "0"},
            },
            {
                "title": "Electors of President and Vice-President of the United States",
                "candidates": [
                    {"ticket": ["Kamala D. Harris", "Tim Walz"], "votes": "540"},
                    {"ticket": ["Donald J. Trump", "JD Vance"], "votes": "721"},
                    {"ticket": ["Jill Stein", "Rudolph Ware"], "votes": "9"},
                ],
                "metadata": {"write_ins": "3", "undervotes": "14", "overvotes": "0", "invalid_votes": "0"},
            },
            {
                "title": "Township Supervisor",
                "candidates": [
                    {"ticket": ["Pat Smith"], "votes": "600"},
                    {"ticket": ["Lee Jones"], "votes": "600"},
                ],
                "metadata": {"write_ins": "0", "undervotes": "87", "overvotes": "0", "invalid_votes": "0"},
            },
        ]
    },
    "totals": {
        "precinct_ballot_count": {
            "precinct": {"name": "Addison Township, Precinct 1", "total": "1287"},
            "grand_total": "1287",
        }
    },
}

_FEATURE_COLLECTION: dict[str, Any] = {
    "type": "FeatureCollection",
    "features": [
        {
            "type": "Feature",
            "properties": {"name": "Oakland"},
            "geometry": {
                "type": "Polygon",
                "coordinates": [[[-83.7, 42.4], [-83.1, 42.4], [-83.1, 42.9], [-83.7, 42.9], [-83.7, 42.4]]],
            },
        },
        {
            "type": "Feature",
            "properties": {"name": "Genesee"},
            "geometry": {
                "type": "MultiPolygon",
                "coordinates": [
                    [[[-84.0, 42.8], [-83.5, 42.8], [-83.5, 43.2], [-84.0, 43.2], [-84.0, 42.8]]],
                ],
            },
        },
        {
            "type": "Feature",
            "properties": {"name": "Wayne"},
            "geometry": {
                "type": "Polygon",
                "coordinates": [[[-83.5, 42.0], [-83.0, 42.0], [-83.0, 42.4], [-83.5, 42.4], [-83.5, 42.0]]],
            },
        },
    ],
}


@pytest.fixture
def poll_record_json() -> dict[str, Any]:
    """One township's raw poll tape as served by the backend."""
    return copy.deepcopy(_POLL_RECORD)


@pytest.fixture
def poll_data_json(poll_record_json: dict[str, Any]) -> dict[str, Any]:
    """Raw ``/api/poll-data`` payload with two Oakland townships."""
    second = copy.deepcopy(poll_record_json)
    second["election_header"]["location"]["precinct"] = {"township": "Avon Township", "number": "4"}
    return {"Oakland": {"Addison Township": poll_record_json, "Avon Township": second}}


@pytest.fixture
def feature_collection() -> dict[str, Any]:
    """County boundary FeatureCollection with Oakland, Genesee, and Wayne."""
    return copy.deepcopy(_FEATURE_COLLECTION)


@pytest.fixture
def dataset(feature_collection: dict[str, Any], poll_data_json: dict[str, Any]) -> MapDataset:
    """Loaded map dataset with Oakland poll data and two county winners."""
    return MapDataset(
        features=parse_feature_collection(feature_collection),
        poll_data=parse_poll_data(poll_data_json),
        county_winners={"Oakland": "Democratic Party", "Genesee": "Republican Party"},
    )


@pytest.fixture
def settings() -> Settings:
    """Test application settings."""
    return Settings(
        _env_file=None,
        api_base_url="http://backend.test",
        winner_lookup_concurrency=2,
    )
