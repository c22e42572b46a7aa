"""Contest winner resolution."""

import re
from collections.abc import Iterable

from loguru import logger

from poll_map.lib.poll_tape.models import Candidate, Contest

STRAIGHT_PARTY_MARKER = "straight party"

_INTEGER_RE = re.compile(r"^[+-]?[0-9]+$")


def parse_votes(votes: str | None) -> int:
    """Parse a printed vote count as a base-10 integer.

    Unparseable counts (blank, ``"12abc"``, ``"1,234"``) are treated as 0.
    """
    text = (votes or "").strip()
    if not _INTEGER_RE.match(text):
        logger.debug("Unparseable vote count {!r} treated as 0", votes)
        return 0
    return int(text)


def is_straight_party(title: str) -> bool:
    """Return True for straight-party ticket contests."""
    return STRAIGHT_PARTY_MARKER in title.lower()


def non_straight_party_contests(contests: Iterable[Contest]) -> list[Contest]:
    """Drop straight-party contests, keeping the original order."""
    return [contest for contest in contests if not is_straight_party(contest.title)]


def resolve_winners(contest: Contest) -> list[Candidate]:
    """Return every candidate holding the contest's highest vote count.

    Ties are all returned, in ballot order. A contest without candidates
    has no winners.
    """
    if not contest.candidates:
        return []
    counts = [parse_votes(candidate.votes) for candidate in contest.candidates]
    top = max(counts)
    return [candidate for candidate, count in zip(contest.candidates, counts, strict=True) if count == top]
