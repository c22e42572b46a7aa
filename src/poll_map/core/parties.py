"""Read-only party reference data shared by the map and the CLI."""

from types import MappingProxyType

PARTIES: tuple[str, ...] = (
    "Democratic Party",
    "Republican Party",
    "Libertarian Party",
    "Green Party",
    "U.S. Taxpayers Party",
    "Working Class Party",
    "Natural Law Party",
)

PARTY_COLORS = MappingProxyType(
    {
        "Democratic Party": "#4B9CD3",
        "Republican Party": "#FF6B6B",
    }
)

DEFAULT_FILL = "#E5E7EB"


def party_fill(party: str | None) -> str:
    """Return the map fill colour for a county won by ``party``."""
    if party is None:
        return DEFAULT_FILL
    return PARTY_COLORS.get(party, DEFAULT_FILL)


def legend_entries() -> list[tuple[str, str]]:
    """Return ``(label, colour)`` pairs for the map legend in party order."""
    entries = [(party, PARTY_COLORS[party]) for party in PARTIES if party in PARTY_COLORS]
    entries.append(("No data", DEFAULT_FILL))
    return entries
