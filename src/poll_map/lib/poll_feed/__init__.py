"""Poll feed library: async access to the poll map backend.

Public API:
    - PollFeedClient: Fetch boundaries, poll data, and county winners
    - FetchError: HTTP/parse error type
"""

from poll_map.lib.poll_feed.fetcher import JSON_HEADERS, FetchError, PollFeedClient

__all__ = [
    "JSON_HEADERS",
    "FetchError",
    "PollFeedClient",
]
