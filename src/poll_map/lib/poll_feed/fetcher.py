"""Backend HTTP client for boundaries, poll data, and county winners.

Uses httpx for async HTTP requests with timeout and error handling. Every
transport, status, or decoding failure surfaces as ``FetchError``.
"""

from types import TracebackType
from typing import Any
from urllib.parse import quote

import httpx
from loguru import logger

from poll_map.lib.geometry import CountyFeature, parse_feature_collection
from poll_map.lib.poll_tape import PollData, parse_poll_data

JSON_HEADERS = {
    "Accept": "application/json",
    "Content-Type": "application/json",
}

WINNER_PATH = "/api/county/{county}/presidential-winner"


class FetchError(Exception):
    """Raised when fetching from the backend fails."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class PollFeedClient:
    """Async client for the poll map backend.

    Args:
        base_url: Backend base URL.
        timeout: Request timeout in seconds.
        boundaries_path: Path of the county boundary GeoJSON asset.
        poll_data_path: Path of the poll data endpoint.
        transport: Optional httpx transport (tests use ``httpx.MockTransport``).
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        *,
        boundaries_path: str = "/michigan_county_boundaries.geojson",
        poll_data_path: str = "/api/poll-data",
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.boundaries_path = boundaries_path
        self.poll_data_path = poll_data_path
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            follow_redirects=False,
            transport=transport,
        )

    async def __aenter__(self) -> "PollFeedClient":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _get_json(self, path: str, *, headers: dict[str, str] | None = None) -> Any:
        try:
            logger.debug("Fetching {}", path)
            response = await self._client.get(path, headers=headers)
            response.raise_for_status()
        except httpx.TimeoutException as exc:
            msg = f"Timeout fetching {path}"
            raise FetchError(msg) from exc
        except httpx.HTTPStatusError as exc:
            msg = f"HTTP {exc.response.status_code} fetching {path}"
            raise FetchError(msg, status_code=exc.response.status_code) from exc
        except httpx.HTTPError as exc:
            msg = f"HTTP error fetching {path}: {exc}"
            raise FetchError(msg) from exc

        try:
            return response.json()
        except ValueError as exc:
            msg = f"Invalid JSON response from {path}"
            raise FetchError(msg) from exc

    async def fetch_boundaries(self) -> list[CountyFeature]:
        """Fetch and parse the county boundary FeatureCollection.

        Raises:
            FetchError: If the request fails or the document is not a FeatureCollection.
        """
        data = await self._get_json(self.boundaries_path)
        try:
            return parse_feature_collection(data)
        except ValueError as exc:
            msg = f"Failed to parse boundaries from {self.boundaries_path}: {exc}"
            raise FetchError(msg) from exc

    async def fetch_poll_data(self) -> PollData:
        """Fetch the ``{county: {township: PollRecord}}`` mapping.

        Raises:
            FetchError: If the request fails or the payload is not a county mapping.
        """
        data = await self._get_json(self.poll_data_path, headers=JSON_HEADERS)
        try:
            return parse_poll_data(data)
        except ValueError as exc:
            msg = f"Failed to parse poll data from {self.poll_data_path}: {exc}"
            raise FetchError(msg) from exc

    async def fetch_presidential_winner(self, county: str) -> str | None:
        """Fetch the winning party of ``county``.

        Returns:
            The party name, or None when the backend has no result for the
            county (404 or an empty ``winning_party``).

        Raises:
            FetchError: On any other failure.
        """
        path = WINNER_PATH.format(county=quote(county, safe=""))
        try:
            data = await self._get_json(path)
        except FetchError as exc:
            if exc.status_code == 404:
                logger.debug("No presidential winner on record for {}", county)
                return None
            raise

        if not isinstance(data, dict):
            msg = f"Unexpected winner payload for {county}"
            raise FetchError(msg)
        party = data.get("winning_party")
        return str(party) if party else None
