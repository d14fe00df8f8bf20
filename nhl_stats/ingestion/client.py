"""NHL stats API client.

Each call is a single GET with no retry and no rate limiting. Failures are
returned as a ``FetchResult`` rather than raised so the sync loop can tell
"no such game" apart from a network or decoding problem.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

import requests
import structlog

from nhl_stats.utils.config import get_settings

logger = structlog.get_logger(__name__)


class FetchStatus(str, Enum):
    SUCCESS = "SUCCESS"
    NOT_FOUND = "NOT_FOUND"
    TRANSIENT_ERROR = "TRANSIENT_ERROR"


@dataclass
class FetchResult:
    """Outcome of fetching one game feed."""

    status: FetchStatus
    game_id: str
    payload: dict[str, Any] | None = None
    error: str | None = None
    status_code: int | None = None

    @property
    def ok(self) -> bool:
        return self.status is FetchStatus.SUCCESS


class StatsAPIClient:
    """
    Client for the ``/game/{id}/feed/live`` endpoint of the NHL stats API.

    The API answers 404 for game ids past the end of a season; that is the
    only response mapped to ``NOT_FOUND``. Everything else that is not a 2xx
    JSON object is a ``TRANSIENT_ERROR``.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: int | None = None,
        session: requests.Session | None = None,
    ):
        """
        Initialize the client.

        Args:
            base_url: API root, e.g. ``https://statsapi.web.nhl.com/api/v1``.
                If None, uses ``api_base_url`` from settings.
            timeout: Request timeout in seconds. If None, uses settings.
            session: HTTP session to reuse. If None, creates one.
        """
        settings = get_settings()
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.request_timeout
        self.session = session or requests.Session()
        self.session.headers.update({"Accept": "application/json"})
        self.logger = logger.bind(component="stats_api_client")

    def game_feed_url(self, game_id: str) -> str:
        return f"{self.base_url}/game/{game_id}/feed/live"

    def fetch_game(self, game_id: str) -> FetchResult:
        """
        Fetch the live feed for one game.

        Args:
            game_id: Ten-character game id.

        Returns:
            FetchResult with the decoded JSON object on success.
        """
        url = self.game_feed_url(game_id)
        self.logger.debug("Requesting game feed", game_id=game_id, url=url)

        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            self.logger.warning(
                "Game feed request failed",
                game_id=game_id,
                error_type=type(e).__name__,
                error=str(e),
            )
            return FetchResult(FetchStatus.TRANSIENT_ERROR, game_id, error=str(e))

        if response.status_code == 404:
            self.logger.debug("Game feed not found", game_id=game_id)
            return FetchResult(
                FetchStatus.NOT_FOUND, game_id, error="404 Not Found", status_code=404
            )

        try:
            response.raise_for_status()
        except requests.exceptions.HTTPError as e:
            self.logger.warning(
                "Game feed returned an error status",
                game_id=game_id,
                status_code=response.status_code,
            )
            return FetchResult(
                FetchStatus.TRANSIENT_ERROR,
                game_id,
                error=str(e),
                status_code=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as e:
            self.logger.warning("Game feed is not valid JSON", game_id=game_id, error=str(e))
            return FetchResult(
                FetchStatus.TRANSIENT_ERROR,
                game_id,
                error=f"Malformed JSON: {e}",
                status_code=response.status_code,
            )

        if not isinstance(payload, dict):
            return FetchResult(
                FetchStatus.TRANSIENT_ERROR,
                game_id,
                error=f"Expected a JSON object, got {type(payload).__name__}",
                status_code=response.status_code,
            )

        return FetchResult(
            FetchStatus.SUCCESS, game_id, payload=payload, status_code=response.status_code
        )
