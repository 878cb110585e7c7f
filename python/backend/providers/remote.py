"""Client for the remote puzzle service."""

from __future__ import annotations

import logging
from typing import Any

import requests

from backend.config import get_settings
from backend.errors import InvalidDefinition, ProviderError
from backend.models.puzzle import PuzzleDefinition

logger = logging.getLogger(__name__)


class HttpPuzzleProvider:
    """Fetches and creates puzzles over HTTP.

    Endpoints (relative to ``base_url``)::

        GET  getRandomByDifficulty/<difficulty>  -> "<puzzle id>"
        GET  getPuzzle/<puzzle id>               -> puzzle JSON
        POST create  (multipart rows, cols, image) -> puzzle JSON
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        session: requests.Session | None = None,
    ) -> None:
        settings = get_settings()
        base_url = base_url or settings.API_URL
        self.base_url = base_url if base_url.endswith("/") else base_url + "/"
        self.timeout = timeout if timeout is not None else settings.REQUEST_TIMEOUT
        self.session = session or requests.Session()

    # -- provider API ---------------------------------------------------------

    def fetch_random_puzzle_id(self, difficulty: str) -> str:
        data = self._request("GET", f"getRandomByDifficulty/{difficulty}")
        if isinstance(data, dict):
            data = data.get("puzzleId")
        if not data:
            raise ProviderError(f"No puzzle available for difficulty {difficulty!r}.")
        return str(data)

    def fetch_puzzle_definition(self, puzzle_id: str) -> PuzzleDefinition:
        data = self._request("GET", f"getPuzzle/{puzzle_id}")
        return self._parse(data)

    def create_puzzle(self, rows: int, cols: int, image_bytes: bytes) -> PuzzleDefinition:
        data = self._request(
            "POST",
            "create",
            data={"rows": str(rows), "cols": str(cols)},
            files={"image": ("image", image_bytes)},
        )
        return self._parse(data)

    # -- helpers --------------------------------------------------------------

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        url = self.base_url + path
        logger.debug("%s %s", method, url)
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
            response.raise_for_status()
        except requests.HTTPError as e:
            message = _error_message(e.response) or str(e)
            logger.warning("Puzzle service returned an error for %s: %s", url, message)
            raise ProviderError(message) from e
        except requests.RequestException as e:
            logger.warning("Puzzle service unreachable at %s: %s", url, e)
            raise ProviderError(f"Puzzle service unreachable: {e}") from e

        try:
            return response.json()
        except ValueError as e:
            raise ProviderError(f"Puzzle service sent an invalid response from {url}.") from e

    @staticmethod
    def _parse(data: Any) -> PuzzleDefinition:
        try:
            return PuzzleDefinition.from_dict(data)
        except InvalidDefinition as e:
            raise ProviderError(f"Puzzle service sent a malformed puzzle: {e}") from e


def _error_message(response: requests.Response | None) -> str | None:
    """Pull the ``message`` field out of an error body, if there is one."""
    if response is None:
        return None
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return None
