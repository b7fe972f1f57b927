"""
Poster lookup client.

Thin wrapper around The Movie Database (TMDb) title search.
"""

from typing import List, Optional

import requests
from pydantic import TypeAdapter

from cineclient.api.http import decode, request_json
from cineclient.schemas import PosterCandidate, PosterSearchResponse
from cineclient.utils.logger import get_logger

logger = get_logger(__name__)

_SEARCH = TypeAdapter(PosterSearchResponse)


class PosterClient:
    """Read-only TMDb search-by-title."""

    def __init__(
        self,
        api_key: Optional[str],
        *,
        base_url: str = "https://api.themoviedb.org/3",
        session: Optional[requests.Session] = None,
        timeout: float = 10.0,
    ) -> None:
        self.api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._session = session or requests.Session()
        self._timeout = timeout

    @property
    def enabled(self) -> bool:
        return bool(self.api_key)

    def search(self, title: str) -> List[PosterCandidate]:
        """
        Search TMDb for a title.

        Returns:
            Candidates in TMDb's ranking order.
        """
        url = f"{self._base_url}/search/movie"

        logger.debug("Searching poster", extra={"title": title})

        payload = request_json(
            self._session,
            "GET",
            url,
            params={"api_key": self.api_key, "query": title},
            timeout=self._timeout,
        )
        return decode(_SEARCH, payload, url=url).results
