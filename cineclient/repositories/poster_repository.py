"""
Poster enrichment source.

Consults TMDb by title and builds a full image URL from the best match.
"""

import asyncio
from typing import Optional

from cineclient.api.poster_client import PosterClient
from cineclient.utils.logger import get_logger

logger = get_logger(__name__)


class PosterRepository:
    def __init__(
        self,
        client: PosterClient,
        image_base_url: str = "https://image.tmdb.org/t/p/w500",
    ) -> None:
        self._client = client
        self._image_base_url = image_base_url.rstrip("/")

    async def find_poster_url(self, title: str) -> Optional[str]:
        """
        Look up a poster for ``title``.

        Returns:
            Full poster URL from the first search result, or None when the
            lookup is unavailable or finds nothing.

        Raises:
            ClientError: If the lookup itself fails.
        """
        if not self._client.enabled:
            logger.debug("Poster lookup disabled; no API key configured")
            return None

        candidates = await asyncio.to_thread(self._client.search, title)
        if not candidates or not candidates[0].poster_path:
            logger.info("No poster found", extra={"title": title})
            return None

        return f"{self._image_base_url}/{candidates[0].poster_path.lstrip('/')}"
