from typing import List

from cineclient.repositories.base import Repository
from cineclient.schemas import Movie


class MovieRepository(Repository):
    """Read-only access to the movie catalog."""

    async def get_movies(self) -> List[Movie]:
        return await self._authenticated(self._gateway.get_movies)

    async def get_movie_by_id(self, movie_id: str) -> Movie:
        return await self._authenticated(self._gateway.get_movie_by_id, movie_id)
