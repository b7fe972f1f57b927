"""
Admin-scoped backend operations.

Only token presence is checked here; role checks belong to the caller.
"""

from typing import List

from cineclient.repositories.base import Repository
from cineclient.schemas import Movie, User


class AdminRepository(Repository):
    async def list_all_users(self) -> List[User]:
        return await self._authenticated(self._gateway.get_all_users)

    async def create_movie(self, movie: Movie) -> Movie:
        return await self._authenticated(self._gateway.create_movie, movie)
