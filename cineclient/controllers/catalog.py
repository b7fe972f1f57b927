"""
Movie catalog controller.

Fetches the full catalog and exposes a search-filtered view that follows
both the fetch result and the search query.
"""

import asyncio
from typing import List

from cineclient import roles
from cineclient.controllers.base import Controller
from cineclient.repositories.movie_repository import MovieRepository
from cineclient.schemas import Movie
from cineclient.state.observable import MutableStateFlow, StateFlow, combine, map_flow
from cineclient.state.results import LOADING, RequestState, Success
from cineclient.state.session_store import SessionStore
from cineclient.utils.logger import get_logger

logger = get_logger(__name__)


def filter_movies(state: RequestState, query: str) -> List[Movie]:
    """
    Movies to display for the current fetch state and search query.

    Empty unless the fetch succeeded. A blank query keeps the full list;
    otherwise a movie matches when its title or director contains the query,
    ignoring case. Order is preserved.
    """
    if not isinstance(state, Success):
        return []

    movies: List[Movie] = state.payload
    if not query.strip():
        return list(movies)

    needle = query.casefold()
    return [
        movie
        for movie in movies
        if needle in movie.title.casefold() or needle in movie.director.casefold()
    ]


class CatalogController(Controller):
    def __init__(self, movie_repository: MovieRepository, session_store: SessionStore) -> None:
        super().__init__()
        self._movie_repository = movie_repository
        self._session_store = session_store

        self._movie_state: MutableStateFlow[RequestState] = MutableStateFlow(LOADING)
        self._search_query = MutableStateFlow("")
        self._logged_out = MutableStateFlow(False)

        self._filtered_movies = self._derive(
            combine(
                self._movie_state,
                self._search_query,
                filter_movies,
            )
        )

        role = session_store.observe_role()
        self._can_manage_catalog = self._derive(map_flow(role, roles.can_manage_catalog))
        self._can_view_profile = self._derive(map_flow(role, roles.can_view_profile))

        self.refresh()

    @property
    def movie_state(self) -> StateFlow[RequestState]:
        return self._movie_state

    @property
    def search_query(self) -> StateFlow[str]:
        return self._search_query

    @property
    def filtered_movies(self) -> StateFlow[List[Movie]]:
        return self._filtered_movies

    @property
    def user_role(self) -> StateFlow:
        return self._session_store.observe_role()

    @property
    def can_manage_catalog(self) -> StateFlow[bool]:
        return self._can_manage_catalog

    @property
    def can_view_profile(self) -> StateFlow[bool]:
        return self._can_view_profile

    @property
    def logged_out(self) -> StateFlow[bool]:
        return self._logged_out

    def on_search_query_change(self, query: str) -> None:
        self._search_query.value = query

    def refresh(self) -> asyncio.Task:
        return self._run(
            "movies",
            self._movie_state,
            self._load_movies,
            "Failed to load movies",
        )

    async def _load_movies(self) -> RequestState:
        movies = await self._movie_repository.get_movies()
        logger.info("Catalog loaded", extra={"count": len(movies)})
        return Success(movies)

    def logout(self) -> asyncio.Task:
        return self._launch(self._logout())

    async def _logout(self) -> None:
        if not await self._session_store.clear_session():
            logger.warning("Logout failed; session record still on disk")
            return
        self._logged_out.value = True
