"""
Movie detail controller.

Loads one movie, then tries to attach a poster from the external lookup.
The lookup is best-effort: it never turns a loaded movie into an error.
"""

import asyncio

from cineclient.controllers.base import Controller
from cineclient.repositories.movie_repository import MovieRepository
from cineclient.repositories.poster_repository import PosterRepository
from cineclient.schemas import Movie
from cineclient.state.observable import MutableStateFlow, StateFlow
from cineclient.state.results import LOADING, RequestState, Success
from cineclient.utils.logger import get_logger

logger = get_logger(__name__)


class MovieDetailController(Controller):
    def __init__(
        self,
        movie_id: str,
        movie_repository: MovieRepository,
        poster_repository: PosterRepository,
    ) -> None:
        super().__init__()
        self._movie_id = movie_id
        self._movie_repository = movie_repository
        self._poster_repository = poster_repository
        self._detail_state: MutableStateFlow[RequestState] = MutableStateFlow(LOADING)

        self.load()

    @property
    def movie_id(self) -> str:
        return self._movie_id

    @property
    def detail_state(self) -> StateFlow[RequestState]:
        return self._detail_state

    def load(self) -> asyncio.Task:
        return self._run(
            "detail",
            self._detail_state,
            self._load_movie,
            "Failed to load movie details",
        )

    async def _load_movie(self) -> RequestState:
        movie = await self._movie_repository.get_movie_by_id(self._movie_id)
        return Success(await self._with_poster(movie))

    async def _with_poster(self, movie: Movie) -> Movie:
        try:
            poster_url = await self._poster_repository.find_poster_url(movie.title)

        except Exception:
            logger.warning(
                "Poster lookup failed; showing movie without poster",
                extra={"movie_id": movie.id},
                exc_info=True,
            )
            return movie

        if poster_url is None:
            return movie

        return movie.with_poster(poster_url)
