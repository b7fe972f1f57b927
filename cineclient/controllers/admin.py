"""
Admin dashboard and catalog management controllers.

Role gating is exposed for the UI; the repositories only require a token.
"""

import asyncio
from dataclasses import dataclass, replace
from typing import Optional

from cineclient import roles
from cineclient.controllers.base import Controller
from cineclient.controllers.forms import MIN_MOVIE_YEAR, is_blank, parse_int
from cineclient.repositories.admin_repository import AdminRepository
from cineclient.schemas import Movie
from cineclient.state.observable import MutableStateFlow, StateFlow, map_flow
from cineclient.state.results import IDLE, LOADING, Loading, RequestState, Success
from cineclient.state.session_store import SessionStore
from cineclient.utils.logger import get_logger

logger = get_logger(__name__)


class AdminController(Controller):
    def __init__(self, admin_repository: AdminRepository, session_store: SessionStore) -> None:
        super().__init__()
        self._admin_repository = admin_repository
        self._admin_state: MutableStateFlow[RequestState] = MutableStateFlow(LOADING)
        self._user_role = session_store.observe_role()
        self._is_admin = self._derive(map_flow(self._user_role, roles.is_admin))

        self.fetch_all_users()

    @property
    def admin_state(self) -> StateFlow[RequestState]:
        return self._admin_state

    @property
    def user_role(self) -> StateFlow[Optional[str]]:
        return self._user_role

    @property
    def is_admin(self) -> StateFlow[bool]:
        return self._is_admin

    def fetch_all_users(self) -> asyncio.Task:
        return self._run(
            "users",
            self._admin_state,
            self._load_users,
            "Failed to fetch users",
        )

    async def _load_users(self) -> RequestState:
        return Success(await self._admin_repository.list_all_users())


@dataclass(frozen=True)
class AddMovieFormState:
    title: str = ""
    director: str = ""
    year: str = ""
    duration: str = ""
    genre: str = ""
    title_error: Optional[str] = None
    director_error: Optional[str] = None
    year_error: Optional[str] = None
    duration_error: Optional[str] = None
    genre_error: Optional[str] = None
    is_valid: bool = False


def validate_movie_form(form: AddMovieFormState) -> AddMovieFormState:
    year = parse_int(form.year)
    duration = parse_int(form.duration)

    errors = {
        "title_error": "Title is required" if is_blank(form.title) else None,
        "director_error": "Director is required" if is_blank(form.director) else None,
        "genre_error": "Genre is required" if is_blank(form.genre) else None,
        "year_error": (
            "Invalid year" if year is None or year <= MIN_MOVIE_YEAR else None
        ),
        "duration_error": (
            "Invalid duration" if duration is None or duration <= 0 else None
        ),
    }
    return replace(
        form,
        **errors,
        is_valid=all(error is None for error in errors.values()),
    )


class AddMovieController(Controller):
    def __init__(self, admin_repository: AdminRepository) -> None:
        super().__init__()
        self._admin_repository = admin_repository
        self._form_state = MutableStateFlow(AddMovieFormState())
        self._add_movie_result: MutableStateFlow[RequestState] = MutableStateFlow(IDLE)

    @property
    def form_state(self) -> StateFlow[AddMovieFormState]:
        return self._form_state

    @property
    def add_movie_result(self) -> StateFlow[RequestState]:
        return self._add_movie_result

    def on_form_change(
        self,
        title: str,
        director: str,
        year: str,
        duration: str,
        genre: str,
    ) -> None:
        self._form_state.value = validate_movie_form(
            replace(
                self._form_state.value,
                title=title,
                director=director,
                year=year,
                duration=duration,
                genre=genre,
            )
        )

    def create_movie(self) -> Optional[asyncio.Task]:
        form = validate_movie_form(self._form_state.value)
        self._form_state.value = form
        if not form.is_valid or isinstance(self._add_movie_result.value, Loading):
            return None

        movie = Movie(
            title=form.title,
            director=form.director,
            year=int(form.year.strip()),
            duration_minutes=int(form.duration.strip()),
            genre=form.genre,
        )
        return self._run(
            "create",
            self._add_movie_result,
            lambda: self._create(movie),
        )

    async def _create(self, movie: Movie) -> RequestState:
        created = await self._admin_repository.create_movie(movie)
        logger.info("Movie created", extra={"movie_id": created.id})
        return Success(created)
