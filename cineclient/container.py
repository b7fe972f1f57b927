"""
Composition root.

Builds every data layer component from one ``Settings`` object in a fixed
order: settings, HTTP session, gateway and poster client, session store,
repositories. Screens ask the container for controllers.
"""

from dataclasses import dataclass
from typing import Optional

import requests

from cineclient.api.gateway import ApiGateway
from cineclient.api.poster_client import PosterClient
from cineclient.config import Settings
from cineclient.controllers.admin import AddMovieController, AdminController
from cineclient.controllers.auth import (
    ForgotPasswordController,
    LoginController,
    RegisterController,
)
from cineclient.controllers.catalog import CatalogController
from cineclient.controllers.detail import MovieDetailController
from cineclient.controllers.gate import AuthGateController
from cineclient.controllers.profile import ProfileController
from cineclient.repositories.admin_repository import AdminRepository
from cineclient.repositories.auth_repository import AuthRepository
from cineclient.repositories.movie_repository import MovieRepository
from cineclient.repositories.poster_repository import PosterRepository
from cineclient.repositories.user_repository import UserRepository
from cineclient.state.session_store import SessionStore
from cineclient.utils.image_uploader import ImageUploader
from cineclient.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class Container:
    settings: Settings
    http_session: requests.Session
    gateway: ApiGateway
    session_store: SessionStore
    auth_repository: AuthRepository
    movie_repository: MovieRepository
    user_repository: UserRepository
    admin_repository: AdminRepository
    poster_repository: PosterRepository

    # --------------------
    # Controller factories
    # --------------------

    def auth_gate(self) -> AuthGateController:
        return AuthGateController(self.session_store)

    def login(self) -> LoginController:
        return LoginController(self.auth_repository, self.session_store)

    def register(self) -> RegisterController:
        return RegisterController(self.auth_repository, self.session_store)

    def forgot_password(self) -> ForgotPasswordController:
        return ForgotPasswordController(self.auth_repository)

    def catalog(self) -> CatalogController:
        return CatalogController(self.movie_repository, self.session_store)

    def movie_detail(self, movie_id: str) -> MovieDetailController:
        return MovieDetailController(movie_id, self.movie_repository, self.poster_repository)

    def profile(self, image_uploader: Optional[ImageUploader] = None) -> ProfileController:
        return ProfileController(self.user_repository, image_uploader)

    def admin(self) -> AdminController:
        return AdminController(self.admin_repository, self.session_store)

    def add_movie(self) -> AddMovieController:
        return AddMovieController(self.admin_repository)

    def close(self) -> None:
        self.http_session.close()


def build_container(settings: Optional[Settings] = None) -> Container:
    """
    Wire the data layer.

    Args:
        settings: Explicit settings; read from the environment when omitted.
    """
    settings = settings or Settings()

    logger.info(
        "Initializing client data layer",
        extra={
            "api_base_url": settings.API_BASE_URL,
            "poster_lookup": bool(settings.TMDB_API_KEY),
        },
    )

    http_session = requests.Session()

    gateway = ApiGateway(
        settings.API_BASE_URL,
        session=http_session,
        timeout=settings.REQUEST_TIMEOUT,
        upload_timeout=settings.UPLOAD_TIMEOUT,
    )
    poster_client = PosterClient(
        settings.TMDB_API_KEY,
        base_url=settings.TMDB_BASE_URL,
        session=http_session,
        timeout=settings.REQUEST_TIMEOUT,
    )
    session_store = SessionStore(settings.SESSION_DIR)

    return Container(
        settings=settings,
        http_session=http_session,
        gateway=gateway,
        session_store=session_store,
        auth_repository=AuthRepository(gateway, session_store),
        movie_repository=MovieRepository(gateway, session_store),
        user_repository=UserRepository(gateway, session_store),
        admin_repository=AdminRepository(gateway, session_store),
        poster_repository=PosterRepository(
            poster_client,
            image_base_url=settings.TMDB_IMAGE_BASE_URL,
        ),
    )
