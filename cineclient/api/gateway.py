"""
Backend API gateway.

One method per backend endpoint. Authenticated endpoints take the full
``Authorization`` header value; registration, login and password reset do
not. Methods are blocking and are run off the event loop by repositories.
"""

from typing import Any, List, Optional

import requests
from pydantic import TypeAdapter

from cineclient.api.http import decode, request_json
from cineclient.schemas import (
    AuthResponse,
    ForgotPasswordRequest,
    LoginRequest,
    Movie,
    RegisterRequest,
    User,
    UserProfile,
)
from cineclient.utils.logger import get_logger

logger = get_logger(__name__)

_AUTH = TypeAdapter(AuthResponse)
_USER = TypeAdapter(User)
_USERS = TypeAdapter(List[User])
_PROFILE = TypeAdapter(UserProfile)
_MOVIE = TypeAdapter(Movie)
_MOVIES = TypeAdapter(List[Movie])

AVATAR_FIELD = "avatar"
AVATAR_FILENAME = "profile.jpg"
AVATAR_CONTENT_TYPE = "image/jpeg"


class ApiGateway:
    """HTTP client for the movie catalog backend."""

    def __init__(
        self,
        base_url: str,
        *,
        session: Optional[requests.Session] = None,
        timeout: float = 10.0,
        upload_timeout: float = 60.0,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._session = session or requests.Session()
        self._timeout = timeout
        self._upload_timeout = upload_timeout

    # --------------------
    # Internal
    # --------------------

    def _url(self, endpoint: str) -> str:
        return f"{self._base_url}/{endpoint.lstrip('/')}"

    def _call(
        self,
        method: str,
        endpoint: str,
        *,
        authorization: Optional[str] = None,
        json_data: Any = None,
        files: Any = None,
        timeout: Optional[float] = None,
    ) -> Any:
        headers = {"Accept": "application/json"}
        if authorization is not None:
            headers["Authorization"] = authorization

        return request_json(
            self._session,
            method,
            self._url(endpoint),
            headers=headers,
            json_data=json_data,
            files=files,
            timeout=timeout or self._timeout,
        )

    # --------------------
    # Auth
    # --------------------

    def register(self, request: RegisterRequest) -> AuthResponse:
        logger.info("Attempting user registration", extra={"email": request.email})

        payload = self._call(
            "POST",
            "auth/register",
            json_data=request.model_dump(by_alias=True),
        )
        return decode(_AUTH, payload, url=self._url("auth/register"))

    def login(self, request: LoginRequest) -> AuthResponse:
        logger.info("Attempting user login", extra={"email": request.email})

        payload = self._call(
            "POST",
            "auth/login",
            json_data=request.model_dump(by_alias=True),
        )
        return decode(_AUTH, payload, url=self._url("auth/login"))

    def forgot_password(self, request: ForgotPasswordRequest) -> None:
        logger.info("Requesting password reset", extra={"email": request.email})

        self._call(
            "POST",
            "auth/forgot-password",
            json_data=request.model_dump(by_alias=True),
        )

    def get_auth_user(self, authorization: str) -> User:
        payload = self._call("GET", "auth/profile", authorization=authorization)
        return decode(_USER, payload, url=self._url("auth/profile"))

    # --------------------
    # Profile
    # --------------------

    def get_my_profile(self, authorization: str) -> UserProfile:
        payload = self._call("GET", "usuario-profile/me", authorization=authorization)
        return decode(_PROFILE, payload, url=self._url("usuario-profile/me"))

    def update_my_profile(self, authorization: str, profile: UserProfile) -> UserProfile:
        payload = self._call(
            "PUT",
            "usuario-profile/me",
            authorization=authorization,
            json_data=profile.model_dump(by_alias=True, exclude_none=True),
        )
        return decode(_PROFILE, payload, url=self._url("usuario-profile/me"))

    def upload_avatar(self, authorization: str, image_bytes: bytes) -> UserProfile:
        logger.info(
            "Uploading profile avatar",
            extra={"size_bytes": len(image_bytes)},
        )

        payload = self._call(
            "POST",
            "usuario-profile/me/avatar",
            authorization=authorization,
            files={AVATAR_FIELD: (AVATAR_FILENAME, image_bytes, AVATAR_CONTENT_TYPE)},
            timeout=self._upload_timeout,
        )
        return decode(_PROFILE, payload, url=self._url("usuario-profile/me/avatar"))

    # --------------------
    # Movies
    # --------------------

    def get_movies(self, authorization: str) -> List[Movie]:
        payload = self._call("GET", "pelicula", authorization=authorization)
        return decode(_MOVIES, payload, url=self._url("pelicula"))

    def get_movie_by_id(self, authorization: str, movie_id: str) -> Movie:
        endpoint = f"pelicula/{movie_id}"
        payload = self._call("GET", endpoint, authorization=authorization)
        return decode(_MOVIE, payload, url=self._url(endpoint))

    # --------------------
    # Admin
    # --------------------

    def get_all_users(self, authorization: str) -> List[User]:
        payload = self._call("GET", "usuario", authorization=authorization)
        return decode(_USERS, payload, url=self._url("usuario"))

    def create_movie(self, authorization: str, movie: Movie) -> Movie:
        logger.info("Creating movie", extra={"title": movie.title})

        payload = self._call(
            "POST",
            "pelicula",
            authorization=authorization,
            json_data=movie.model_dump(
                by_alias=True,
                exclude_none=True,
                exclude={"id"},
            ),
        )
        return decode(_MOVIE, payload, url=self._url("pelicula"))
