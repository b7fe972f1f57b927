"""
Pytest configuration and fixtures.
"""

import os
from typing import List, Optional, Tuple
from unittest.mock import MagicMock

import pytest

from cineclient.api.gateway import ApiGateway
from cineclient.schemas import AuthResponse, Movie, User, UserProfile
from cineclient.state.observable import MutableStateFlow, StateFlow, map_flow
from cineclient.state.session_store import EMPTY_SESSION, Session


@pytest.fixture(scope="session", autouse=True)
def setup_test_environment(tmp_path_factory):
    """Setup test environment variables."""

    test_env = {
        "CINECLIENT_API_BASE_URL": "http://backend.test",
        "CINECLIENT_SESSION_DIR": str(tmp_path_factory.mktemp("session")),
        "CINECLIENT_TMDB_API_KEY": "",
    }

    for key, value in test_env.items():
        os.environ[key] = value

    yield

    # Cleanup
    for key in test_env:
        os.environ.pop(key, None)


class FakeSessionStore:
    """In-memory stand-in for SessionStore that records writes."""

    def __init__(self, token: Optional[str] = None, role: Optional[str] = None):
        self._session = MutableStateFlow(Session(token=token, role=role))
        self._token = map_flow(self._session, lambda session: session.token)
        self._role = map_flow(self._session, lambda session: session.role)
        self.saved: List[Tuple[str, str]] = []
        self.clear_calls = 0
        self.save_succeeds = True
        self.clear_succeeds = True

    def observe_token(self) -> StateFlow[Optional[str]]:
        return self._token

    def observe_role(self) -> StateFlow[Optional[str]]:
        return self._role

    def current_token(self) -> Optional[str]:
        return self._session.value.token

    def current_role(self) -> Optional[str]:
        return self._session.value.role

    async def read_token(self) -> Optional[str]:
        return self._session.value.token

    async def save_session(self, token: str, role: str) -> bool:
        self.saved.append((token, role))
        if self.save_succeeds:
            self._session.value = Session(token=token, role=role)
        return self.save_succeeds

    async def clear_session(self) -> bool:
        self.clear_calls += 1
        if self.clear_succeeds:
            self._session.value = EMPTY_SESSION
        return self.clear_succeeds


@pytest.fixture
def session_store():
    """Session store with nobody signed in."""
    return FakeSessionStore()


@pytest.fixture
def signed_in_store():
    """Session store holding a regular user's token."""
    return FakeSessionStore(token="test-token", role="USUARIO")


@pytest.fixture
def gateway():
    """Gateway double; every endpoint is a MagicMock."""
    return MagicMock(spec=ApiGateway)


@pytest.fixture
def user():
    return User(_id="u1", email="ana@example.com", role="USUARIO", nombre="Ana")


@pytest.fixture
def admin_user():
    return User(_id="u0", email="root@example.com", role="ADMIN", nombre="Root")


@pytest.fixture
def auth_response(user):
    return AuthResponse(user=user, access_token="fresh-token")


@pytest.fixture
def movies():
    return [
        Movie(_id="m1", titulo="Alpha", director="X", anio=1999, duracion=120, genero="Drama"),
        Movie(_id="m2", titulo="Beta", director="Y", anio=2005, duracion=95, genero="Comedy"),
    ]


@pytest.fixture
def profile():
    return UserProfile(
        _id="p1",
        user={"_id": "u1", "email": "ana@example.com", "nombre": "Ana"},
        nombre="Ana",
        telefono="12345",
        preferencias=["Drama"],
    )


@pytest.fixture
def make_session_store():
    """Factory for session stores with arbitrary contents."""
    return FakeSessionStore
