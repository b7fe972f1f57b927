"""
Startup authentication gate.

Decides whether the app opens on the catalog or on the login screen.
"""

from enum import Enum

from cineclient.state.observable import MutableStateFlow, StateFlow
from cineclient.state.session_store import SessionStore


class AuthState(str, Enum):
    UNKNOWN = "unknown"
    AUTHENTICATED = "authenticated"
    UNAUTHENTICATED = "unauthenticated"


class AuthGateController:
    def __init__(self, session_store: SessionStore) -> None:
        self._session_store = session_store
        self._auth_state = MutableStateFlow(AuthState.UNKNOWN)
        self.check_auth_status()

    @property
    def auth_state(self) -> StateFlow[AuthState]:
        return self._auth_state

    def check_auth_status(self) -> AuthState:
        token = self._session_store.current_token()
        self._auth_state.value = (
            AuthState.AUTHENTICATED if token else AuthState.UNAUTHENTICATED
        )
        return self._auth_state.value
