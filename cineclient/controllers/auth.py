"""
Authentication screen controllers.

Login, registration and password reset. Forms are re-validated after every
field edit; submission is a no-op while the form is invalid or while the
previous submission is still loading. A successful login or registration
persists the returned token and role before reporting Success.
"""

import asyncio
from dataclasses import dataclass, replace
from typing import Optional

from cineclient.controllers.base import Controller
from cineclient.controllers.forms import (
    EMPTY_PASSWORD,
    INVALID_EMAIL,
    MIN_PASSWORD_LENGTH,
    NAME_REQUIRED,
    SHORT_PASSWORD,
    is_blank,
    is_valid_email,
)
from cineclient.repositories.auth_repository import AuthRepository
from cineclient.schemas import AuthResponse
from cineclient.state.observable import MutableStateFlow, StateFlow
from cineclient.state.results import IDLE, Error, Loading, RequestState, Success
from cineclient.state.session_store import SessionStore
from cineclient.utils.logger import get_logger

logger = get_logger(__name__)

SESSION_NOT_SAVED = "Could not save session"


async def start_session(
    session_store: SessionStore,
    response: AuthResponse,
) -> RequestState:
    """Persist the session carried by an auth response."""
    saved = await session_store.save_session(
        response.access_token,
        response.user.role,
    )
    if not saved:
        return Error(SESSION_NOT_SAVED)

    logger.info(
        "Session started",
        extra={"user_id": response.user.id, "role": response.user.role},
    )
    return Success(response)


# --------------------
# Login
# --------------------


@dataclass(frozen=True)
class LoginFormState:
    email: str = ""
    password: str = ""
    email_error: Optional[str] = None
    password_error: Optional[str] = None
    is_valid: bool = False


class LoginController(Controller):
    def __init__(self, auth_repository: AuthRepository, session_store: SessionStore) -> None:
        super().__init__()
        self._auth_repository = auth_repository
        self._session_store = session_store
        self._form_state = MutableStateFlow(LoginFormState())
        self._login_result: MutableStateFlow[RequestState] = MutableStateFlow(IDLE)

    @property
    def form_state(self) -> StateFlow[LoginFormState]:
        return self._form_state

    @property
    def login_result(self) -> StateFlow[RequestState]:
        return self._login_result

    def on_email_change(self, email: str) -> None:
        self._edit(email=email)

    def on_password_change(self, password: str) -> None:
        self._edit(password=password)

    def _edit(self, **changes: str) -> None:
        self._form_state.value = self._validated(replace(self._form_state.value, **changes))

    @staticmethod
    def _validated(form: LoginFormState) -> LoginFormState:
        email_error = None if is_valid_email(form.email) else INVALID_EMAIL
        password_error = EMPTY_PASSWORD if is_blank(form.password) else None
        return replace(
            form,
            email_error=email_error,
            password_error=password_error,
            is_valid=email_error is None and password_error is None,
        )

    def login(self) -> Optional[asyncio.Task]:
        self._edit()
        form = self._form_state.value
        if not form.is_valid or isinstance(self._login_result.value, Loading):
            return None

        return self._run(
            "login",
            self._login_result,
            lambda: self._login(form.email, form.password),
        )

    async def _login(self, email: str, password: str) -> RequestState:
        response = await self._auth_repository.login(email, password)
        return await start_session(self._session_store, response)


# --------------------
# Registration
# --------------------


@dataclass(frozen=True)
class RegisterFormState:
    name: str = ""
    email: str = ""
    password: str = ""
    name_error: Optional[str] = None
    email_error: Optional[str] = None
    password_error: Optional[str] = None
    is_valid: bool = False


class RegisterController(Controller):
    def __init__(self, auth_repository: AuthRepository, session_store: SessionStore) -> None:
        super().__init__()
        self._auth_repository = auth_repository
        self._session_store = session_store
        self._form_state = MutableStateFlow(RegisterFormState())
        self._register_result: MutableStateFlow[RequestState] = MutableStateFlow(IDLE)

    @property
    def form_state(self) -> StateFlow[RegisterFormState]:
        return self._form_state

    @property
    def register_result(self) -> StateFlow[RequestState]:
        return self._register_result

    def on_name_change(self, name: str) -> None:
        self._edit(name=name)

    def on_email_change(self, email: str) -> None:
        self._edit(email=email)

    def on_password_change(self, password: str) -> None:
        self._edit(password=password)

    def _edit(self, **changes: str) -> None:
        self._form_state.value = self._validated(replace(self._form_state.value, **changes))

    @staticmethod
    def _validated(form: RegisterFormState) -> RegisterFormState:
        name_error = NAME_REQUIRED if is_blank(form.name) else None
        email_error = None if is_valid_email(form.email) else INVALID_EMAIL
        password_error = (
            SHORT_PASSWORD if len(form.password) < MIN_PASSWORD_LENGTH else None
        )
        return replace(
            form,
            name_error=name_error,
            email_error=email_error,
            password_error=password_error,
            is_valid=name_error is None and email_error is None and password_error is None,
        )

    def register(self) -> Optional[asyncio.Task]:
        self._edit()
        form = self._form_state.value
        if not form.is_valid or isinstance(self._register_result.value, Loading):
            return None

        return self._run(
            "register",
            self._register_result,
            lambda: self._register(form.name, form.email, form.password),
        )

    async def _register(self, name: str, email: str, password: str) -> RequestState:
        response = await self._auth_repository.register(name, email, password)
        return await start_session(self._session_store, response)


# --------------------
# Password reset
# --------------------


@dataclass(frozen=True)
class ForgotPasswordFormState:
    email: str = ""
    email_error: Optional[str] = None
    is_valid: bool = False


class ForgotPasswordController(Controller):
    def __init__(self, auth_repository: AuthRepository) -> None:
        super().__init__()
        self._auth_repository = auth_repository
        self._form_state = MutableStateFlow(ForgotPasswordFormState())
        self._reset_state: MutableStateFlow[RequestState] = MutableStateFlow(IDLE)

    @property
    def form_state(self) -> StateFlow[ForgotPasswordFormState]:
        return self._form_state

    @property
    def reset_state(self) -> StateFlow[RequestState]:
        return self._reset_state

    def on_email_change(self, email: str) -> None:
        self._edit(email=email)

    def _edit(self, **changes: str) -> None:
        form = replace(self._form_state.value, **changes)
        email_error = None if is_valid_email(form.email) else INVALID_EMAIL
        self._form_state.value = replace(
            form,
            email_error=email_error,
            is_valid=email_error is None,
        )

    def send_reset_link(self) -> Optional[asyncio.Task]:
        self._edit()
        form = self._form_state.value
        if not form.is_valid or isinstance(self._reset_state.value, Loading):
            return None

        return self._run(
            "reset",
            self._reset_state,
            lambda: self._send(form.email),
        )

    async def _send(self, email: str) -> RequestState:
        await self._auth_repository.forgot_password(email)
        return Success(email)
