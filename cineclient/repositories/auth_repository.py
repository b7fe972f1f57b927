"""
Authentication repository.

Registration, login and password reset go out without a token. Persisting
the returned session is the caller's job.
"""

from cineclient.repositories.base import Repository
from cineclient.schemas import (
    AuthResponse,
    ForgotPasswordRequest,
    LoginRequest,
    RegisterRequest,
    User,
)


class AuthRepository(Repository):
    async def register(self, name: str, email: str, password: str) -> AuthResponse:
        request = RegisterRequest(name=name, email=email, password=password)
        return await self._anonymous(self._gateway.register, request)

    async def login(self, email: str, password: str) -> AuthResponse:
        request = LoginRequest(email=email, password=password)
        return await self._anonymous(self._gateway.login, request)

    async def forgot_password(self, email: str) -> None:
        request = ForgotPasswordRequest(email=email)
        await self._anonymous(self._gateway.forgot_password, request)

    async def get_auth_user(self) -> User:
        return await self._authenticated(self._gateway.get_auth_user)
