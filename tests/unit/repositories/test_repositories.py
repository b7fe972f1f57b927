"""
Tests for session-gated repositories.
"""

import pytest

from cineclient.api.errors import RejectedError, UnauthenticatedError
from cineclient.repositories.admin_repository import AdminRepository
from cineclient.repositories.auth_repository import AuthRepository
from cineclient.repositories.movie_repository import MovieRepository
from cineclient.repositories.user_repository import UserRepository
from cineclient.schemas import (
    ForgotPasswordRequest,
    LoginRequest,
    Movie,
    RegisterRequest,
    UserProfile,
)
from cineclient.state.session_store import SessionStore

NEW_MOVIE = Movie(title="Gamma", director="Z", year=2010, duration_minutes=100, genre="Sci-Fi")
PROFILE = UserProfile(_id="p1", nombre="Ana", telefono="12345")

# (repository class, method name, call args, gateway method, extra gateway args)
AUTHENTICATED_CALLS = [
    (AuthRepository, "get_auth_user", (), "get_auth_user", ()),
    (MovieRepository, "get_movies", (), "get_movies", ()),
    (MovieRepository, "get_movie_by_id", ("m1",), "get_movie_by_id", ("m1",)),
    (UserRepository, "get_my_profile", (), "get_my_profile", ()),
    (UserRepository, "update_my_profile", (PROFILE,), "update_my_profile", (PROFILE,)),
    (UserRepository, "upload_avatar", (b"jpeg",), "upload_avatar", (b"jpeg",)),
    (AdminRepository, "list_all_users", (), "get_all_users", ()),
    (AdminRepository, "create_movie", (NEW_MOVIE,), "create_movie", (NEW_MOVIE,)),
]


@pytest.mark.asyncio
@pytest.mark.parametrize("token", [None, ""])
@pytest.mark.parametrize(
    "repository_cls,method,args,gateway_method,gateway_args",
    AUTHENTICATED_CALLS,
)
async def test_without_token_fails_locally(
    gateway, make_session_store, token, repository_cls, method, args, gateway_method, gateway_args
):
    repository = repository_cls(gateway, make_session_store(token=token))

    with pytest.raises(UnauthenticatedError, match="User not authenticated"):
        await getattr(repository, method)(*args)

    assert getattr(gateway, gateway_method).call_count == 0


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "repository_cls,method,args,gateway_method,gateway_args",
    AUTHENTICATED_CALLS,
)
async def test_with_token_calls_gateway_once_with_bearer(
    gateway, signed_in_store, repository_cls, method, args, gateway_method, gateway_args
):
    sentinel = object()
    getattr(gateway, gateway_method).return_value = sentinel
    repository = repository_cls(gateway, signed_in_store)

    result = await getattr(repository, method)(*args)

    assert result is sentinel
    getattr(gateway, gateway_method).assert_called_once_with(
        "Bearer test-token", *gateway_args
    )


@pytest.mark.asyncio
async def test_update_profile_sends_full_profile(gateway, signed_in_store, profile):
    gateway.update_my_profile.return_value = profile
    repository = UserRepository(gateway, signed_in_store)

    assert await repository.update_my_profile(profile) is profile

    gateway.update_my_profile.assert_called_once_with("Bearer test-token", profile)


@pytest.mark.asyncio
async def test_token_cleared_after_construction_is_honoured(gateway, signed_in_store):
    repository = MovieRepository(gateway, signed_in_store)
    await signed_in_store.clear_session()

    with pytest.raises(UnauthenticatedError):
        await repository.get_movies()

    gateway.get_movies.assert_not_called()


@pytest.mark.asyncio
async def test_gateway_errors_propagate_verbatim(gateway, signed_in_store):
    gateway.get_movies.side_effect = RejectedError("Forbidden", status_code=403)
    repository = MovieRepository(gateway, signed_in_store)

    with pytest.raises(RejectedError, match="Forbidden"):
        await repository.get_movies()


@pytest.mark.asyncio
async def test_login_does_not_need_or_write_session(gateway, session_store, auth_response):
    gateway.login.return_value = auth_response
    repository = AuthRepository(gateway, session_store)

    result = await repository.login("ana@example.com", "secret")

    assert result is auth_response
    gateway.login.assert_called_once_with(
        LoginRequest(email="ana@example.com", password="secret")
    )
    assert session_store.saved == []


@pytest.mark.asyncio
async def test_register_builds_request(gateway, session_store, auth_response):
    gateway.register.return_value = auth_response
    repository = AuthRepository(gateway, session_store)

    await repository.register("Ana", "ana@example.com", "secret1")

    gateway.register.assert_called_once_with(
        RegisterRequest(name="Ana", email="ana@example.com", password="secret1")
    )
    assert session_store.saved == []


@pytest.mark.asyncio
async def test_forgot_password_is_anonymous(gateway, session_store):
    repository = AuthRepository(gateway, session_store)

    await repository.forgot_password("ana@example.com")

    gateway.forgot_password.assert_called_once_with(
        ForgotPasswordRequest(email="ana@example.com")
    )


@pytest.mark.asyncio
async def test_token_written_by_another_store_instance_is_used(gateway, tmp_path, movies):
    gateway.get_movies.return_value = movies
    repository = MovieRepository(gateway, SessionStore(tmp_path))

    await SessionStore(tmp_path).save_session("from-disk", "USUARIO")

    assert await repository.get_movies() == movies
    gateway.get_movies.assert_called_once_with("Bearer from-disk")
