"""
Tests for ProfileController edits and avatar uploads.
"""

from unittest.mock import MagicMock

import pytest

from cineclient.api.errors import NetworkError, RejectedError
from cineclient.controllers.forms import EMPTY_NAME
from cineclient.controllers.profile import ProfileController
from cineclient.repositories.user_repository import UserRepository
from cineclient.state.results import IDLE, Error, Success
from cineclient.utils.image_uploader import ImageUploader


@pytest.fixture
def user_repository(profile):
    repository = MagicMock(spec=UserRepository)
    repository.get_my_profile.return_value = profile
    repository.update_my_profile.side_effect = lambda updated: updated
    repository.upload_avatar.return_value = None
    return repository


@pytest.fixture
def image_uploader():
    uploader = MagicMock(spec=ImageUploader)
    uploader.to_jpeg_bytes.return_value = b"jpeg-bytes"
    return uploader


@pytest.mark.asyncio
async def test_load_fills_form(user_repository, profile):
    controller = ProfileController(user_repository)

    await controller.idle()

    assert controller.profile_state.value == Success(profile)
    assert controller.form_state.value.name == "Ana"
    assert controller.form_state.value.email == "ana@example.com"
    assert controller.update_result.value == IDLE


@pytest.mark.asyncio
async def test_load_failure_maps_to_error(user_repository):
    user_repository.get_my_profile.side_effect = RejectedError("Forbidden", status_code=403)
    controller = ProfileController(user_repository)

    await controller.idle()

    assert controller.profile_state.value == Error("Forbidden")


@pytest.mark.asyncio
@pytest.mark.parametrize("name", ["", "   "])
async def test_blank_name_never_sends_update(user_repository, name):
    controller = ProfileController(user_repository)
    await controller.idle()

    controller.on_name_change(name)

    assert controller.update_profile() is None
    assert controller.form_state.value.name_error == EMPTY_NAME
    user_repository.update_my_profile.assert_not_called()


@pytest.mark.asyncio
async def test_name_error_cleared_by_non_blank_edit(user_repository):
    controller = ProfileController(user_repository)
    await controller.idle()
    controller.on_name_change("")
    controller.update_profile()

    controller.on_name_change("Ana María")

    assert controller.form_state.value.name_error is None


@pytest.mark.asyncio
async def test_update_sends_edited_name_then_reloads(user_repository, profile):
    controller = ProfileController(user_repository)
    await controller.idle()

    controller.on_name_change("Ana María")
    task = controller.update_profile()
    assert task is not None
    await controller.idle()

    sent = user_repository.update_my_profile.call_args.args[0]
    assert sent.name == "Ana María"
    assert sent.phone == profile.phone
    assert sent.preferences == profile.preferences
    assert isinstance(controller.update_result.value, Success)
    assert user_repository.get_my_profile.call_count == 2


@pytest.mark.asyncio
async def test_update_failure_does_not_reload(user_repository):
    user_repository.update_my_profile.side_effect = NetworkError("")
    controller = ProfileController(user_repository)
    await controller.idle()

    controller.on_name_change("Ana María")
    controller.update_profile()
    await controller.idle()

    assert controller.update_result.value == Error("Failed to update profile")
    assert user_repository.get_my_profile.call_count == 1


@pytest.mark.asyncio
async def test_update_before_profile_loaded_is_ignored(user_repository):
    user_repository.get_my_profile.side_effect = NetworkError("offline")
    controller = ProfileController(user_repository)
    await controller.idle()

    controller.on_name_change("Ana")

    assert controller.update_profile() is None
    user_repository.update_my_profile.assert_not_called()


@pytest.mark.asyncio
async def test_upload_encodes_sends_and_refetches(user_repository, image_uploader, profile):
    controller = ProfileController(user_repository, image_uploader)
    await controller.idle()

    await controller.upload_image(b"raw-image")

    image_uploader.to_jpeg_bytes.assert_called_once_with(b"raw-image")
    user_repository.upload_avatar.assert_called_once_with(b"jpeg-bytes")
    assert controller.profile_state.value == Success(profile)
    assert user_repository.get_my_profile.call_count == 2


@pytest.mark.asyncio
async def test_upload_failure_sets_error(user_repository, image_uploader):
    user_repository.upload_avatar.side_effect = RejectedError("Too large", status_code=413)
    controller = ProfileController(user_repository, image_uploader)
    await controller.idle()

    await controller.upload_image(b"raw-image")

    assert controller.profile_state.value == Error("Too large")
    assert user_repository.get_my_profile.call_count == 1
