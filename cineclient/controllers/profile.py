"""
Profile controller.

The displayed profile always comes from the server: every successful edit
or avatar upload is followed by a full reload instead of a local merge.
"""

import asyncio
from dataclasses import dataclass, replace
from typing import Optional

from cineclient.controllers.base import Controller
from cineclient.controllers.forms import EMPTY_NAME, is_blank
from cineclient.repositories.user_repository import UserRepository
from cineclient.schemas import UserProfile
from cineclient.state.observable import MutableStateFlow, StateFlow
from cineclient.state.results import IDLE, LOADING, Loading, RequestState, Success
from cineclient.utils.image_uploader import ImageSource, ImageUploader
from cineclient.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ProfileFormState:
    name: str = ""
    email: str = ""
    name_error: Optional[str] = None


class ProfileController(Controller):
    def __init__(
        self,
        user_repository: UserRepository,
        image_uploader: Optional[ImageUploader] = None,
    ) -> None:
        super().__init__()
        self._user_repository = user_repository
        self._image_uploader = image_uploader or ImageUploader()

        self._profile_state: MutableStateFlow[RequestState] = MutableStateFlow(LOADING)
        self._form_state = MutableStateFlow(ProfileFormState())
        self._update_result: MutableStateFlow[RequestState] = MutableStateFlow(IDLE)

        self.load_profile()

    @property
    def profile_state(self) -> StateFlow[RequestState]:
        return self._profile_state

    @property
    def form_state(self) -> StateFlow[ProfileFormState]:
        return self._form_state

    @property
    def update_result(self) -> StateFlow[RequestState]:
        return self._update_result

    # --------------------
    # Loading
    # --------------------

    def load_profile(self) -> asyncio.Task:
        return self._run(
            "profile",
            self._profile_state,
            self._fetch_profile,
            "Failed to load profile",
            on_result=self._fill_form,
        )

    async def _fetch_profile(self) -> RequestState:
        return Success(await self._user_repository.get_my_profile())

    def _fill_form(self, state: RequestState) -> None:
        if not isinstance(state, Success):
            return
        profile: UserProfile = state.payload
        self._form_state.update(
            lambda form: replace(
                form,
                name=profile.name,
                email=profile.owner_email or "",
            )
        )

    # --------------------
    # Editing
    # --------------------

    def on_name_change(self, name: str) -> None:
        self._form_state.update(
            lambda form: replace(
                form,
                name=name,
                name_error=form.name_error if is_blank(name) else None,
            )
        )

    def update_profile(self) -> Optional[asyncio.Task]:
        """
        Send the loaded profile with the edited name.

        Returns:
            The update task, or None if nothing was sent.
        """
        form = self._form_state.value
        if is_blank(form.name):
            self._form_state.value = replace(form, name_error=EMPTY_NAME)
            return None

        self._form_state.value = replace(form, name_error=None)

        current = self._profile_state.value
        if not isinstance(current, Success):
            logger.warning("Profile update requested before profile loaded")
            return None

        if isinstance(self._update_result.value, Loading):
            return None

        updated = current.payload.model_copy(update={"name": form.name})
        return self._run(
            "update",
            self._update_result,
            lambda: self._send_update(updated),
            "Failed to update profile",
            on_result=self._reload_on_success,
        )

    async def _send_update(self, profile: UserProfile) -> RequestState:
        return Success(await self._user_repository.update_my_profile(profile))

    def _reload_on_success(self, state: RequestState) -> None:
        if isinstance(state, Success):
            self.load_profile()

    # --------------------
    # Avatar
    # --------------------

    def upload_image(self, image: ImageSource) -> asyncio.Task:
        return self._run(
            "profile",
            self._profile_state,
            lambda: self._upload(image),
            "Image upload failed",
            on_result=self._fill_form,
        )

    async def _upload(self, image: ImageSource) -> RequestState:
        image_bytes = await asyncio.to_thread(self._image_uploader.to_jpeg_bytes, image)
        await self._user_repository.upload_avatar(image_bytes)
        return await self._fetch_profile()
