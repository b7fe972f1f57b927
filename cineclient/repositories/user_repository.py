"""
Profile repository for the signed-in user.
"""

from cineclient.repositories.base import Repository
from cineclient.schemas import UserProfile


class UserRepository(Repository):
    async def get_my_profile(self) -> UserProfile:
        return await self._authenticated(self._gateway.get_my_profile)

    async def update_my_profile(self, profile: UserProfile) -> UserProfile:
        """Replace the stored profile with ``profile`` in full."""
        return await self._authenticated(self._gateway.update_my_profile, profile)

    async def upload_avatar(self, image_bytes: bytes) -> UserProfile:
        return await self._authenticated(self._gateway.upload_avatar, image_bytes)
