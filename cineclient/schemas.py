"""
Wire and domain models.

Field aliases follow the backend's JSON names; attribute names are what the
client code uses.
"""

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

DEFAULT_ROLE = "USUARIO"


class WireModel(BaseModel):
    model_config = ConfigDict(
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )


class User(WireModel):
    id: str = Field(alias="_id")
    email: str
    role: str
    name: str = Field(alias="nombre")
    phone: Optional[str] = Field(default=None, alias="telefono")


class UserProfile(WireModel):
    """
    Profile owned by a user.

    The backend may return ``user`` either as an ID or populated with the
    owner's e-mail and name. Only the ID is kept as the owner reference; the
    populated e-mail is retained for display and never sent back.
    """

    id: str = Field(alias="_id")
    owner_user_ref: Optional[str] = Field(default=None, alias="user")
    owner_email: Optional[str] = Field(default=None, exclude=True)
    name: str = Field(alias="nombre")
    phone: str = Field(default="", alias="telefono")
    preferences: List[str] = Field(default_factory=list, alias="preferencias")
    avatar_url: Optional[str] = Field(default=None, alias="avatar")

    @model_validator(mode="before")
    @classmethod
    def _unpack_owner(cls, data: Any) -> Any:
        if isinstance(data, dict) and isinstance(data.get("user"), dict):
            owner = data["user"]
            data = {
                **data,
                "user": owner.get("_id") or owner.get("id"),
                "owner_email": owner.get("email"),
            }
        return data


class Movie(WireModel):
    id: str = Field(default="", alias="_id")
    title: str = Field(alias="titulo")
    director: str
    year: int = Field(alias="anio")
    duration_minutes: int = Field(alias="duracion")
    genre: str = Field(alias="genero")
    image_url: Optional[str] = Field(default=None, alias="imagen")
    thumbnail_url: Optional[str] = Field(default=None, alias="imagenThumbnail")

    # Client-side only, filled in by the poster lookup
    enriched_poster_url: Optional[str] = Field(default=None, exclude=True)

    def with_poster(self, poster_url: str) -> "Movie":
        return self.model_copy(update={"enriched_poster_url": poster_url})


class AuthResponse(WireModel):
    user: User
    access_token: str = Field(min_length=1)


class RegisterRequest(WireModel):
    name: str = Field(alias="nombre")
    email: str
    password: str
    role: str = DEFAULT_ROLE


class LoginRequest(WireModel):
    email: str
    password: str


class ForgotPasswordRequest(WireModel):
    email: str


class PosterCandidate(WireModel):
    id: Optional[int] = None
    title: Optional[str] = None
    poster_path: Optional[str] = None


class PosterSearchResponse(WireModel):
    results: List[PosterCandidate] = Field(default_factory=list)
