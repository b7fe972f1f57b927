"""
Client configuration.

Loads client-specific environment variables only.
Safely ignores unrelated environment variables.
"""

from pathlib import Path
from typing import Optional

from pydantic import ConfigDict, Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Client application settings.

    Environment variables must be prefixed with:
        CINECLIENT_

    Example:
        CINECLIENT_API_BASE_URL=http://localhost:3000
    """

    # --------------------
    # Backend
    # --------------------
    API_BASE_URL: str = Field(
        default="http://localhost:3000",
        description="Base URL for the movie catalog backend",
        min_length=1,
    )
    REQUEST_TIMEOUT: float = Field(default=10.0, gt=0)
    UPLOAD_TIMEOUT: float = Field(default=60.0, gt=0)

    # --------------------
    # Session persistence
    # --------------------
    SESSION_DIR: Path = Field(
        default=Path.home() / ".cineclient",
        description="Directory holding the persisted session record",
    )

    # --------------------
    # Poster lookup (TMDB)
    # --------------------
    TMDB_API_KEY: Optional[str] = None
    TMDB_BASE_URL: str = "https://api.themoviedb.org/3"
    TMDB_IMAGE_BASE_URL: str = "https://image.tmdb.org/t/p/w500"

    # IMPORTANT:
    # - env_file allows local development
    # - env_prefix prevents collisions with backend variables
    # - extra='ignore' safely ignores unrelated env variables
    model_config = ConfigDict(
        env_file=".env",
        env_prefix="CINECLIENT_",
        extra="ignore",
    )
