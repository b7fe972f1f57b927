"""
Session persistence.

Stores the bearer token and role as one JSON record so both fields are
always replaced together. Survives process restarts.
"""

import asyncio
import json
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from cineclient.state.observable import MutableStateFlow, StateFlow, map_flow
from cineclient.utils.logger import get_logger

logger = get_logger(__name__)

STORE_NAME = "session"
TOKEN_KEY = "auth_token"
ROLE_KEY = "user_role"


@dataclass(frozen=True)
class Session:
    token: Optional[str] = None
    role: Optional[str] = None

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)


EMPTY_SESSION = Session()


class SessionStore:
    """
    Durable, observable storage for the current session.

    Writes are serialized and land on disk through an atomic replace before
    observers are notified.
    """

    def __init__(self, directory: Path) -> None:
        self._path = Path(directory) / f"{STORE_NAME}.json"
        self._write_lock = asyncio.Lock()
        self._session = MutableStateFlow(self._read())
        self._token = map_flow(self._session, lambda session: session.token)
        self._role = map_flow(self._session, lambda session: session.role)

    @property
    def path(self) -> Path:
        return self._path

    # --------------------
    # Observation
    # --------------------

    def observe_token(self) -> StateFlow[Optional[str]]:
        return self._token

    def observe_role(self) -> StateFlow[Optional[str]]:
        return self._role

    # --------------------
    # One-shot reads
    # --------------------

    def current_session(self) -> Session:
        """
        Read the latest persisted session from disk.

        Observers are brought up to date if the record changed underneath.
        """
        session = self._read()
        self._session.value = session
        return session

    def current_token(self) -> Optional[str]:
        return self.current_session().token

    def current_role(self) -> Optional[str]:
        return self.current_session().role

    async def read_token(self) -> Optional[str]:
        """Read the latest persisted token without blocking the event loop."""
        session = await asyncio.to_thread(self._read)
        self._session.value = session
        return session.token

    # --------------------
    # Writes
    # --------------------

    async def save_session(self, token: str, role: str) -> bool:
        """
        Persist a new session.

        Returns:
            bool: True if saved successfully.
        """
        return await self._store(Session(token=token, role=role))

    async def clear_session(self) -> bool:
        """
        Remove all session data.

        Returns:
            bool: True if cleared successfully.
        """
        return await self._store(EMPTY_SESSION)

    async def _store(self, session: Session) -> bool:
        async with self._write_lock:
            try:
                await asyncio.to_thread(self._write, session)
            except OSError:
                logger.exception(
                    "Failed to persist session",
                    extra={"path": str(self._path)},
                )
                return False

            self._session.value = session

        logger.info(
            "Session updated",
            extra={"authenticated": session.is_authenticated, "role": session.role},
        )
        return True

    # --------------------
    # Disk access
    # --------------------

    def _read(self) -> Session:
        try:
            raw = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return EMPTY_SESSION
        except OSError:
            logger.exception(
                "Failed to read session record",
                extra={"path": str(self._path)},
            )
            return EMPTY_SESSION

        try:
            record = json.loads(raw)
        except ValueError:
            logger.warning(
                "Corrupt session record ignored",
                extra={"path": str(self._path)},
            )
            return EMPTY_SESSION

        if not isinstance(record, dict):
            return EMPTY_SESSION

        return Session(token=record.get(TOKEN_KEY), role=record.get(ROLE_KEY))

    def _write(self, session: Session) -> None:
        if session == EMPTY_SESSION:
            self._path.unlink(missing_ok=True)
            return

        self._path.parent.mkdir(parents=True, exist_ok=True)
        record = {TOKEN_KEY: session.token, ROLE_KEY: session.role}

        fd, tmp_name = tempfile.mkstemp(
            dir=self._path.parent,
            prefix=f".{STORE_NAME}-",
            suffix=".tmp",
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(record, handle)
            os.replace(tmp_name, self._path)
        except OSError:
            Path(tmp_name).unlink(missing_ok=True)
            raise
