"""Persistence for the cached access token."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Protocol

from pydantic import ValidationError

from wechat_media.models.auth import Credential
from wechat_media.utils.errors import (
    CredentialParseError,
    CredentialReadError,
    CredentialWriteError,
)

logger = logging.getLogger(__name__)


class CredentialStore(Protocol):
    """Where the Token Service keeps its credential between runs."""

    def load(self) -> Credential | None:
        """Return the stored credential, or None if nothing is stored."""
        ...

    def save(self, credential: Credential) -> None:
        ...


class FileCredentialStore:
    """Keeps one credential as a small JSON file.

    The file is always replaced whole, never appended to or edited in place.
    There is no locking; concurrent writers are last-writer-wins.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> Credential | None:
        try:
            raw = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as e:
            raise CredentialReadError(f"Failed to read token file {self._path}: {e}") from e

        try:
            return Credential.model_validate(json.loads(raw))
        except (ValueError, ValidationError) as e:
            raise CredentialParseError(f"Failed to parse token file {self._path}: {e}") from e

    def save(self, credential: Credential) -> None:
        directory = self._path.parent
        tmp_name = None
        try:
            directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self._path.name}.", suffix=".tmp", dir=directory
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(credential.model_dump(), f)
            os.replace(tmp_name, self._path)
        except OSError as e:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise CredentialWriteError(f"Failed to write token file {self._path}: {e}") from e
        logger.info("Saved access token to %s", self._path)

    def clear(self) -> bool:
        """Delete the token file. Returns True if a file was removed."""
        try:
            self._path.unlink()
        except FileNotFoundError:
            return False
        except OSError as e:
            raise CredentialWriteError(f"Failed to remove token file {self._path}: {e}") from e
        return True
