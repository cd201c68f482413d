"""Durable outputs of a batch run: the widget payload and the rotated token."""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Optional

from ..models import ResultPayload

logger = logging.getLogger(__name__)


class PayloadWriteError(RuntimeError):
    """Raised when the widget payload could not be written."""


def _write_text_atomic(path: Path, text: str, mode: int = 0o644) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(text)
        os.chmod(tmp_name, mode)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


class PayloadWriter:
    """Write the widget payload as JSON, replacing any previous payload."""

    def __init__(self, path: str | os.PathLike[str], *, attempts: int = 2) -> None:
        self._path = Path(path)
        self._attempts = max(attempts, 1)

    @property
    def path(self) -> Path:
        return self._path

    def write(self, payload: ResultPayload) -> Path:
        text = payload.model_dump_json(by_alias=True, indent=2) + "\n"
        last_error: Optional[OSError] = None
        for attempt in range(1, self._attempts + 1):
            try:
                _write_text_atomic(self._path, text)
            except OSError as exc:
                last_error = exc
                logger.warning(
                    "Writing %s failed (attempt %s of %s): %s",
                    self._path,
                    attempt,
                    self._attempts,
                    exc,
                )
                continue
            logger.info("Wrote %s", self._path)
            return self._path
        raise PayloadWriteError(f"Could not write {self._path}: {last_error}") from last_error


class RotationStore:
    """Side channel holding a rotated refresh token for an out-of-band update."""

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def save(self, refresh_token: str) -> None:
        _write_text_atomic(self._path, refresh_token, mode=0o600)
        logger.info("Recorded rotated refresh token in %s", self._path)

    def load(self) -> Optional[str]:
        try:
            value = self._path.read_text(encoding="utf-8").strip()
        except FileNotFoundError:
            return None
        return value or None


__all__ = ["PayloadWriteError", "PayloadWriter", "RotationStore"]
