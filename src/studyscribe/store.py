"""Session persistence.

The pipeline only touches four fields of a session (transcript, transcript
language, summary and summary status). Anything that can load a record and
apply a partial update can serve as a store.
"""

from __future__ import annotations

import abc
import dataclasses
import json
import os
import re
import tempfile
import threading
from dataclasses import dataclass
from pathlib import Path

from studyscribe.errors import NotFoundError, PersistenceError, ValidationError
from studyscribe.status import SummaryStatus

_SESSION_ID_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_.-]{0,127}$")

_UPDATABLE_FIELDS = frozenset({"transcript", "transcript_lang", "summary", "summary_status"})


@dataclass
class SessionRecord:
    session_id: str
    transcript: str | None = None
    transcript_lang: str | None = None
    summary: str | None = None
    summary_status: SummaryStatus | None = None

    def to_dict(self) -> dict:
        data = dataclasses.asdict(self)
        if self.summary_status is not None:
            data["summary_status"] = self.summary_status.value
        return data

    @classmethod
    def from_dict(cls, data: dict) -> SessionRecord:
        status = data.get("summary_status")
        return cls(
            session_id=data["session_id"],
            transcript=data.get("transcript"),
            transcript_lang=data.get("transcript_lang"),
            summary=data.get("summary"),
            summary_status=SummaryStatus(status) if status else None,
        )


def validate_session_id(session_id: str) -> str:
    if not isinstance(session_id, str) or not _SESSION_ID_RE.match(session_id):
        raise ValidationError(f"Invalid session id: {session_id!r}")
    return session_id


class SessionStore(abc.ABC):
    """Base class for session stores."""

    @abc.abstractmethod
    def create(self, session_id: str) -> SessionRecord:
        """Create an empty session record. Existing records are returned unchanged."""

    @abc.abstractmethod
    def load(self, session_id: str) -> SessionRecord:
        """Return a copy of the record, raising NotFoundError if it is missing."""

    @abc.abstractmethod
    def _save(self, record: SessionRecord) -> None:
        """Persist the whole record."""

    def exists(self, session_id: str) -> bool:
        try:
            self.load(session_id)
        except NotFoundError:
            return False
        return True

    def update(self, session_id: str, **fields) -> SessionRecord:
        """Apply a partial update and return the stored record."""
        unknown = set(fields) - _UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Unknown session fields: {', '.join(sorted(unknown))}")
        record = self.load(session_id)
        record = dataclasses.replace(record, **fields)
        self._save(record)
        return record


class MemorySessionStore(SessionStore):
    """Keeps sessions in a dict. Used by tests and embedding applications."""

    def __init__(self) -> None:
        self._records: dict[str, SessionRecord] = {}
        self._lock = threading.Lock()

    def create(self, session_id: str) -> SessionRecord:
        validate_session_id(session_id)
        with self._lock:
            record = self._records.setdefault(session_id, SessionRecord(session_id=session_id))
            return dataclasses.replace(record)

    def load(self, session_id: str) -> SessionRecord:
        with self._lock:
            if session_id not in self._records:
                raise NotFoundError(session_id)
            return dataclasses.replace(self._records[session_id])

    def _save(self, record: SessionRecord) -> None:
        with self._lock:
            self._records[record.session_id] = dataclasses.replace(record)


class JsonSessionStore(SessionStore):
    """One JSON file per session under a directory."""

    def __init__(self, directory: Path) -> None:
        self._dir = Path(directory)

    @property
    def directory(self) -> Path:
        return self._dir

    def _path(self, session_id: str) -> Path:
        return self._dir / f"{validate_session_id(session_id)}.json"

    def create(self, session_id: str) -> SessionRecord:
        path = self._path(session_id)
        if path.exists():
            return self.load(session_id)
        record = SessionRecord(session_id=session_id)
        self._save(record)
        return record

    def load(self, session_id: str) -> SessionRecord:
        path = self._path(session_id)
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            raise NotFoundError(session_id) from None
        except (OSError, ValueError) as exc:
            raise PersistenceError(f"Could not read session {session_id}: {exc}") from exc
        try:
            return SessionRecord.from_dict(data)
        except (KeyError, TypeError, ValueError) as exc:
            raise PersistenceError(f"Corrupt session file {path}: {exc}") from exc

    def _save(self, record: SessionRecord) -> None:
        path = self._path(record.session_id)
        try:
            self._dir.mkdir(parents=True, exist_ok=True)
            # Write to a sibling temp file and rename so readers never see a partial file
            fd, tmp = tempfile.mkstemp(dir=self._dir, prefix=f".{record.session_id}.", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(record.to_dict(), f, ensure_ascii=False, indent=2)
                os.replace(tmp, path)
            except BaseException:
                Path(tmp).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise PersistenceError(f"Could not write session {record.session_id}: {exc}") from exc
