"""Exceptions raised by the summarization pipeline."""

from __future__ import annotations


class StudyscribeError(Exception):
    """Base class for all studyscribe errors."""


class ValidationError(StudyscribeError):
    """A submission or upload was malformed. Nothing was mutated."""


class NotFoundError(StudyscribeError):
    """The referenced session does not exist."""

    def __init__(self, session_id: str) -> None:
        super().__init__(f"Session not found: {session_id}")
        self.session_id = session_id


class UpstreamUnavailable(StudyscribeError):
    """An external service (speech-to-text or remote summarizer) failed."""

    def __init__(self, message: str, details: str = "") -> None:
        super().__init__(message)
        self.details = details


class PersistenceError(StudyscribeError):
    """The session store could not be read or written."""


class InvalidTransitionError(StudyscribeError):
    """A summary status change that the state machine does not allow."""
