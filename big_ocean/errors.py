"""Exception types raised outside the pure scoring functions."""

from __future__ import annotations


class BigOceanError(Exception):
    """Base class for application errors."""


class SessionCompletedError(BigOceanError):
    """Raised when evidence is applied to a session that is already completed."""

    def __init__(self, session_id: str):
        super().__init__(f"Assessment session {session_id!r} is completed and read-only.")
        self.session_id = session_id


class SessionNotCompletedError(BigOceanError):
    """Raised when results are requested from a session still in progress."""

    def __init__(self, session_id: str):
        super().__init__(f"Assessment session {session_id!r} is not completed yet.")
        self.session_id = session_id
