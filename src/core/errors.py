"""Exception hierarchy for medusa-sync.

Only failures that abort a whole run are exceptions for the host
(configuration, login, cassette problems). HTTP failures of single lifecycle
operations are reported as `Diagnostic` values instead.
"""

from __future__ import annotations


class MedusaSyncError(Exception):
    """Root of every error raised by this package."""


class ConfigurationError(MedusaSyncError):
    """Provider configuration is incomplete or invalid."""

    def __init__(self, message: str, *, missing: list[str] | None = None) -> None:
        super().__init__(message)
        self.missing = missing or []


class AuthError(MedusaSyncError):
    """The login exchange failed; no session can be created."""

    def __init__(self, summary: str, detail: str) -> None:
        super().__init__(f"{summary}: {detail}")
        self.summary = summary
        self.detail = detail


class CassetteError(MedusaSyncError):
    """A cassette could not be loaded, or a replayed request has no recording."""


class DecodeError(MedusaSyncError):
    """A success response carried no usable payload."""
