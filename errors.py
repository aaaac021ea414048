"""Exception types raised by the solving engine.

All of them are recoverable: they are raised before any session state is
touched, so the caller can simply ask for new input.
"""

from __future__ import annotations


class SolverError(Exception):
    """Base class for every error the engine reports."""


class FormatError(SolverError, ValueError):
    """A feedback digit string (or other encoded value) is malformed."""


class ValidationError(SolverError, ValueError):
    """A word has the wrong length or contains characters outside a-z."""


class SessionTerminatedError(SolverError, RuntimeError):
    """``advance`` was called on a session that is already solved or exhausted."""
