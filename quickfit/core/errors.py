"""Error taxonomy for the workout core.

None of these escape the engine or controller: callers see a fallback value
or an unchanged state instead.
"""

from __future__ import annotations


class WorkoutStateError(Exception):
    """Base class for recoverable workout core errors."""


class NotFoundError(WorkoutStateError, LookupError):
    """A referenced section or exercise index does not exist."""


class InvalidStateError(WorkoutStateError):
    """An operation needs an active session and there is none."""


class MalformedStateError(WorkoutStateError, ValueError):
    """Persisted state is corrupt or has an unexpected shape."""
