"""Error taxonomy for the blending pipeline."""

from __future__ import annotations


class WriteMotionError(Exception):
    """Base class for pipeline errors."""


class GenerationFailed(WriteMotionError):
    """The oracle was unreachable or returned a malformed or empty payload."""


class ShapeInvalid(WriteMotionError):
    """The payload parsed but failed required-field or enum validation."""


class GenerationRefused(WriteMotionError):
    """A request was refused before being issued (precondition not met)."""
