"""Errors raised by the ID generator and its collaborators."""

from utils.timestamp import format_timestamp


class BaseIdError(Exception):
    """Base error with timestamp and context for tracking."""

    def __init__(self, message, context=None, cause=None):
        super().__init__(message)
        self.timestamp = format_timestamp()
        self.context = context or {}
        self.cause = cause


class SeedError(BaseIdError):
    """Secure seed source failed or returned unusable key material."""

    def __init__(self, message, expected=None, **kwargs):
        context = kwargs.pop("context", {})
        if expected is not None:
            context["expected"] = expected
        super().__init__(message, context=context, **kwargs)


class DecodeError(BaseIdError, ValueError):
    """Text is not a valid encoded identifier."""

    def __init__(self, message, value=None, position=None, **kwargs):
        context = kwargs.pop("context", {})
        if position is not None:
            context["position"] = position
        super().__init__(message, context=context, **kwargs)
        self.value = value
        self.position = position


class ClockRangeError(BaseIdError):
    """Clock reading falls outside the 32-bit timestamp window."""

    def __init__(self, message, seconds=None, **kwargs):
        context = kwargs.pop("context", {})
        if seconds is not None:
            context["seconds"] = seconds
        super().__init__(message, context=context, **kwargs)


class InvariantError(BaseIdError):
    """Internal state is inconsistent. Never retried."""
