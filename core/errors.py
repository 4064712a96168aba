"""Custom errors carrying context for diagnostics."""

from utils.timestamp import format_timestamp


class AshidError(Exception):
    """Base error with a timestamp and context for tracking."""

    def __init__(self, message, context=None, cause=None):
        super().__init__(message)
        self.timestamp = format_timestamp()
        self.context = context or {}
        self.cause = cause

    def to_dict(self):
        return {"error": str(self), "context": self.context}


class DomainError(AshidError, ValueError):
    """Validation or format violation (bad field, bound, or character)."""

    def __init__(self, message, field=None, value=None, **kwargs):
        context = kwargs.pop("context", {})
        if field:
            context["field"] = field
        if value is not None:
            context["value"] = value
        super().__init__(message, context=context, **kwargs)
