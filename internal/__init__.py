from internal.logging import LogLevel, StructuredLogger, get_logger
from utils.timestamp import now_millis, format_timestamp
from core.errors import AshidError, DomainError

__all__ = [
    "LogLevel",
    "StructuredLogger",
    "get_logger",
    "now_millis",
    "format_timestamp",
    "AshidError",
    "DomainError",
]
