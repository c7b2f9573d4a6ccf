from .exceptions import (
    PaginationError,
    TransportFailure,
    DecodeFailure,
    ProtocolViolation,
)
from .logging import setup_logging

__all__ = [
    "PaginationError",
    "TransportFailure",
    "DecodeFailure",
    "ProtocolViolation",
    "setup_logging",
]
