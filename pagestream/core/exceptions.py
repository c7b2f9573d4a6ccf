from typing import Dict, Any


class PaginationError(Exception):
    """Base exception class for pagination errors"""

    def __init__(
        self,
        detail: str,
        error_code: str,
        additional_info: Dict[str, Any] | None = None,
    ):
        super().__init__(detail)
        self.detail = detail
        self.error_code = error_code
        self.additional_info = additional_info or {}


class TransportFailure(PaginationError):
    """Raised when a page request could not be completed by the transport"""

    def __init__(
        self,
        detail: str,
        status_code: int | None = None,
        host: str | None = None,
    ):
        additional_info: Dict[str, Any] = {}
        if host:
            additional_info["host"] = host
        if status_code is not None:
            additional_info["status_code"] = status_code
        super().__init__(
            detail=detail,
            error_code="TRANSPORT_FAILURE",
            additional_info=additional_info,
        )
        self.status_code = status_code


class DecodeFailure(PaginationError):
    """Raised when a page payload is malformed"""

    def __init__(self, detail: str, payload: Any = None):
        additional_info = {"payload": payload} if payload is not None else {}
        super().__init__(
            detail=detail,
            error_code="DECODE_FAILURE",
            additional_info=additional_info,
        )


class ProtocolViolation(PaginationError):
    """Raised when pagination bookkeeping would be desynchronised.

    This is a programming error and is never recovered from.
    """

    def __init__(self, detail: str, **context: Any):
        super().__init__(
            detail=detail,
            error_code="PROTOCOL_VIOLATION",
            additional_info=dict(context),
        )
