import pytest

from pagestream.core.exceptions import (
    PaginationError,
    TransportFailure,
    DecodeFailure,
    ProtocolViolation,
)


class TestPaginationError:
    def test_pagination_error(self):
        exception = PaginationError(
            detail="Test error",
            error_code="TEST_ERROR",
            additional_info={"test": "info"},
        )

        assert str(exception) == "Test error"
        assert exception.detail == "Test error"
        assert exception.error_code == "TEST_ERROR"
        assert exception.additional_info == {"test": "info"}

    def test_pagination_error_with_default_additional_info(self):
        exception = PaginationError(detail="Test error", error_code="TEST_ERROR")

        assert exception.additional_info == {}


class TestSpecificExceptions:
    def test_transport_failure(self):
        exception = TransportFailure(detail="Failed to connect")
        assert exception.detail == "Failed to connect"
        assert exception.error_code == "TRANSPORT_FAILURE"
        assert exception.status_code is None
        assert exception.additional_info == {}

        exception = TransportFailure(
            detail="Failed to connect", status_code=503, host="example.com"
        )
        assert exception.status_code == 503
        assert exception.additional_info == {"host": "example.com", "status_code": 503}

    def test_decode_failure(self):
        exception = DecodeFailure(detail="Not JSON", payload="<html>")

        assert exception.error_code == "DECODE_FAILURE"
        assert exception.additional_info == {"payload": "<html>"}
        assert DecodeFailure(detail="Not JSON").additional_info == {}

    def test_protocol_violation_keeps_context(self):
        exception = ProtocolViolation("Page overruns total", count=10, total=5)

        assert exception.error_code == "PROTOCOL_VIOLATION"
        assert exception.additional_info == {"count": 10, "total": 5}

    @pytest.mark.parametrize(
        "exception",
        [
            TransportFailure(detail="x"),
            DecodeFailure(detail="x"),
            ProtocolViolation("x"),
        ],
    )
    def test_all_share_base_class(self, exception):
        assert isinstance(exception, PaginationError)
