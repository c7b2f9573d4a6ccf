import pytest

from pagestream.core.exceptions import ProtocolViolation
from pagestream.models.page import PageRequest
from pagestream.pagination.cursor import PageCursor

DEFAULT_PAGE_SIZE = 10


@pytest.fixture
def cursor():
    return PageCursor(page_size=DEFAULT_PAGE_SIZE, start_index=0)


class TestInitialState:
    def test_should_provide_initial_request(self, cursor):
        assert cursor.more_available()
        assert cursor.downloaded_count() == 0
        assert cursor.next_request_parameters() == PageRequest(start=0, count=10)

    def test_starts_at_given_index(self):
        cursor = PageCursor(page_size=25, start_index=40)

        assert cursor.more_available()
        assert cursor.downloaded_count() == 40
        assert cursor.next_request_parameters() == PageRequest(start=40, count=25)

    @pytest.mark.parametrize("page_size", [0, -1])
    def test_rejects_non_positive_page_size(self, page_size):
        with pytest.raises(ValueError):
            PageCursor(page_size=page_size)

    def test_rejects_negative_start_index(self):
        with pytest.raises(ValueError):
            PageCursor(page_size=10, start_index=-1)


class TestRecordPage:
    def test_advances_after_first_page(self, cursor):
        cursor.record_page(count=10, start=0, total=81)

        assert cursor.downloaded_count() == 10
        assert cursor.more_available()
        assert cursor.next_request_parameters() == PageRequest(start=10, count=10)

    def test_shrinks_page_size_near_end(self, cursor):
        cursor.record_page(count=10, start=65, total=81)

        assert cursor.downloaded_count() == 75
        assert cursor.more_available()
        assert cursor.next_request_parameters() == PageRequest(start=75, count=6)

    def test_no_request_after_last_page(self, cursor):
        cursor.record_page(count=6, start=75, total=81)

        assert not cursor.more_available()
        assert cursor.downloaded_count() == 81
        assert cursor.next_request_parameters() is None
        assert cursor.downloaded_count() == 81

    def test_full_run_with_uneven_page_size(self):
        cursor = PageCursor(page_size=31, start_index=0)
        seen = []

        while (request := cursor.next_request_parameters()) is not None:
            seen.append((request.start, request.count, cursor.more_available()))
            received = min(request.count, 81 - request.start)
            cursor.record_page(count=received, start=request.start, total=81)

        assert seen == [(0, 31, True), (31, 31, True), (62, 19, True)]
        assert not cursor.more_available()
        assert cursor.downloaded_count() == 81

    def test_empty_source_reaches_end_on_first_page(self, cursor):
        cursor.record_page(count=0, start=0, total=0)

        assert not cursor.more_available()
        assert cursor.next_request_parameters() is None

    def test_downloaded_count_is_start_plus_count(self, cursor):
        cursor.record_page(count=7, start=3, total=100)
        assert cursor.downloaded_count() == 10

    def test_next_start_never_decreases(self, cursor):
        offsets = [cursor.next_start]
        request = cursor.next_request_parameters()
        while request is not None:
            cursor.record_page(
                count=min(request.count, 45 - request.start),
                start=request.start,
                total=45,
            )
            offsets.append(cursor.next_start)
            request = cursor.next_request_parameters()

        assert offsets == sorted(offsets)
        assert offsets[-1] == 45

    def test_reached_end_is_permanent(self, cursor):
        cursor.record_page(count=10, start=0, total=10)
        assert cursor.reached_end

        cursor.record_page(count=0, start=10, total=10)
        assert cursor.reached_end
        assert cursor.next_request_parameters() is None


class TestProtocolViolations:
    def test_overrun_of_total_is_rejected(self, cursor):
        with pytest.raises(ProtocolViolation) as exc_info:
            cursor.record_page(count=10, start=75, total=81)

        assert exc_info.value.error_code == "PROTOCOL_VIOLATION"
        assert exc_info.value.additional_info == {"count": 10, "start": 75, "total": 81}

    def test_state_untouched_after_violation(self, cursor):
        cursor.record_page(count=10, start=0, total=81)

        with pytest.raises(ProtocolViolation):
            cursor.record_page(count=100, start=10, total=81)

        assert cursor.downloaded_count() == 10
        assert cursor.next_request_parameters() == PageRequest(start=10, count=10)

    def test_moving_backwards_is_rejected(self, cursor):
        cursor.record_page(count=10, start=0, total=81)

        with pytest.raises(ProtocolViolation):
            cursor.record_page(count=2, start=5, total=81)

    def test_negative_count_is_rejected(self, cursor):
        with pytest.raises(ProtocolViolation):
            cursor.record_page(count=-1, start=0, total=81)
