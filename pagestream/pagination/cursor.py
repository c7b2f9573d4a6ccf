from typing import Optional

from pagestream.core.exceptions import ProtocolViolation
from pagestream.models.page import PageRequest


class PageCursor:
    """
    Bookkeeping for "what page to request next" and "are we done".

    The cursor starts optimistic: more items are assumed to exist until a
    recorded page proves otherwise. It performs no I/O and trusts its single
    writer to record pages in the order they were handed out.
    """

    def __init__(self, page_size: int, start_index: int = 0):
        if page_size <= 0:
            raise ValueError(f"Page size must be positive, got {page_size}")
        if start_index < 0:
            raise ValueError(f"Start index must not be negative, got {start_index}")

        self._page_size = page_size
        self._next_start = start_index
        self._reached_end = False

    @property
    def page_size(self) -> int:
        return self._page_size

    @property
    def next_start(self) -> int:
        return self._next_start

    @property
    def reached_end(self) -> bool:
        return self._reached_end

    def more_available(self) -> bool:
        return not self._reached_end

    def next_request_parameters(self) -> Optional[PageRequest]:
        """
        Parameters of the next page to request

        Returns:
            The next page request, or None once the last page was recorded
        """
        if not self.more_available():
            return None
        return PageRequest(start=self._next_start, count=self._page_size)

    def record_page(self, count: int, start: int, total: int) -> None:
        """
        Fold a downloaded page into the cursor

        Args:
            count: Number of items received
            start: Offset that was requested for this page
            total: Total number of items known to exist

        Raises:
            ProtocolViolation: If the page would move the cursor backwards or
                past the total item count
        """
        if count < 0 or start < 0:
            raise ProtocolViolation(
                "Page count and start must not be negative",
                count=count,
                start=start,
                total=total,
            )

        next_start = start + count
        remaining = total - next_start
        if remaining < 0:
            raise ProtocolViolation(
                f"Page of {count} items at {start} overruns total of {total}",
                count=count,
                start=start,
                total=total,
            )
        if next_start < self._next_start:
            raise ProtocolViolation(
                f"Page ending at {next_start} precedes downloaded offset {self._next_start}",
                count=count,
                start=start,
                total=total,
            )

        self._next_start = next_start
        # remaining is zero exactly when this was the last page
        self._page_size = min(remaining, self._page_size)
        self._reached_end = self._reached_end or (total - start) == count

    def downloaded_count(self) -> int:
        return self._next_start

    def __repr__(self) -> str:
        return (
            f"PageCursor(page_size={self._page_size}, "
            f"next_start={self._next_start}, reached_end={self._reached_end})"
        )
