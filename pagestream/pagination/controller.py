import asyncio
import uuid
from enum import Enum
from typing import Callable, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict

from pagestream.core.exceptions import ProtocolViolation
from pagestream.core.logging import LogContext, add_correlation_id, set_session_id
from pagestream.models.page import Page, PageRequest
from pagestream.pagination.cursor import PageCursor
from pagestream.pagination.fetcher import PageFetcher

logger = LogContext(__name__)

T = TypeVar("T")


class FetchState(str, Enum):
    IDLE = "idle"
    IN_FLIGHT = "in_flight"
    EXHAUSTED = "exhausted"
    HALTED = "halted"


class PaginationSnapshot(BaseModel, Generic[T]):
    """
    Accumulated state published to observers

    Attributes:
        items: All items downloaded so far, in source order
        show_sentinel: Whether a load-more row should be presented
        state: Fetch state at the time of publishing
    """

    model_config = ConfigDict(frozen=True)

    items: List[T]
    show_sentinel: bool
    state: FetchState


Observer = Callable[[PaginationSnapshot], None]
ErrorReporter = Callable[[Exception], None]


class PaginationController(Generic[T]):
    """
    Drives a PageCursor and a PageFetcher for one pagination session.

    All state lives on the event loop the controller was created on. At most
    one fetch is in flight at any time; extra `load_more()` calls while a fetch
    is pending, or after the last page, are no-ops. A ProtocolViolation halts
    the session for good and is passed to the error reporter.
    """

    def __init__(
        self,
        fetcher: PageFetcher[T],
        page_size: int,
        start_index: int = 0,
        on_error: ErrorReporter | None = None,
        loop: asyncio.AbstractEventLoop | None = None,
    ):
        self.fetcher = fetcher
        self.page_size = page_size
        self.start_index = start_index
        self.on_error = on_error
        self.session_id = uuid.uuid4().hex[:12]

        self._loop = loop if loop is not None else asyncio.get_running_loop()
        self._cursor = PageCursor(page_size, start_index)
        self._items: List[T] = []
        self._state = FetchState.IDLE
        self._observers: List[Observer] = []
        self._generation = 0
        self._closed = False
        self._task: Optional[asyncio.Task] = None

    @property
    def state(self) -> FetchState:
        return self._state

    @property
    def items(self) -> List[T]:
        return list(self._items)

    @property
    def cursor(self) -> PageCursor:
        return self._cursor

    @property
    def is_closed(self) -> bool:
        return self._closed

    @property
    def show_sentinel(self) -> bool:
        return self._state not in (FetchState.EXHAUSTED, FetchState.HALTED)

    @property
    def presented_count(self) -> int:
        """Number of rows to present: every item plus the load-more row, if any"""
        return len(self._items) + (1 if self.show_sentinel else 0)

    def snapshot(self) -> PaginationSnapshot[T]:
        return PaginationSnapshot(
            items=list(self._items),
            show_sentinel=self.show_sentinel,
            state=self._state,
        )

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        """
        Register an observer. It receives the current snapshot immediately and
        every snapshot published afterwards.

        Returns:
            A callable that removes the observer again
        """
        self._observers.append(observer)
        self._deliver(observer, self.snapshot())

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    def load_more(self) -> Optional[asyncio.Task]:
        """
        Request the next page unless one is already pending or none is left.

        Calls from another thread are marshalled onto the session loop.

        Returns:
            The task running the fetch, or None when the call was a no-op or
            was handed over to the session loop
        """
        if not self._on_session_loop():
            self._loop.call_soon_threadsafe(self.load_more)
            return None

        if self._closed or self._state is not FetchState.IDLE:
            return None

        request = self._cursor.next_request_parameters()
        if request is None:
            self._set_state(FetchState.EXHAUSTED)
            return None

        self._set_state(FetchState.IN_FLIGHT)
        self._task = self._loop.create_task(self._fetch(request, self._generation))
        return self._task

    def reset(self) -> None:
        """Start over with a fresh cursor and an empty result"""
        if self._closed:
            return

        self._generation += 1
        self._cancel_pending()
        self._cursor = PageCursor(self.page_size, self.start_index)
        self._items = []
        self._set_state(FetchState.IDLE)
        logger.info(
            "Pagination session reset",
            extra={"session_id": self.session_id, "generation": self._generation},
        )
        self._notify()

    def close(self) -> None:
        """End the session. A pending completion is discarded."""
        if self._closed:
            return
        self._closed = True
        self._cancel_pending()
        self._observers.clear()
        logger.debug("Pagination session closed", extra={"session_id": self.session_id})

    async def join(self) -> None:
        """Wait for the pending fetch, if any, to settle"""
        task = self._task
        if task is None or task.done():
            return
        try:
            await task
        except asyncio.CancelledError:
            pass

    async def _fetch(self, request: PageRequest, generation: int) -> None:
        set_session_id(self.session_id)
        add_correlation_id("generation", generation)
        logger.debug(
            "Fetching page",
            extra={"start": request.start, "count": request.count},
        )

        try:
            page = await self.fetcher.fetch(request)
        except ProtocolViolation as e:
            if self._is_stale(generation):
                return
            self._halt(e)
            raise
        except Exception as e:
            if self._is_stale(generation):
                return
            self._set_state(FetchState.IDLE)
            self._report(e, request)
            return

        if self._is_stale(generation):
            logger.debug(
                "Discarding page for ended session",
                extra={"start": request.start, "generation": generation},
            )
            return

        self._apply(request, page)

    def _apply(self, request: PageRequest, page: Page[T]) -> None:
        try:
            if page.start_offset != request.start:
                raise ProtocolViolation(
                    f"Received page at {page.start_offset}, requested {request.start}",
                    requested_start=request.start,
                    received_start=page.start_offset,
                )
            self._cursor.record_page(
                count=page.item_count,
                start=request.start,
                total=page.total_item_count,
            )
        except ProtocolViolation as e:
            self._halt(e)
            raise

        self._items.extend(page.items)
        if self._cursor.more_available():
            self._set_state(FetchState.IDLE)
        else:
            self._set_state(FetchState.EXHAUSTED)

        logger.info(
            "Page recorded",
            extra={
                "start": request.start,
                "received": page.item_count,
                "total": page.total_item_count,
                "last_page": page.reached_end,
                "downloaded": self._cursor.downloaded_count(),
            },
        )
        self._notify()

    def _report(self, error: Exception, request: PageRequest) -> None:
        logger.warning(
            "Page fetch failed",
            extra={
                "start": request.start,
                "count": request.count,
                "error_type": error.__class__.__name__,
                "error": str(error),
            },
        )
        self._forward(error)

    def _forward(self, error: Exception) -> None:
        if self.on_error is None:
            return
        try:
            self.on_error(error)
        except Exception:
            logger.exception("Error reporter raised")

    def _halt(self, error: ProtocolViolation) -> None:
        logger.error(
            "Pagination halted",
            extra={"session_id": self.session_id, **error.additional_info},
            exc_info=True,
        )
        self._set_state(FetchState.HALTED)
        self._notify()
        self._forward(error)
        self._closed = True
        self._observers.clear()

    def _notify(self) -> None:
        snapshot = self.snapshot()
        for observer in list(self._observers):
            self._deliver(observer, snapshot)

    def _deliver(self, observer: Observer, snapshot: PaginationSnapshot[T]) -> None:
        try:
            observer(snapshot)
        except Exception:
            logger.exception("Observer raised while handling snapshot")

    def _set_state(self, state: FetchState) -> None:
        if state is not self._state:
            logger.debug(
                "Fetch state changed",
                extra={"from_state": self._state.value, "to_state": state.value},
            )
        self._state = state

    def _is_stale(self, generation: int) -> bool:
        return self._closed or generation != self._generation

    def _cancel_pending(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

    def _on_session_loop(self) -> bool:
        try:
            return asyncio.get_running_loop() is self._loop
        except RuntimeError:
            return False
