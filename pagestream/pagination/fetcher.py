import asyncio
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Generic, TypeVar

from pydantic import ValidationError

from pagestream.clients.http import PageClient
from pagestream.core.exceptions import DecodeFailure, ProtocolViolation
from pagestream.core.logging import LogContext, PerformanceLogger
from pagestream.models.page import (
    OffsetPageResponseDTO,
    Page,
    PageRequest,
    PageResponseDTO,
)
from pagestream.utils.query import encode_offset_query, encode_page_number_query

logger = LogContext(__name__)

T = TypeVar("T")


class PageFetcher(ABC, Generic[T]):
    """Issues one page request and decodes it. Holds no state between calls."""

    @abstractmethod
    async def fetch(self, request: PageRequest) -> Page[T]:
        pass


class OffsetPageFetcher(PageFetcher[str]):
    """Fetches pages from a source that speaks `start`/`count`"""

    def __init__(self, client: PageClient, endpoint: str):
        self.client = client
        self.endpoint = endpoint

    async def fetch(self, request: PageRequest) -> Page[str]:
        params = encode_offset_query(request)
        with PerformanceLogger(
            logger, "fetch_offset_page", extra={"start": request.start, "count": request.count}
        ):
            payload = await self.client.get_json(self.endpoint, params)
            return _decode(payload, lambda: OffsetPageResponseDTO.model_validate(payload).to_page())


class PageNumberPageFetcher(PageFetcher[str]):
    """
    Fetches pages from a source that speaks `page_number`/`count`.

    Requests always ask for the fixed page size so page numbers stay aligned;
    the source is trusted to return a short final page.
    """

    def __init__(self, client: PageClient, endpoint: str, page_size: int):
        if page_size <= 0:
            raise ValueError(f"Page size must be positive, got {page_size}")
        self.client = client
        self.endpoint = endpoint
        self.page_size = page_size

    def page_number_for(self, request: PageRequest) -> int:
        if request.start % self.page_size != 0:
            raise ProtocolViolation(
                f"Offset {request.start} is not aligned to page size {self.page_size}",
                start=request.start,
                page_size=self.page_size,
            )
        return request.start // self.page_size + 1

    async def fetch(self, request: PageRequest) -> Page[str]:
        page_number = self.page_number_for(request)
        params = encode_page_number_query(page_number, self.page_size)
        with PerformanceLogger(
            logger, "fetch_numbered_page", extra={"page_number": page_number}
        ):
            payload = await self.client.get_json(self.endpoint, params)
            return _decode(
                payload,
                lambda: PageResponseDTO.model_validate(payload).to_page(self.page_size),
            )


class ThreadedPageFetcher(PageFetcher[T]):
    """
    Adapts a blocking `fetch_page(request) -> Page` callable.

    The call runs on a worker thread; the result is delivered back to the
    awaiting event loop, so callers only ever see it on their own loop.
    """

    def __init__(self, fetch_page: Callable[[PageRequest], Page[T]]):
        self.fetch_page = fetch_page

    async def fetch(self, request: PageRequest) -> Page[T]:
        return await asyncio.to_thread(self.fetch_page, request)


def _decode(payload: Dict[str, Any], build: Callable[[], Page[str]]) -> Page[str]:
    try:
        return build()
    except ValidationError as e:
        raise DecodeFailure(
            detail=f"Malformed page payload: {e.error_count()} validation errors",
            payload=payload,
        ) from e
