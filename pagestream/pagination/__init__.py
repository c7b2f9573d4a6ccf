from .cursor import PageCursor
from .fetcher import (
    PageFetcher,
    OffsetPageFetcher,
    PageNumberPageFetcher,
    ThreadedPageFetcher,
)
from .controller import FetchState, PaginationController, PaginationSnapshot

__all__ = [
    "PageCursor",
    "PageFetcher",
    "OffsetPageFetcher",
    "PageNumberPageFetcher",
    "ThreadedPageFetcher",
    "FetchState",
    "PaginationController",
    "PaginationSnapshot",
]
