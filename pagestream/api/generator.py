import asyncio
import math
import random
from typing import List

from pagestream.constants import MOCK_ITEM_PREFIX
from pagestream.models.page import OffsetPageResponseDTO, PageResponseDTO


class EndOfPagesError(Exception):
    """Raised when a page past the last one is requested"""

    pass


class ItemsGenerator:
    """
    Imitates what a paginated server would send back.

    Items are named "Item number: N" with N counted from 1.
    """

    def __init__(
        self,
        total_items: int,
        min_latency: float = 0.0,
        max_latency: float = 0.0,
    ):
        if total_items < 0:
            raise ValueError(f"Total items must not be negative, got {total_items}")
        if min_latency > max_latency:
            raise ValueError("Minimum latency must not exceed maximum latency")
        self.total_items = total_items
        self.min_latency = min_latency
        self.max_latency = max_latency

    def _items(self, start: int, count: int) -> List[str]:
        end = min(start + count, self.total_items)
        return [f"{MOCK_ITEM_PREFIX}{i + 1}" for i in range(start, end)]

    def total_pages(self, page_size: int) -> int:
        return math.ceil(self.total_items / page_size)

    def page_number_page(self, page_number: int, page_size: int) -> PageResponseDTO:
        total_pages = self.total_pages(page_size)
        if page_number > max(total_pages, 1):
            raise EndOfPagesError(f"Page {page_number} of {total_pages}")

        start = (page_number - 1) * page_size
        return PageResponseDTO(
            items=self._items(start, page_size),
            current_page=page_number,
            total_pages=total_pages,
        )

    def offset_page(self, start: int, count: int) -> OffsetPageResponseDTO:
        items = self._items(start, count)
        return OffsetPageResponseDTO(
            items=items,
            start=start,
            count=len(items),
            total=self.total_items,
        )

    async def simulate_latency(self) -> None:
        # Imitating delay in server response
        if self.max_latency <= 0:
            return
        await asyncio.sleep(random.uniform(self.min_latency, self.max_latency))
