from typing import Generic, List, TypeVar
from pydantic import BaseModel, ConfigDict, Field, model_validator


T = TypeVar("T")


class PageRequest(BaseModel):
    """
    Parameters of the next page to request

    Attributes:
        start: Offset of the first item to request (0-based)
        count: Number of items to request
    """

    model_config = ConfigDict(frozen=True)

    start: int = Field(ge=0)
    count: int = Field(gt=0)


class Page(BaseModel, Generic[T]):
    """
    A downloaded page in offset-counting form

    Attributes:
        items: Items of this page in source order
        start_offset: Offset of the first item of this page
        item_count: Number of items received
        total_item_count: Total number of items known to exist
    """

    model_config = ConfigDict(frozen=True)

    items: List[T]
    start_offset: int = Field(ge=0)
    item_count: int = Field(ge=0)
    total_item_count: int = Field(ge=0)

    @model_validator(mode="after")
    def check_item_count(self) -> "Page[T]":
        if self.item_count != len(self.items):
            raise ValueError(
                f"item_count {self.item_count} does not match {len(self.items)} items"
            )
        return self

    @property
    def reached_end(self) -> bool:
        """True when this page holds every item remaining from its start offset"""
        return self.total_item_count - self.start_offset == self.item_count

    @classmethod
    def from_page_counting(
        cls,
        items: List[T],
        current_page: int,
        total_pages: int,
        page_size: int,
    ) -> "Page[T]":
        """
        Translate a page-counting response into offset-counting form.

        The total is `total_pages * page_size` except on the final page, where
        it is pinned to the exact number of items seen so a short final page
        still satisfies `total - start == count`.
        """
        start = (current_page - 1) * page_size
        if current_page >= total_pages or len(items) < page_size:
            total = start + len(items)
        else:
            total = total_pages * page_size

        return cls(
            items=items,
            start_offset=start,
            item_count=len(items),
            total_item_count=total,
        )


class PageResponseDTO(BaseModel):
    """Page-counting wire payload: {items, currentPage, totalPages}"""

    model_config = ConfigDict(populate_by_name=True)

    items: List[str]
    current_page: int = Field(alias="currentPage", ge=1)
    total_pages: int = Field(alias="totalPages", ge=0)

    def to_page(self, page_size: int) -> Page[str]:
        return Page[str].from_page_counting(
            self.items, self.current_page, self.total_pages, page_size
        )


class OffsetPageResponseDTO(BaseModel):
    """Offset-counting wire payload: {items, start, count, total}"""

    items: List[str]
    start: int = Field(ge=0)
    count: int = Field(ge=0)
    total: int = Field(ge=0)

    def to_page(self) -> Page[str]:
        return Page[str](
            items=self.items,
            start_offset=self.start,
            item_count=self.count,
            total_item_count=self.total,
        )
