from typing import Any, Generic, NamedTuple, TypeVar

from pagestream.pagination.controller import PaginationController

T = TypeVar("T")


class Row(NamedTuple):
    index: int
    item: Any
    is_sentinel: bool


class ListBinding(Generic[T]):
    """
    What a scrolling list asks of the controller.

    Rows 0..n-1 are the accumulated items; row n, while more data may exist,
    is the load-more sentinel. Rendering the sentinel is what pulls the next
    page.
    """

    def __init__(self, controller: PaginationController[T]):
        self.controller = controller

    def row_count(self) -> int:
        return self.controller.presented_count

    def is_sentinel(self, index: int) -> bool:
        return self.controller.show_sentinel and index == len(self.controller.items)

    def row_at(self, index: int) -> Row:
        """
        Row to render at `index`. Rendering the sentinel triggers `load_more()`.

        Raises:
            IndexError: If the index is outside the presented rows
        """
        items = self.controller.items
        if self.is_sentinel(index):
            self.controller.load_more()
            return Row(index=index, item=None, is_sentinel=True)
        if not 0 <= index < len(items):
            raise IndexError(f"Row {index} out of range for {self.row_count()} rows")
        return Row(index=index, item=items[index], is_sentinel=False)

    def sentinel_visible(self) -> None:
        """Signal that the sentinel row scrolled into view"""
        if self.controller.show_sentinel:
            self.row_at(len(self.controller.items))
