from collections.abc import Sequence
from typing import Generic, TypeVar

T = TypeVar("T")

DEFAULT_PAGE_SIZE = 5


def paginate(items: Sequence[T], page_size: int = DEFAULT_PAGE_SIZE) -> list[list[T]]:
    """Split ``items`` into consecutive pages of ``page_size``.

    The last page may be short. No items means no pages, not one empty page.
    """
    if page_size < 1:
        raise ValueError("page_size must be at least 1")
    return [list(items[start : start + page_size]) for start in range(0, len(items), page_size)]


class Paginator(Generic[T]):
    """Carousel pages plus the index of the page on screen.

    The index is kept within ``[0, page_count - 1]`` (0 when empty) no matter
    how it is moved or how the items are replaced.
    """

    def __init__(self, items: Sequence[T] = (), page_size: int = DEFAULT_PAGE_SIZE) -> None:
        self.page_size = page_size
        self._pages: list[list[T]] = paginate(items, page_size)
        self._index = 0

    @property
    def pages(self) -> list[list[T]]:
        return self._pages

    @property
    def page_count(self) -> int:
        return len(self._pages)

    @property
    def current_index(self) -> int:
        return self._index

    @property
    def current_page(self) -> list[T]:
        if not self._pages:
            return []
        return self._pages[self._index]

    def _clamp(self, index: int) -> int:
        if not self._pages:
            return 0
        return max(0, min(index, self.page_count - 1))

    def replace(self, items: Sequence[T]) -> None:
        self._pages = paginate(items, self.page_size)
        self._index = self._clamp(self._index)

    def jump(self, index: int) -> int:
        self._index = self._clamp(index)
        return self._index

    def next(self) -> int:
        return self.jump(self._index + 1)

    def previous(self) -> int:
        return self.jump(self._index - 1)

    def on_carousel_position(self, index: int) -> int:
        """Sync with a position reported by the carousel widget."""
        return self.jump(index)
