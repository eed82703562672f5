from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


class PageRequest(BaseModel):
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE

    @classmethod
    def from_token(
        cls, page_token: Optional[str], page_size: Optional[int]
    ) -> "PageRequest":
        """Build a request from raw input, falling back to defaults.

        A missing, unparsable or non-positive token means page 1; a page
        size outside 1..100 means 20.
        """
        page = 1
        if page_token:
            try:
                page = int(page_token.strip())
            except ValueError:
                page = 1
        if page < 1:
            page = 1

        if page_size is None or page_size < 1 or page_size > MAX_PAGE_SIZE:
            page_size = DEFAULT_PAGE_SIZE

        return cls(page=page, page_size=page_size)


class PageResult(BaseModel, Generic[T]):
    """One page of results. ``total_count`` is never known."""

    items: List[T] = Field(default_factory=list)
    next_page_token: Optional[str] = None
    page_size: int = DEFAULT_PAGE_SIZE
    total_count: Optional[int] = None

    @property
    def has_next_page(self) -> bool:
        return self.next_page_token is not None
