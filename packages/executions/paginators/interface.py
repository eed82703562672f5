from abc import ABC, abstractmethod
from typing import AsyncIterator, Callable, TypeVar

from packages.executions.models.domain.page import PageRequest, PageResult

T = TypeVar("T")

# (skip, limit) -> stream of at most ``limit`` items starting after ``skip``
FetchItems = Callable[[int, int], AsyncIterator[T]]


class PaginatorInterface(ABC):
    """Strategy for serving page-number pagination from a remote stream."""

    @abstractmethod
    async def paginate(
        self, fetch: FetchItems, request: PageRequest
    ) -> PageResult:
        pass
