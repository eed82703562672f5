from contextlib import aclosing
from typing import List

from common.core.otel_axiom_exporter import get_logger, trace_span
from packages.executions.models.domain.page import PageRequest, PageResult
from packages.executions.paginators.interface import FetchItems, PaginatorInterface

logger = get_logger(__name__)

MIN_FETCH_LIMIT = 100


class OverFetchPaginator(PaginatorInterface):
    """Page-number pagination over a forward-only, uncounted stream.

    The stream is always read from its start (``skip`` is passed as 0) and
    one item past the requested page is buffered to learn whether a next
    page exists. Deep pages therefore re-read every earlier item.
    """

    @trace_span
    async def paginate(self, fetch: FetchItems, request: PageRequest) -> PageResult:
        skip = (request.page - 1) * request.page_size
        min_required = skip + request.page_size + 1
        fetch_limit = max(min_required, MIN_FETCH_LIMIT)

        buffer: List = []
        items_processed = 0
        async with aclosing(fetch(0, fetch_limit)) as stream:
            async for item in stream:
                buffer.append(item)
                items_processed += 1
                if items_processed >= min_required:
                    break

        page_items = buffer[skip : skip + request.page_size]
        has_next_page = len(buffer) > skip + request.page_size or (
            items_processed >= fetch_limit and len(buffer) >= min_required - 1
        )

        logger.debug(
            f"Page {request.page} (size {request.page_size}): streamed {items_processed}, "
            f"returned {len(page_items)}, has_next={has_next_page}"
        )

        return PageResult(
            items=page_items,
            next_page_token=str(request.page + 1) if has_next_page else None,
            page_size=request.page_size,
        )
