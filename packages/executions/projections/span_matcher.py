from typing import Hashable, Optional, Protocol, Sequence, Set, TypeVar


class SpanEvent(Protocol):
    @property
    def event_id(self) -> Hashable: ...

    @property
    def is_begin(self) -> bool: ...

    @property
    def is_end(self) -> bool: ...

    @property
    def correlation_id(self) -> Optional[Hashable]: ...

    @property
    def is_barrier(self) -> bool: ...


E = TypeVar("E", bound=SpanEvent)


def find_last_open_span(events: Sequence[E]) -> Optional[E]:
    """Return the latest begin event with no later end event referencing it.

    Events are scanned newest first. A barrier event closes everything
    before it, so reaching one yields no open span. The end events seen so
    far are exactly those later than the current position, which keeps the
    scan linear.
    """
    closed: Set[Hashable] = set()
    for event in reversed(events):
        if event.is_barrier:
            return None
        if event.is_end:
            if event.correlation_id is not None:
                closed.add(event.correlation_id)
            continue
        if event.is_begin and event.event_id not in closed:
            return event
    return None
