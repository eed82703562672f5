"""
Structured visibility predicates.

Filters are built as a small tree (``Eq``, ``In``, ``And``) and only turned
into the backend's textual query grammar by ``render``, which quotes and
escapes every literal and refuses attribute names that are not plain
identifiers.
"""

import re
from dataclasses import dataclass
from typing import Tuple, Union

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


@dataclass(frozen=True)
class Eq:
    attribute: str
    value: str


@dataclass(frozen=True)
class In:
    attribute: str
    values: Tuple[str, ...]


@dataclass(frozen=True)
class And:
    clauses: Tuple["Predicate", ...]


Predicate = Union[Eq, In, And]


def quote_literal(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


def _attribute(name: str) -> str:
    if not _IDENTIFIER.match(name):
        raise ValueError(f"Invalid search attribute name: {name!r}")
    return name


def render(predicate: Predicate) -> str:
    """Render a predicate tree as a visibility list filter."""
    if isinstance(predicate, Eq):
        return f"{_attribute(predicate.attribute)} = {quote_literal(predicate.value)}"
    if isinstance(predicate, In):
        if not predicate.values:
            raise ValueError(f"Empty value set for {predicate.attribute}")
        values = ",".join(quote_literal(v) for v in predicate.values)
        return f"{_attribute(predicate.attribute)} in ({values})"
    if isinstance(predicate, And):
        return " and ".join(render(clause) for clause in predicate.clauses)
    raise TypeError(f"Unsupported predicate: {type(predicate).__name__}")
