from typing import Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class BestEffort(BaseModel, Generic[T]):
    """Result of an enrichment that may degrade to a sentinel instead of failing."""

    value: T
    degraded: bool = False

    @classmethod
    def ok(cls, value: T) -> "BestEffort[T]":
        return cls(value=value)

    @classmethod
    def degraded_to(cls, sentinel: T) -> "BestEffort[T]":
        return cls(value=sentinel, degraded=True)
