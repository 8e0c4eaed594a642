"""Outcome of a mutating collection operation."""

from dataclasses import dataclass
from typing import Generic, TypeVar

from image_collection.core.models.errors import ImageCollectionError

T = TypeVar("T")


@dataclass(frozen=True)
class OperationResult(Generic[T]):
    """Value of a successful operation, or the error that stopped it.

    Operations never raise collaborator failures to the caller; the error
    is carried here instead so callers who care can inspect it.
    """

    value: T | None = None
    error: ImageCollectionError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "OperationResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: ImageCollectionError) -> "OperationResult[T]":
        return cls(error=error)
