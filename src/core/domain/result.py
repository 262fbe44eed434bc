"""Resultado etiquetado de un dispatch (éxito o error, nunca ambos)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, cast

from core.domain.errors import ClassifiedError

R = TypeVar("R")


@dataclass(frozen=True)
class DispatchResult(Generic[R]):
    """Output of one backend call: exactly one of `response` or `error` is set."""

    response: R | None = None
    error: ClassifiedError | None = None

    def __post_init__(self) -> None:
        if (self.response is None) == (self.error is None):
            raise ValueError("DispatchResult needs exactly one of response or error")

    @classmethod
    def success(cls, response: R) -> "DispatchResult[R]":
        return cls(response=response)

    @classmethod
    def failure(cls, error: ClassifiedError) -> "DispatchResult[R]":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> R:
        """Return the response or raise the classified error."""

        if self.error is not None:
            raise self.error
        return cast(R, self.response)
