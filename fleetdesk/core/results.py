"""Explicit success/failure values for the authentication and authorization chain."""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Successful outcome carrying a value."""

    value: T


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """Failed outcome carrying the reason."""

    error: E


Result = Ok[T] | Err[E]
