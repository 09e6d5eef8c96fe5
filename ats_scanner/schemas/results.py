from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class ParseOk(Generic[T]):
    value: T


@dataclass(frozen=True)
class ParseError:
    reason: str


ParseResult = Union[ParseOk[T], ParseError]
