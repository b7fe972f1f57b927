"""
Request state machine values.

Every screen-level operation reports exactly one of these to its consumer.
"""

from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Idle:
    """Write operation not submitted yet."""


@dataclass(frozen=True)
class Loading:
    """Operation in flight."""


@dataclass(frozen=True)
class Success(Generic[T]):
    payload: T


@dataclass(frozen=True)
class Error:
    message: str


IDLE = Idle()
LOADING = Loading()

RequestState = Union[Idle, Loading, Success[Any], Error]
