"""
Observable state holders.

A ``StateFlow`` always holds a value. Subscribers receive the current value
immediately on subscription and then every subsequent change. Consecutive
equal values are conflated. Writes are applied synchronously on the event
loop thread, so a single writer and any number of readers need no locking.
"""

import asyncio
from typing import AsyncIterator, Callable, Generic, List, TypeVar

T = TypeVar("T")
A = TypeVar("A")
B = TypeVar("B")

Unsubscribe = Callable[[], None]


class StateFlow(Generic[T]):
    """Read-only observable value."""

    def __init__(self, initial: T) -> None:
        self._value = initial
        self._listeners: List[Callable[[T], None]] = []
        self._upstream: List[Unsubscribe] = []

    @property
    def value(self) -> T:
        return self._value

    def subscribe(self, listener: Callable[[T], None]) -> Unsubscribe:
        """
        Register a listener.

        The listener is called with the current value right away, then
        with every change.

        Returns:
            Callable that removes the listener.
        """
        self._listeners.append(listener)
        listener(self._value)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def stream(self) -> AsyncIterator[T]:
        """
        Iterate over the current value and every later change.

        Never terminates on its own; stop by breaking out of the loop or
        cancelling the consuming task.
        """
        queue: "asyncio.Queue[T]" = asyncio.Queue()
        unsubscribe = self.subscribe(queue.put_nowait)
        try:
            while True:
                yield await queue.get()
        finally:
            unsubscribe()

    def __aiter__(self) -> AsyncIterator[T]:
        return self.stream()

    def release(self) -> None:
        """Detach a derived flow from the flows it was built from."""
        while self._upstream:
            self._upstream.pop()()

    def _emit(self, value: T) -> None:
        if value == self._value:
            return
        self._value = value
        for listener in list(self._listeners):
            listener(value)


class MutableStateFlow(StateFlow[T]):
    """Observable value with a public setter."""

    @property
    def value(self) -> T:
        return self._value

    @value.setter
    def value(self, new_value: T) -> None:
        self._emit(new_value)

    def update(self, transform: Callable[[T], T]) -> None:
        """Replace the value with ``transform(current)``."""
        self._emit(transform(self._value))


def map_flow(source: StateFlow[A], transform: Callable[[A], B]) -> StateFlow[B]:
    """Derive a flow whose value is ``transform(source.value)``."""
    derived: MutableStateFlow[B] = MutableStateFlow(transform(source.value))

    def recompute(value: A) -> None:
        derived.value = transform(value)

    derived._upstream.append(source.subscribe(recompute))
    return derived


def combine(
    first: StateFlow[A],
    second: StateFlow[B],
    transform: Callable[[A, B], T],
) -> StateFlow[T]:
    """
    Derive a flow from the latest values of two flows.

    Recomputed synchronously whenever either input changes.
    """
    derived: MutableStateFlow[T] = MutableStateFlow(
        transform(first.value, second.value)
    )

    def recompute(_changed: object) -> None:
        derived.value = transform(first.value, second.value)

    derived._upstream.append(first.subscribe(recompute))
    derived._upstream.append(second.subscribe(recompute))
    return derived
