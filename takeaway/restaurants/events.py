from __future__ import annotations

from typing import Callable, Generic, TypeVar

T = TypeVar("T")

Observer = Callable[[T], None]


class Subject(Generic[T]):
    """
    Publish/subscribe channel for one kind of UI event.

    Observers are called synchronously, in subscription order, on every
    ``emit``. Nothing is buffered: late subscribers only see later values.
    """

    def __init__(self, name: str = "") -> None:
        self.name = name
        self._observers: list[Observer[T]] = []

    def subscribe(self, observer: Observer[T]) -> Callable[[], None]:
        """Register ``observer`` and return a callable that removes it again."""
        self._observers.append(observer)

        def _unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return _unsubscribe

    def emit(self, value: T) -> None:
        # Copy so observers may unsubscribe while being notified
        for observer in list(self._observers):
            observer(value)

    @property
    def observer_count(self) -> int:
        return len(self._observers)

    def __repr__(self) -> str:
        return f"Subject({self.name!r}, observers={len(self._observers)})"
