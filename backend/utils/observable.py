"""Minimal observable value for push-based state.

``Observable`` keeps a current value and a listener list. New subscribers
receive the current value immediately, then every later ``set()``.
``map()`` builds a derived observable recomputed on each source emission.
"""

from __future__ import annotations

import logging
from typing import Callable, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")
U = TypeVar("U")


class Observable(Generic[T]):
    def __init__(self, initial: T) -> None:
        self._value = initial
        self._listeners: list[Callable[[T], None]] = []

    @property
    def value(self) -> T:
        return self._value

    def set(self, value: T) -> None:
        """Replace the value and notify listeners in subscription order.

        Every call notifies, even when the new value equals the old one.
        """
        self._value = value
        for listener in list(self._listeners):
            try:
                listener(value)
            except Exception:
                logger.exception("Observable listener %r failed", listener)

    def subscribe(self, listener: Callable[[T], None]) -> Callable[[], None]:
        """Register ``listener``, replay the current value to it, and return
        a callable that removes it again."""
        self._listeners.append(listener)
        listener(self._value)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def map(self, fn: Callable[[T], U]) -> DerivedObservable[U]:
        return DerivedObservable(self, fn)


class DerivedObservable(Observable[U]):
    """Read-only projection of another observable."""

    def __init__(self, source: Observable, fn: Callable) -> None:
        super().__init__(fn(source.value))
        self._fn = fn
        self._unsubscribe: Callable[[], None] | None = source.subscribe(self._on_source)

    def _on_source(self, value) -> None:
        Observable.set(self, self._fn(value))

    def set(self, value: U) -> None:
        raise TypeError("Derived observables are read-only")

    @property
    def closed(self) -> bool:
        return self._unsubscribe is None

    def close(self) -> None:
        """Stop following the source; the last value stays readable."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
