# minifsm/core/observables.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

from typing import Callable, Generic, TypeVar

from minifsm.core.hooks import CallbackRegistry, Subscription

T = TypeVar("T")


class ObservableValue(Generic[T]):
    """
    A single-value broadcast channel. Subscribers are handed the current value
    as soon as they subscribe and then every value assigned afterwards,
    synchronously, in subscription order.

    Only the owner assigns new values (through ``_set``); subscribers get
    read access and a disposable handle.
    """

    def __init__(self, initial: T) -> None:
        self._value = initial
        self._subscribers = CallbackRegistry(role="value subscriber")

    @property
    def value(self) -> T:
        """The most recently assigned value."""
        return self._value

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def subscribe(self, callback: Callable[[T], None]) -> Subscription:
        """
        Deliver the current value to callback now, and every later assignment
        until the returned subscription is disposed.

        :param callback: Called with one argument, the value.
        :raises CallbackError: If callback is not callable.
        """
        subscription = self._subscribers.register(callback)
        try:
            callback(self._value)
        except Exception:
            subscription.dispose()
            raise
        return subscription

    def _set(self, value: T) -> None:
        # every assignment is broadcast, including one equal to the old value
        self._store(value)
        self._publish()

    def _store(self, value: T) -> None:
        self._value = value

    def _publish(self) -> None:
        # delivers the value held now, which a re-entrant owner may have replaced
        self._subscribers.notify(self._value)

    def __repr__(self) -> str:
        return f"ObservableValue({self._value!r})"


class EventStream(Generic[T]):
    """
    Multicast stream of items. Unlike ObservableValue it keeps nothing: a
    subscriber only sees items emitted after it subscribed.
    """

    def __init__(self) -> None:
        self._subscribers = CallbackRegistry(role="event subscriber")

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def subscribe(self, callback: Callable[[T], None]) -> Subscription:
        """
        :param callback: Called with each emitted item.
        :raises CallbackError: If callback is not callable.
        """
        return self._subscribers.register(callback)

    def emit(self, item: T) -> None:
        """Deliver item to every active subscriber."""
        self._subscribers.notify(item)
