# minifsm/core/observable_machine.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import logging
from typing import Callable, Generic, Optional

from minifsm.core.errors import CallbackError
from minifsm.core.hooks import Subscription
from minifsm.core.observables import EventStream, ObservableValue
from minifsm.interfaces.types import E, S, StateEventMapper

logger = logging.getLogger(__name__)


class ObservableStateMachine(Generic[S, E]):
    """
    Variant of StateMachine for observer-style consumers. The current and previous
    state are ObservableValue channels and every event sent is broadcast on an
    EventStream. There is no on-transition hook: a transition shows up as an
    update on ``current_state``.
    """

    def __init__(self, initial: S, mapper: StateEventMapper, *, name: Optional[str] = None) -> None:
        """
        :param initial: Initial value of both current_state and previous_state.
        :param mapper: Returns the next state for (state, event), or None to refuse the event.
        :param name: Label used in log records and repr.
        :raises CallbackError: If mapper is not callable.
        """
        if not callable(mapper):
            raise CallbackError("mapper", mapper)
        self._mapper = mapper
        self._name = name or type(self).__name__
        self._current_state: ObservableValue[S] = ObservableValue(initial)
        self._previous_state: ObservableValue[S] = ObservableValue(initial)
        self._events: EventStream[E] = EventStream()

    @property
    def name(self) -> str:
        return self._name

    @property
    def mapper(self) -> StateEventMapper:
        return self._mapper

    @property
    def current_state(self) -> ObservableValue[S]:
        return self._current_state

    @property
    def previous_state(self) -> ObservableValue[S]:
        return self._previous_state

    @property
    def events(self) -> EventStream[E]:
        return self._events

    def subscribe_to_state(self, callback: Callable[[S], None]) -> Subscription:
        """Shortcut for ``current_state.subscribe(callback)``; replays the current value."""
        return self._current_state.subscribe(callback)

    def subscribe_to_previous_state(self, callback: Callable[[S], None]) -> Subscription:
        """Shortcut for ``previous_state.subscribe(callback)``; replays the current value."""
        return self._previous_state.subscribe(callback)

    def subscribe_to_events(self, callback: Callable[[E], None]) -> Subscription:
        """Shortcut for ``events.subscribe(callback)``."""
        return self._events.subscribe(callback)

    def send(self, event: E) -> None:
        """
        Apply an event.

        On a successful transition both previous_state and current_state are
        assigned, then subscribers of previous_state are notified, then those of
        current_state.
        The event is then emitted on ``events`` whether or not it caused a
        transition.

        Both values are stored before any subscriber runs, so a subscriber that
        calls send applies its event to the new state. Such re-entrant calls are
        allowed but discouraged: subscribers notified after the nested call see
        the state it left behind.

        Exceptions raised by the mapper or a subscriber propagate unchanged.
        """
        current = self._current_state.value
        try:
            next_state = self._mapper(current, event)
        except Exception:
            logger.debug("%s: mapper failed for %r in %r", self._name, event, current)
            raise

        if next_state is not None:
            logger.debug("%s: %r -> %r on %r", self._name, current, next_state, event)
            self._previous_state._store(current)
            self._current_state._store(next_state)
            self._previous_state._publish()
            self._current_state._publish()
        else:
            logger.debug("%s: %r refused in %r", self._name, event, current)

        self._events.emit(event)

    def __repr__(self) -> str:
        return (
            f"<{type(self).__name__} {self._name!r} current={self._current_state.value!r} "
            f"previous={self._previous_state.value!r}>"
        )
