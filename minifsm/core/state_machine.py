# minifsm/core/state_machine.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import logging
from typing import Generic, Optional

from minifsm.core.errors import CallbackError
from minifsm.core.hooks import CallbackRegistry, Subscription
from minifsm.interfaces.types import E, EventCallback, S, StateEventMapper, TransitionCallback

logger = logging.getLogger(__name__)


class StateMachine(Generic[S, E]):
    """
    A finite state machine whose entire transition logic is a mapper function
    ``(state, event) -> Optional[state]``. It tracks the current and previous
    state and notifies on-transition and on-event callbacks.

    The machine is not thread-safe. Calls to ``send`` must be serialized by the
    caller.
    """

    def __init__(
        self,
        initial: S,
        mapper: StateEventMapper,
        *,
        name: Optional[str] = None,
        exclusive: bool = True,
    ) -> None:
        """
        :param initial: The state the machine starts in; also the initial previous state.
        :param mapper: Returns the next state for (state, event), or None to refuse the event.
        :param name: Label used in log records and repr. Defaults to the class name.
        :param exclusive: If True, each hook keeps only its latest callback. If False,
                          callbacks accumulate and run in registration order.
        :raises CallbackError: If mapper is not callable.
        """
        if not callable(mapper):
            raise CallbackError("mapper", mapper)
        self._mapper = mapper
        self._name = name or type(self).__name__
        self._current_state: S = initial
        self._previous_state: S = initial
        self._transition_hooks = CallbackRegistry(exclusive=exclusive, role="on_transition callback")
        self._event_hooks = CallbackRegistry(exclusive=exclusive, role="on_event callback")

    @property
    def name(self) -> str:
        return self._name

    @property
    def mapper(self) -> StateEventMapper:
        """The transition function supplied at construction."""
        return self._mapper

    @property
    def current_state(self) -> S:
        """The state after the most recent successful transition."""
        return self._current_state

    @property
    def previous_state(self) -> S:
        """The state before the most recent successful transition."""
        return self._previous_state

    def on_transition(self, callback: TransitionCallback) -> Subscription:
        """
        Register a callback invoked as ``callback(new_state, event)`` after each
        successful transition.

        In exclusive mode (the default) this replaces any earlier on_transition
        callback.

        :return: A subscription; dispose it to stop the callback.
        """
        return self._transition_hooks.register(callback)

    def on_event(self, callback: EventCallback) -> Subscription:
        """
        Register a callback invoked as ``callback(event, current_state)`` for every
        event sent, whether or not it caused a transition.

        In exclusive mode (the default) this replaces any earlier on_event callback.

        :return: A subscription; dispose it to stop the callback.
        """
        return self._event_hooks.register(callback)

    def send(self, event: E) -> None:
        """
        Apply an event.

        The mapper is called once. If it returns a state, previous_state takes the
        old current_state, current_state takes the new one, and the on_transition
        callbacks run. The on_event callbacks then run in every case, after any
        on_transition callback.

        Exceptions raised by the mapper or a callback propagate unchanged.
        Calling send from inside a callback is allowed, but callbacks that run
        after the nested call see the state it left behind.

        :param event: The event to apply.
        """
        next_state = self._apply(event)
        if next_state is not None:
            self._previous_state = self._current_state
            self._current_state = next_state
            logger.debug(
                "%s: %r -> %r on %r", self._name, self._previous_state, self._current_state, event
            )
            self._transition_hooks.notify(self._current_state, event)
        else:
            logger.debug("%s: %r refused in %r", self._name, event, self._current_state)

        self._event_hooks.notify(event, self._current_state)

    def _apply(self, event: E) -> Optional[S]:
        try:
            return self._mapper(self._current_state, event)
        except Exception:
            logger.debug("%s: mapper failed for %r in %r", self._name, event, self._current_state)
            raise

    def __repr__(self) -> str:
        return (
            f"<{type(self).__name__} {self._name!r} current={self._current_state!r} "
            f"previous={self._previous_state!r}>"
        )
