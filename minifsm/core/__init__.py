"""
Core package providing the transition engines and their notification primitives.

Architecture:
- StateMachine applies events through a mapper and calls plain callbacks
- ObservableStateMachine exposes state as observable values and events as a stream
- hooks and observables hold subscribers behind disposable handles

Design Patterns:
- Strategy Pattern for the injected mapper
- Observer Pattern for transitions, events and state values
"""

from .errors import CallbackError, FSMError
from .hooks import CallbackRegistry, Subscription
from .observables import EventStream, ObservableValue
from .state_machine import StateMachine
from .observable_machine import ObservableStateMachine

__all__ = [
    # Engines
    "StateMachine",
    "ObservableStateMachine",
    # Notification primitives
    "CallbackRegistry",
    "Subscription",
    "ObservableValue",
    "EventStream",
    # Errors
    "FSMError",
    "CallbackError",
]
