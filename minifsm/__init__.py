"""minifsm: a minimal generic finite state machine

A machine is built from an initial state and a mapper, a pure function
``(state, event) -> Optional[state]``. Returning None refuses the event.

Responsibilities:
    - Tracking current and previous state
    - Applying events through the mapper, exactly once per event
    - Notifying observers of transitions and of every event received

Interactions:
    - Client code supplies the state and event types and the mapper
    - Logging system for diagnostics (DEBUG records only, no handlers installed)

Cross-cutting Concerns:
    Thread Safety:
        - None. A machine must be confined to one thread or guarded externally

    Error Handling:
        - Refused events are not errors
        - Exceptions from mappers and callbacks propagate unchanged
        - Registration misuse raises CallbackError
"""

from minifsm.core import (
    CallbackError,
    CallbackRegistry,
    EventStream,
    FSMError,
    ObservableStateMachine,
    ObservableValue,
    StateMachine,
    Subscription,
)
from minifsm.interfaces.protocols import Disposable
from minifsm.interfaces.types import StateEventMapper

__version__ = "0.1.0"

__all__ = [
    "StateMachine",
    "ObservableStateMachine",
    "CallbackRegistry",
    "Subscription",
    "ObservableValue",
    "EventStream",
    "Disposable",
    "StateEventMapper",
    "FSMError",
    "CallbackError",
    "__version__",
]
