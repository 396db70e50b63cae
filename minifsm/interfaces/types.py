# minifsm/interfaces/types.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
from typing import Callable, Optional, TypeVar

S = TypeVar("S")
E = TypeVar("E")
T = TypeVar("T")

# (state, event) -> next state, or None when the event is refused in that state
StateEventMapper = Callable[[S, E], Optional[S]]

# Callback Types
TransitionCallback = Callable[[S, E], None]
EventCallback = Callable[[E, S], None]
ValueCallback = Callable[[T], None]
