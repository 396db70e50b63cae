# minifsm/core/errors.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details


class FSMError(Exception):
    """
    Base exception class for errors raised by the minifsm library itself.

    Failures inside user-supplied mappers and callbacks are never wrapped in
    this type; they reach the caller of ``send`` unchanged.
    """


class CallbackError(FSMError, TypeError):
    """
    Raised when something that must be callable (a mapper, a transition or event
    callback, a subscriber) is not.
    """

    def __init__(self, role: str, obj: object) -> None:
        super().__init__(f"{role} must be callable, got {type(obj).__name__}")
        self.role = role
        self.obj = obj
