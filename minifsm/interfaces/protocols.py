# minifsm/interfaces/protocols.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
from typing import Protocol, runtime_checkable


@runtime_checkable
class Disposable(Protocol):
    """
    Handle returned by every subscribe/register call.

    Methods:
        dispose(): Stops further delivery to the subscriber behind this handle.

    Runtime Invariants:
    - Disposing is idempotent.
    - Disposing one handle never affects other subscribers or machine state.
    """

    @property
    def disposed(self) -> bool:
        """True once dispose() has been called."""
        ...

    def dispose(self) -> None:
        """Cancel the subscription."""
        ...
