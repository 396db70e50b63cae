# minifsm/core/hooks.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import logging
from typing import Any, Callable, List, Optional, Tuple

from minifsm.core.errors import CallbackError

logger = logging.getLogger(__name__)


class Subscription:
    """
    Disposable handle tying one callback to the registry it was registered with.
    Disposing it stops further delivery to that callback only.
    """

    def __init__(self, registry: "CallbackRegistry", callback: Callable[..., Any]) -> None:
        """
        :param registry: The registry holding the callback.
        :param callback: The registered callable.
        """
        self._registry: Optional[CallbackRegistry] = registry
        self._callback = callback

    @property
    def callback(self) -> Callable[..., Any]:
        """The callable this subscription delivers to."""
        return self._callback

    @property
    def disposed(self) -> bool:
        """True once the subscription no longer receives notifications."""
        return self._registry is None

    def dispose(self) -> None:
        """
        Remove the callback from its registry. Calling this more than once, or
        after the callback was replaced in an exclusive registry, does nothing.
        """
        registry, self._registry = self._registry, None
        if registry is not None:
            registry._remove(self)

    def __enter__(self) -> "Subscription":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.dispose()

    def __repr__(self) -> str:
        status = "disposed" if self.disposed else "active"
        return f"<Subscription {getattr(self._callback, '__qualname__', self._callback)!r} {status}>"


class CallbackRegistry:
    """
    Ordered collection of callbacks notified in registration order.

    In exclusive mode the registry holds at most one callback: registering a new
    one disposes the previous subscription.
    """

    def __init__(self, exclusive: bool = False, role: str = "callback") -> None:
        """
        :param exclusive: Keep only the most recently registered callback.
        :param role: Label used in error messages and log records.
        """
        self._exclusive = exclusive
        self._role = role
        self._subscriptions: List[Subscription] = []

    @property
    def exclusive(self) -> bool:
        return self._exclusive

    @property
    def callbacks(self) -> Tuple[Callable[..., Any], ...]:
        """Snapshot of the active callbacks, in notification order."""
        return tuple(sub.callback for sub in self._subscriptions)

    def register(self, callback: Callable[..., Any]) -> Subscription:
        """
        Add a callback and return the handle that removes it again.

        :param callback: Any callable accepting the arguments passed to notify().
        :raises CallbackError: If callback is not callable.
        """
        if not callable(callback):
            raise CallbackError(self._role, callback)
        if self._exclusive:
            self.clear()
        subscription = Subscription(self, callback)
        self._subscriptions.append(subscription)
        return subscription

    def unregister(self, callback: Callable[..., Any]) -> None:
        """Dispose every subscription delivering to callback."""
        for sub in [s for s in self._subscriptions if s.callback == callback]:
            sub.dispose()

    def notify(self, *args: Any) -> None:
        """
        Invoke each active callback with args.

        Iterates over a snapshot: callbacks registered during dispatch are first
        called on the next notification, and subscriptions disposed during
        dispatch are skipped. Exceptions raised by a callback propagate and
        end the dispatch.
        """
        for sub in tuple(self._subscriptions):
            if not sub.disposed:
                sub.callback(*args)

    def clear(self) -> None:
        """Dispose all subscriptions."""
        for sub in tuple(self._subscriptions):
            sub.dispose()

    def _remove(self, subscription: Subscription) -> None:
        # identity comparison: the same callable may be registered more than once
        for index, sub in enumerate(self._subscriptions):
            if sub is subscription:
                del self._subscriptions[index]
                logger.debug("Disposed %s subscription %r", self._role, subscription)
                return

    def __len__(self) -> int:
        return len(self._subscriptions)

    def __bool__(self) -> bool:
        return bool(self._subscriptions)
