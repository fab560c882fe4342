"""Observable auth state for screens that depend on the signed-in user."""
from __future__ import annotations

import logging
from typing import Callable

from ..schemas import UserResponse
from .results import ServiceError
from .transport import ApiClient, AuthEvent, AuthSession, Subscription

logger = logging.getLogger(__name__)

Listener = Callable[["AuthWatcher"], None]


class AuthWatcher:
    """Tracks ``user``, ``is_loading`` and ``error`` and keeps one auth subscription while started."""

    def __init__(self, client: ApiClient) -> None:
        self._client = client
        self._subscription: Subscription | None = None
        self._listeners: list[Listener] = []
        self.user: UserResponse | None = None
        self.is_loading = True
        self.error: ServiceError | None = None

    @property
    def is_started(self) -> bool:
        return self._subscription is not None and self._subscription.active

    def add_listener(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return remove

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    def start(self) -> None:
        if not self.is_started:
            self._subscription = self._client.auth.on_auth_state_change(self._on_auth_event)
        self.refresh()

    def stop(self) -> None:
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None

    def refresh(self) -> None:
        self.is_loading = True
        self.error = None
        result = self._client.auth.get_user()
        if result.error is not None:
            self.error = result.error
            self.user = None
        else:
            self.user = result.data
        self.is_loading = False
        self._notify()

    def sign_out(self) -> bool:
        result = self._client.auth.sign_out()
        if result.error is not None:
            self.error = result.error
            self._notify()
            return False
        if not self.is_started:
            # No subscription, so SIGNED_OUT never reaches _on_auth_event.
            self.user = None
            self._notify()
        return True

    def _on_auth_event(self, event: AuthEvent, session: AuthSession | None) -> None:
        logger.debug("Auth state changed: %s", event)
        self.user = session.user if session is not None else None
        self.is_loading = False
        self._notify()


__all__ = ["AuthWatcher"]
