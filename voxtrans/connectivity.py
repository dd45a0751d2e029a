"""
Connectivity observer.

Holds the most recently reported network reachability as a boolean. It is
updated only by external "online"/"offline" notifications and read by the
orchestrator at decision time; it never probes the network itself. The
value can be stale, so the online translator's own failure path remains
the backstop.
"""

from __future__ import annotations

import logging
from typing import Callable

from voxtrans.config import env_flag

logger = logging.getLogger(__name__)

Listener = Callable[[bool], None]


class ConnectivityObserver:
    """Observable reachability flag with a single writer.

    Usage:
        observer = ConnectivityObserver(initial=True)
        unsubscribe = observer.subscribe(lambda online: print(online))
        observer.set_offline()
    """

    def __init__(self, initial: bool = True):
        self._online = initial
        self._listeners: list[Listener] = []

    @classmethod
    def from_environment(cls) -> ConnectivityObserver:
        """Start from the process's reachability signal (``VOXTRANS_OFFLINE``)."""
        return cls(initial=not env_flag("VOXTRANS_OFFLINE", False))

    @property
    def is_online(self) -> bool:
        return self._online

    def notify(self, reachable: bool) -> None:
        """Record a reachability-change notification."""
        reachable = bool(reachable)
        changed = reachable != self._online
        self._online = reachable
        if not changed:
            return
        logger.info("Connectivity changed: %s", "online" if reachable else "offline")
        for listener in list(self._listeners):
            listener(reachable)

    def set_online(self) -> None:
        self.notify(True)

    def set_offline(self) -> None:
        self.notify(False)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener`` with the new value on every change.

        Returns a function that removes the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def __repr__(self) -> str:
        return f"ConnectivityObserver(online={self._online})"
