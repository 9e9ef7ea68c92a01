"""Desktop notification switch."""

from __future__ import annotations

import threading
from typing import Callable

from . import config
from .logger import configure_logging

_LOG = configure_logging()

SendNotification = Callable[[str, str], None]


class DesktopNotifier:
    """Sends desktop notifications through ``send`` while enabled."""

    def __init__(self, send: SendNotification, enabled: bool = True) -> None:
        self._send = send
        self._enabled = enabled
        self._lock = threading.Lock()

    @property
    def enabled(self) -> bool:
        with self._lock:
            return self._enabled

    def toggle(self) -> bool:
        with self._lock:
            self._enabled = not self._enabled
            enabled = self._enabled
        _LOG.info("Desktop notifications %s", "enabled" if enabled else "disabled")
        if enabled:
            self.notify(config.APP_NAME, "Notifications enabled")
        return enabled

    def notify(self, title: str, body: str) -> bool:
        if not self.enabled:
            return False
        try:
            self._send(title, body)
        except Exception:
            _LOG.exception("Could not send desktop notification %r", title)
            return False
        return True


__all__ = ["DesktopNotifier"]
