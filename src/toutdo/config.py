"""Runtime configuration.

Values come from the environment and can be overridden by a ``build_config``
module generated at packaging time. A source checkout uses the defaults below.
"""

from __future__ import annotations

import os
from typing import Optional


def _truthy_env(name: str, default: str = "0") -> bool:
    value = os.getenv(name, default)
    return value not in {"0", "false", "False"}


APP_ID = "org.example.ToutDo"
APP_NAME = "Tout-Do"
APP_VERSION = "0.3.1"

# List ordering policy: pinned notes first (stable) or raw collection order.
PIN_FIRST: bool = _truthy_env("TOUTDO_PIN_FIRST", "1")
NOTIFICATIONS_ENABLED: bool = _truthy_env("TOUTDO_NOTIFICATIONS", "1")
NOTES_FILE: Optional[str] = os.getenv("TOUTDO_NOTES_FILE") or None

try:  # pragma: no cover - optional override generated at build time
    from . import build_config as _generated  # type: ignore
except ImportError:  # pragma: no cover - development fallback
    _generated = None

if _generated:
    APP_ID = getattr(_generated, "APP_ID", APP_ID)
    APP_NAME = getattr(_generated, "APP_NAME", APP_NAME)
    APP_VERSION = getattr(_generated, "APP_VERSION", APP_VERSION)
    PIN_FIRST = bool(getattr(_generated, "PIN_FIRST", PIN_FIRST))
    NOTIFICATIONS_ENABLED = bool(getattr(_generated, "NOTIFICATIONS_ENABLED", NOTIFICATIONS_ENABLED))
