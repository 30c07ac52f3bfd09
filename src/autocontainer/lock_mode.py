from __future__ import annotations

from enum import Enum


class LockMode(Enum):
    """Select how a scope serialises its resolution state.

    Each scope owns a registry, an instance cache and an in-flight resolution
    stack. Providers are synchronous and may call back into ``make`` on the
    same scope, so the thread lock is reentrant and held across the whole
    ``make`` call.
    """

    THREAD = "thread"
    """Guard each scope with its own ``threading.RLock``."""

    NONE = "none"
    """Disable locking. Only safe when a scope is confined to one thread."""
