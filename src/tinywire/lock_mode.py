from __future__ import annotations

from enum import Enum


class LockMode(Enum):
    """Select locking behavior for cached singleton creation.

    Transient registrations never lock. Singleton registrations lock only
    around their first construction; once cached, reads are lock-free.
    """

    THREAD = "thread"
    """Guard first singleton construction with a per-descriptor ``threading.RLock``."""

    NONE = "none"
    """Disable locking; concurrent first resolutions may construct a singleton twice."""
