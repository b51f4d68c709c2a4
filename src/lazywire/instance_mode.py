from __future__ import annotations

from enum import Enum


class InstanceMode(str, Enum):
    """Select how resolved instances of a provider are reused.

    ``provide`` also accepts the plain string values (``"shared"`` and
    ``"scoped"``) and converts them to members of this enum.
    """

    SHARED = "shared"
    """Construct once and reuse for the lifetime of the process.

    The instance is cached under the provider's identity only, so whichever
    override scope is active at first construction is baked into it for every
    later resolution until ``reset_global_cache`` is called.
    """

    SCOPED = "scoped"
    """Construct a new instance on every resolution, without any caching."""
