"""Lazy, explicit dependency resolution without registries or reflection.

Providers are plain values describing how to build an instance. Resolution
happens inside an injection context, which honors per-provider local
overrides, caches shared instances process-wide, single-flights asynchronous
constructions and rejects circular construction.

Shared instances are cached by provider identity only: the first
construction wins, including one that happened under a local override.
"""

from lazywire._internal.cache import reset_global_cache
from lazywire._internal.resolver import Resolver
from lazywire.exceptions import (
    LazywireAsyncProviderOutsideEventLoopError,
    LazywireCircularDependencyError,
    LazywireError,
    LazywireInvalidProviderError,
    LazywireNoActiveContextError,
)
from lazywire.instance_mode import InstanceMode
from lazywire.providers import Provider, is_provider, provide
from lazywire.resolver_context import inject, is_in_injection_context, run_in_injection_context

__all__ = [
    "InstanceMode",
    "LazywireAsyncProviderOutsideEventLoopError",
    "LazywireCircularDependencyError",
    "LazywireError",
    "LazywireInvalidProviderError",
    "LazywireNoActiveContextError",
    "Provider",
    "Resolver",
    "inject",
    "is_in_injection_context",
    "is_provider",
    "provide",
    "reset_global_cache",
    "run_in_injection_context",
]
