from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from lazywire.providers import Provider


class LazywireError(Exception):
    """Represent a base class for all lazywire-specific failures.

    Catch this type when you want to handle any lazywire error path without
    matching each concrete exception class individually. Errors raised by
    user factories are never wrapped and do not derive from this class.
    """


class LazywireCircularDependencyError(LazywireError):
    """Signal that a provider requires itself while it is being constructed.

    Raised by ``Resolver.resolve`` when the effective provider is already on
    the resolution chain of the current call, directly (a factory resolving
    its own provider) or transitively (``a -> b -> a``).

    Typical fixes include breaking the cycle with a provider that resolves
    lazily (capture the resolver and call it after the factory returns) or
    restructuring the graph so that one side no longer depends on the other.
    """

    def __init__(self, provider: Provider[Any], chain: Sequence[Provider[Any]]) -> None:
        self.provider = provider
        self.name = provider.name
        self.chain = (*chain, provider)
        path = " -> ".join(item.name for item in self.chain)
        super().__init__(f"Circular dependency detected: {self.name} (resolution chain: {path})")


class LazywireNoActiveContextError(LazywireError):
    """Signal use of ``inject`` outside of an injection context.

    Raised by ``lazywire.inject`` when no resolver is bound to the current
    execution context.

    Typical fixes include running the code through
    ``run_in_injection_context``, calling ``resolve`` on the resolver passed
    to the factory, or passing ``optional=True`` to get ``None`` instead.
    """


class LazywireAsyncProviderOutsideEventLoopError(LazywireError):
    """Signal an asynchronous factory result produced without a running loop.

    Raised by ``Resolver.resolve`` when a factory returns an awaitable while no
    asyncio event loop is running in the current thread, so the construction
    cannot be scheduled.

    Typical fix is resolving from inside a coroutine, for example with
    ``await run_in_injection_context(async_main)`` under ``asyncio.run``.
    """

    def __init__(self, provider: Provider[Any]) -> None:
        self.provider = provider
        super().__init__(
            f"Provider {provider.name} returned an awaitable but no event loop is running",
        )


class LazywireInvalidProviderError(LazywireError, TypeError):
    """Signal a value that cannot be used as a provider.

    Raised by ``Resolver.resolve`` and ``inject`` when the reference is not a
    ``Provider`` created by ``provide``, and by integration helpers when their
    input cannot be turned into a provider.
    """
