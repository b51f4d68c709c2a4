from __future__ import annotations

import asyncio
import functools
import inspect
import logging
from collections.abc import Awaitable
from contextvars import ContextVar
from typing import Any, TypeVar, overload

from lazywire._internal.cache import MISSING, global_instances
from lazywire._internal.context import InjectionContext
from lazywire.exceptions import (
    LazywireAsyncProviderOutsideEventLoopError,
    LazywireCircularDependencyError,
    LazywireInvalidProviderError,
)
from lazywire.instance_mode import InstanceMode
from lazywire.providers import Provider

T = TypeVar("T")

logger = logging.getLogger(__name__)

ResolutionStack = tuple[Provider[Any], ...]

current_resolver: ContextVar[Resolver | None] = ContextVar(
    "lazywire_current_resolver",
    default=None,
)


class Resolver:
    """Resolve providers within one injection context.

    Factories receive a resolver bound to the context they run in, together
    with the chain of providers under construction on their call path. Once
    the owning construction has finished (or its future has settled) the
    resolver is deactivated: it keeps resolving in the same context, but as a
    fresh top-level call that no longer takes part in cycle detection.
    """

    __slots__ = ("_active", "_context", "_stack")

    def __init__(self, context: InjectionContext, stack: ResolutionStack = ()) -> None:
        self._context = context
        self._stack = stack
        self._active = True

    @property
    def context(self) -> InjectionContext:
        return self._context

    @property
    def is_active(self) -> bool:
        return self._active

    def deactivate(self) -> None:
        """Detach this resolver from the resolution chain it was created for."""
        self._active = False

    @overload
    def resolve(self, ref: Provider[Awaitable[T]]) -> asyncio.Future[T]: ...

    @overload
    def resolve(self, ref: Provider[T]) -> T: ...

    def resolve(self, ref: Provider[Any]) -> Any:
        """Resolve ``ref`` to an instance.

        Args:
            ref: Provider to resolve. Local overrides of the enclosing
                providers are honored, innermost first.

        Returns:
            The instance, or an ``asyncio.Future`` when the effective
            provider's factory is asynchronous. Shared providers return the
            cached instance, or a shield over the in-flight construction so
            that cancelling one caller does not cancel it for the others.

        Raises:
            LazywireInvalidProviderError: If ``ref`` is not a provider.
            LazywireCircularDependencyError: If the provider is already under
                construction on this call path.
            LazywireAsyncProviderOutsideEventLoopError: If the factory returns
                an awaitable while no event loop is running.

        """
        stack = self._stack if self._active else ()
        return resolve_in_context(ref, self._context, stack)

    def __repr__(self) -> str:
        chain = " -> ".join(provider.name for provider in self._stack)
        return f"Resolver(active={self._active}, chain=[{chain}])"


def resolve_in_context(
    ref: Provider[Any],
    context: InjectionContext,
    stack: ResolutionStack,
) -> Any:
    if not isinstance(ref, Provider):
        msg = f"Expected a provider created by provide(), got {type(ref).__name__}: {ref!r}"
        raise LazywireInvalidProviderError(msg)

    provider = context.find_effective_provider(ref)

    if provider in stack:
        raise LazywireCircularDependencyError(provider, stack)

    if provider.mode is not InstanceMode.SHARED:
        return _construct(provider, context, stack)

    cached = global_instances.get(provider)
    if cached is MISSING:
        with global_instances.construction_lock(provider):
            cached = global_instances.get(provider)
            if cached is MISSING:
                instance = _construct(provider, context, stack)
                if isinstance(instance, asyncio.Future):
                    return _share(instance)
                return global_instances.store(provider, instance)
    return _share(cached)


def _construct(provider: Provider[Any], context: InjectionContext, stack: ResolutionStack) -> Any:
    factory_context = context.child(provider.local_overrides) if provider.local_overrides else context
    resolver = Resolver(factory_context, (*stack, provider))

    token = current_resolver.set(resolver)
    try:
        instance = provider.factory(resolver)
        if inspect.isawaitable(instance):
            return _schedule_construction(provider, resolver, instance)
    except BaseException:
        resolver.deactivate()
        raise
    finally:
        current_resolver.reset(token)

    resolver.deactivate()
    return instance


def _share(value: Any) -> Any:
    # Each caller awaits its own shield, so cancelling one awaiter leaves the
    # shared construction running for the others.
    if isinstance(value, asyncio.Future) and not value.done():
        return asyncio.shield(value)
    return value


def _schedule_construction(
    provider: Provider[Any],
    resolver: Resolver,
    awaitable: Awaitable[Any],
) -> asyncio.Future[Any]:
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError as exc:
        if inspect.iscoroutine(awaitable):
            awaitable.close()
        raise LazywireAsyncProviderOutsideEventLoopError(provider) from exc

    # Tasks copy the current context here, so the coroutine body sees ``resolver``.
    future = asyncio.ensure_future(awaitable, loop=loop)
    if provider.mode is InstanceMode.SHARED:
        global_instances.store_pending(provider, future)
    future.add_done_callback(functools.partial(_on_construction_settled, provider, resolver))
    return future


def _on_construction_settled(
    provider: Provider[Any],
    resolver: Resolver,
    future: asyncio.Future[Any],
) -> None:
    resolver.deactivate()
    failed = future.cancelled() or future.exception() is not None
    if not failed or provider.mode is not InstanceMode.SHARED:
        return
    if global_instances.evict(provider, future):
        logger.debug(
            "Evicted failed construction of shared provider %s: cancelled=%s",
            provider.name,
            future.cancelled(),
        )
