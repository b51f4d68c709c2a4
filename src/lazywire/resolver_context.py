from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable, Coroutine
from typing import Any, Literal, TypeVar, overload

from lazywire._internal.context import InjectionContext
from lazywire._internal.resolver import Resolver, current_resolver
from lazywire.exceptions import LazywireNoActiveContextError
from lazywire.providers import Provider

T = TypeVar("T")


@overload
def run_in_injection_context(
    fn: Callable[[Resolver], Awaitable[T]],
) -> Coroutine[Any, Any, T]: ...


@overload
def run_in_injection_context(fn: Callable[[Resolver], T]) -> T: ...


def run_in_injection_context(fn: Callable[[Resolver], Any]) -> Any:
    """Run ``fn`` with a resolver bound to a fresh root context.

    Each call creates an independent root: scoped instances are never shared
    between two runs, even when one is nested in the other, while shared
    instances live in the process-wide cache and are visible to every run.

    Args:
        fn: Callable receiving the root resolver. It may be an ``async def``
            function; the resolver stays usable for its whole execution.

    Returns:
        ``fn``'s result. When ``fn`` returns an awaitable, a coroutine is
        returned that awaits it with the root resolver bound as the current
        resolver, so ``inject`` keeps working after every ``await``.

    Examples:
        .. code-block:: python

            service = run_in_injection_context(lambda r: r.resolve(service_ref))

            async def main(resolver: Resolver) -> None:
                client = await resolver.resolve(async_client_ref)

            asyncio.run(run_in_injection_context(main))

    """
    resolver = Resolver(InjectionContext.root())

    token = current_resolver.set(resolver)
    try:
        result = fn(resolver)
    finally:
        current_resolver.reset(token)

    if inspect.isawaitable(result):
        return _await_with_resolver(resolver, result)
    return result


async def _await_with_resolver(resolver: Resolver, awaitable: Awaitable[T]) -> T:
    token = current_resolver.set(resolver)
    try:
        return await awaitable
    finally:
        current_resolver.reset(token)


@overload
def inject(ref: Provider[T], *, optional: Literal[False] = False) -> T: ...


@overload
def inject(ref: Provider[T], *, optional: Literal[True]) -> T | None: ...


def inject(ref: Provider[T], *, optional: bool = False) -> T | None:
    """Resolve ``ref`` through the resolver bound to the current execution context.

    Inside ``run_in_injection_context`` the current resolver is the root
    resolver; while a factory runs it is the resolver that factory received,
    so local overrides and cycle detection apply exactly as with
    ``resolver.resolve``.

    Args:
        ref: Provider to resolve.
        optional: Return ``None`` instead of raising when no injection
            context is active.

    Raises:
        LazywireNoActiveContextError: If no injection context is active and
            ``optional`` is false.

    """
    resolver = current_resolver.get()
    if resolver is None:
        if optional:
            return None
        msg = (
            "inject() must be called within an injection context. Use "
            "run_in_injection_context() or the resolver passed to the factory."
        )
        raise LazywireNoActiveContextError(msg)
    return resolver.resolve(ref)


def is_in_injection_context() -> bool:
    """Return whether a resolver is bound to the current execution context."""
    return current_resolver.get() is not None
