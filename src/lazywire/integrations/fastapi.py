from __future__ import annotations

import inspect
from typing import Any, TypeVar

from lazywire._internal.resolver import Resolver
from lazywire.exceptions import LazywireInvalidProviderError
from lazywire.providers import Provider
from lazywire.resolver_context import run_in_injection_context

try:
    from fastapi import Depends
except ModuleNotFoundError as exc:  # pragma: no cover - exercised in optional import scenarios
    message = "FastAPI integration requires fastapi. Install with 'lazywire[fastapi]'."
    raise ModuleNotFoundError(message) from exc

T = TypeVar("T")


def provided(ref: Provider[T], *, use_cache: bool = True) -> Any:
    """Return a FastAPI dependency that resolves ``ref`` for each request.

    Every request resolves ``ref`` in its own root injection context, so
    scoped providers are built per request while shared providers come from
    the process-wide cache. Asynchronous providers are awaited before the
    value is handed to the endpoint.

    Args:
        ref: Provider to resolve.
        use_cache: Forwarded to ``fastapi.Depends``; when true, the value is
            reused for other parameters of the same request.

    Returns:
        A ``fastapi.Depends`` marker usable as a parameter default or inside
        ``Annotated``.

    Raises:
        LazywireInvalidProviderError: If ``ref`` is not a provider.

    Examples:
        .. code-block:: python

            @app.get("/users")
            async def list_users(
                repository: Annotated[UserRepository, provided(repository_ref)],
            ) -> list[User]:
                return await repository.all()

    """
    if not isinstance(ref, Provider):
        msg = f"provided() expects a provider created by provide(), got {ref!r}"
        raise LazywireInvalidProviderError(msg)

    async def resolve_dependency() -> Any:
        def resolve_ref(resolver: Resolver) -> Any:
            return resolver.resolve(ref)

        instance = run_in_injection_context(resolve_ref)
        if inspect.isawaitable(instance):
            return await instance
        return instance

    resolve_dependency.__name__ = f"resolve_{ref.name.strip('<>')}"
    return Depends(resolve_dependency, use_cache=use_cache)


__all__ = ["provided"]
