from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Generic, Literal, TypeAlias, TypeVar, overload

from lazywire.defaults import (
    ANONYMOUS_PROVIDER_NAME,
    DEFAULT_INSTANCE_MODE,
    LAMBDA_FUNCTION_NAME,
)
from lazywire.instance_mode import InstanceMode

if TYPE_CHECKING:
    from lazywire._internal.resolver import Resolver

T = TypeVar("T")

Factory: TypeAlias = Callable[["Resolver"], T]
"""A callable receiving the resolver for its own dependencies and returning the instance."""

InstanceModeLike: TypeAlias = InstanceMode | Literal["shared", "scoped"]


@dataclass(frozen=True, eq=False, slots=True, kw_only=True, repr=False)
class Provider(Generic[T]):
    """An immutable, lazily evaluated construction recipe.

    Providers are compared and hashed by identity: two providers wrapping the
    same factory are distinct entities with distinct cache entries. Create
    them with ``provide`` rather than instantiating this class directly.
    """

    factory: Factory[T]
    """Callable invoked with a ``Resolver`` to build the instance."""
    mode: InstanceMode
    """Instance reuse policy."""
    local_overrides: tuple[Provider[Any], ...] = ()
    """Providers substituted only while this provider's factory runs."""
    overrides: Provider[Any] | None = None
    """The provider this one replaces when used as a local override."""
    name: str = ANONYMOUS_PROVIDER_NAME
    """Display name used in error messages."""

    @property
    def override_target(self) -> Provider[Any]:
        """Return the provider replaced by this one inside a local override table."""
        return self.overrides if self.overrides is not None else self

    def __repr__(self) -> str:
        return f"Provider({self.name}, mode={self.mode.value})"


@overload
def provide(
    factory: Callable[[Resolver], Awaitable[T]],
    *,
    mode: InstanceModeLike = ...,
    local_overrides: Iterable[Provider[Any]] = ...,
    overrides: Provider[Any] | None = ...,
    name: str | None = ...,
) -> Provider[Awaitable[T]]: ...


@overload
def provide(
    factory: Callable[[Resolver], T],
    *,
    mode: InstanceModeLike = ...,
    local_overrides: Iterable[Provider[Any]] = ...,
    overrides: Provider[Any] | None = ...,
    name: str | None = ...,
) -> Provider[T]: ...


def provide(
    factory: Callable[[Resolver], Any],
    *,
    mode: InstanceModeLike = DEFAULT_INSTANCE_MODE,
    local_overrides: Iterable[Provider[Any]] = (),
    overrides: Provider[Any] | None = None,
    name: str | None = None,
) -> Provider[Any]:
    """Create a provider for ``factory`` without calling it.

    Construction is fully lazy: the factory runs only when the provider is
    resolved inside an injection context, and it receives the resolver to use
    for its own dependencies.

    Args:
        factory: Callable taking a ``Resolver`` and returning the instance. An
            ``async def`` factory (or any factory returning an awaitable)
            makes resolution return an awaitable future.
        mode: ``InstanceMode.SHARED`` (default) caches one instance per
            process; ``InstanceMode.SCOPED`` builds a new one per resolution.
        local_overrides: Providers visible only while this provider's factory
            runs. Each replaces the provider named by its ``overrides``
            argument, or itself when that is unset. Later entries win over
            earlier ones targeting the same provider.
        overrides: The provider this one replaces when it is listed in
            another provider's ``local_overrides``.
        name: Display name for error messages. Defaults to the factory's
            ``__name__``, or ``"<anonymous>"`` for lambdas.

    Returns:
        A new ``Provider``, distinct from every other provider.

    Notes:
        A shared provider is cached by identity only. If it is first built
        while a local override is active for one of its dependencies, the
        override-influenced instance is what every later resolution returns,
        including resolutions outside the override scope.

        Asynchronous shared providers belong to the event loop that first
        resolves them: the in-flight future is only awaitable from that loop.

    Examples:
        .. code-block:: python

            config = provide(lambda _: {"url": "https://example.com"})
            client = provide(lambda r: HttpClient(r.resolve(config)["url"]))

    """
    return Provider(
        factory=factory,
        mode=InstanceMode(mode),
        local_overrides=tuple(local_overrides),
        overrides=overrides,
        name=name if name is not None else _infer_name_from(factory),
    )


def is_provider(value: object) -> bool:
    """Return whether ``value`` is a provider created by ``provide``."""
    return isinstance(value, Provider)


def _infer_name_from(factory: Callable[..., Any]) -> str:
    name = getattr(factory, "__name__", None)
    if not isinstance(name, str) or not name or name == LAMBDA_FUNCTION_NAME:
        return ANONYMOUS_PROVIDER_NAME
    return name
