from __future__ import annotations

from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, TypeVar

if TYPE_CHECKING:
    from lazywire.providers import Provider

T = TypeVar("T")


class InjectionContext:
    """One override scope in a chain of contexts.

    The root context of ``run_in_injection_context`` has no overrides and no
    parent. A child context is created for each resolution of a provider that
    declares local overrides and is only visible to that provider's factory.
    """

    __slots__ = ("local_overrides", "parent")

    def __init__(
        self,
        local_overrides: Mapping[Provider[Any], Provider[Any]] | None = None,
        parent: InjectionContext | None = None,
    ) -> None:
        self.local_overrides: Mapping[Provider[Any], Provider[Any]] = MappingProxyType(
            dict(local_overrides or {}),
        )
        self.parent = parent

    @classmethod
    def root(cls) -> InjectionContext:
        return cls()

    def child(self, overrides: Iterable[Provider[Any]]) -> InjectionContext:
        """Create a child scope keyed by each override's target provider."""
        return InjectionContext(
            {provider.override_target: provider for provider in overrides},
            parent=self,
        )

    def find_effective_provider(self, provider: Provider[T]) -> Provider[T]:
        """Return the innermost local override for ``provider``, or ``provider`` itself."""
        current: InjectionContext | None = self
        while current is not None:
            override = current.local_overrides.get(provider)
            if override is not None:
                return override
            current = current.parent
        return provider
