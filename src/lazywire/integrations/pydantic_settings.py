from __future__ import annotations

import types
from typing import Any, TypeGuard, TypeVar

from lazywire.defaults import DEFAULT_INSTANCE_MODE
from lazywire.exceptions import LazywireInvalidProviderError
from lazywire.providers import InstanceModeLike, Provider, provide

try:
    from pydantic_settings import BaseSettings
except ModuleNotFoundError as exc:  # pragma: no cover - exercised in optional import scenarios
    message = (
        "Pydantic settings integration requires pydantic-settings. "
        "Install with 'lazywire[pydantic-settings]'."
    )
    raise ModuleNotFoundError(message) from exc

S = TypeVar("S", bound=BaseSettings)


def is_pydantic_settings_subclass(candidate: object) -> TypeGuard[type[BaseSettings]]:
    """Return whether ``candidate`` is a ``pydantic_settings.BaseSettings`` subclass.

    Args:
        candidate: Object to test.

    Returns:
        ``True`` for runtime classes deriving from ``BaseSettings``;
        ``False`` for instances, generic aliases and unrelated classes.

    """
    if not isinstance(candidate, type) or isinstance(candidate, types.GenericAlias):
        return False
    try:
        return issubclass(candidate, BaseSettings)
    except TypeError:
        return False


def provide_settings(
    settings_cls: type[S],
    *,
    mode: InstanceModeLike = DEFAULT_INSTANCE_MODE,
    name: str | None = None,
    **init_kwargs: Any,
) -> Provider[S]:
    """Create a provider that loads ``settings_cls`` on first resolution.

    Settings are read from the environment (and any sources configured on
    the model) when the provider is resolved, not when it is created. With
    the default shared mode they are loaded once per process; call
    ``reset_global_cache`` to reload them.

    Args:
        settings_cls: ``BaseSettings`` subclass to instantiate.
        mode: Instance mode of the returned provider.
        name: Display name; defaults to the class name.
        **init_kwargs: Keyword arguments forwarded to the settings constructor.

    Returns:
        A provider of ``settings_cls`` instances. Use it as the ``overrides``
        target of a local override to substitute settings in a sub-graph.

    Raises:
        LazywireInvalidProviderError: If ``settings_cls`` is not a
            ``BaseSettings`` subclass.

    """
    if not is_pydantic_settings_subclass(settings_cls):
        msg = f"provide_settings() expects a pydantic-settings BaseSettings subclass, got {settings_cls!r}"
        raise LazywireInvalidProviderError(msg)

    def load_settings(_resolver: Any) -> S:
        return settings_cls(**init_kwargs)

    return provide(
        load_settings,
        mode=mode,
        name=name if name is not None else settings_cls.__name__,
    )


__all__ = ["is_pydantic_settings_subclass", "provide_settings"]
