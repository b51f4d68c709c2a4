from __future__ import annotations

from collections.abc import Iterator

import pytest

from lazywire._internal.cache import reset_global_cache
from lazywire._internal.resolver import Resolver
from lazywire.resolver_context import run_in_injection_context


@pytest.fixture(autouse=True)
def _lazywire_global_cache() -> Iterator[None]:
    """Isolate shared instances between tests.

    The process-wide cache is cleared before and after every test, so a
    shared provider built in one test is never observed by another.
    """
    reset_global_cache()
    yield
    reset_global_cache()


@pytest.fixture()
def lazywire_resolver() -> Resolver:
    """Return the resolver of a fresh root injection context.

    Equivalent to the resolver passed to ``run_in_injection_context``; it
    stays usable for the whole test, including after ``await`` points.

    Returns:
        A root ``Resolver`` with no local overrides.

    """
    return run_in_injection_context(_identity)


def _identity(resolver: Resolver) -> Resolver:
    return resolver
