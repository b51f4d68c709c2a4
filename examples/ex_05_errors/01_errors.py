"""Errors: circular dependencies and async providers outside an event loop.

Every library error derives from ``LazywireError``. A cycle is reported with
the display name of the provider that was requested twice.
"""

from __future__ import annotations

from typing import Any

from lazywire import (
    LazywireAsyncProviderOutsideEventLoopError,
    LazywireCircularDependencyError,
    LazywireError,
    LazywireInvalidProviderError,
    Provider,
    Resolver,
    provide,
    run_in_injection_context,
)

orders: Provider[Any] = provide(lambda resolver: resolver.resolve(payments), name="orders")
payments: Provider[Any] = provide(lambda resolver: resolver.resolve(orders), name="payments")


async def make_connection(_: Resolver) -> str:
    return "connection"


connection = provide(make_connection)


def main() -> None:
    try:
        run_in_injection_context(lambda resolver: resolver.resolve(orders))
    except LazywireCircularDependencyError as error:
        print(error.name)  # => orders
        print(" -> ".join(provider.name for provider in error.chain))  # => orders -> payments -> orders
        print(isinstance(error, LazywireError))  # => True

    try:
        run_in_injection_context(lambda resolver: resolver.resolve(connection))
    except LazywireAsyncProviderOutsideEventLoopError as error:
        print(error)  # => Provider make_connection returned an awaitable but no event loop is running

    try:
        run_in_injection_context(lambda resolver: resolver.resolve("orders"))
    except LazywireInvalidProviderError:
        print("invalid_provider=True")  # => invalid_provider=True


if __name__ == "__main__":
    main()
