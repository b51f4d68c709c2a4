"""Async factories: awaitable results and single-flight construction.

A factory that returns an awaitable is scheduled on the running loop. For a
shared provider, every concurrent resolution receives the same pending
future, so the factory runs once. A failed construction is evicted and the
next resolution retries.
"""

from __future__ import annotations

import asyncio

from lazywire import Resolver, provide, run_in_injection_context

calls = {"client": 0, "flaky": 0}


async def make_client(_: Resolver) -> dict[str, str]:
    calls["client"] += 1
    await asyncio.sleep(0.01)
    return {"status": "connected"}


async def make_flaky(_: Resolver) -> str:
    calls["flaky"] += 1
    if calls["flaky"] == 1:
        msg = "temporary failure"
        raise ConnectionError(msg)
    return "recovered"


client = provide(make_client)
flaky = provide(make_flaky)


async def handle(resolver: Resolver) -> str:
    first, second = await asyncio.gather(resolver.resolve(client), resolver.resolve(client))
    print(f"same_client={first is second}")  # => same_client=True
    print(f"client_calls={calls['client']}")  # => client_calls=1

    try:
        await resolver.resolve(flaky)
    except ConnectionError as error:
        print(f"first_attempt={error}")  # => first_attempt=temporary failure

    return await resolver.resolve(flaky)


async def main() -> None:
    result = await run_in_injection_context(handle)
    print(f"second_attempt={result}")  # => second_attempt=recovered


if __name__ == "__main__":
    asyncio.run(main())
