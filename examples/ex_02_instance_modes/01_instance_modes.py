"""Instance modes: shared instances versus one instance per resolution.

Shared providers are built once per process and reused by every injection
context. Scoped providers run their factory on every resolution.
"""

from __future__ import annotations

import itertools

from lazywire import InstanceMode, provide, reset_global_cache, run_in_injection_context

_ids = itertools.count(1)

settings = provide(lambda _: {"id": next(_ids)})
request = provide(lambda _: {"id": next(_ids)}, mode=InstanceMode.SCOPED)


def main() -> None:
    first = run_in_injection_context(lambda resolver: resolver.resolve(settings))
    second = run_in_injection_context(lambda resolver: resolver.resolve(settings))
    print(f"shared_same={first is second}")  # => shared_same=True

    a = run_in_injection_context(lambda resolver: resolver.resolve(request))
    b = run_in_injection_context(lambda resolver: resolver.resolve(request))
    print(f"scoped_same={a is b}")  # => scoped_same=False
    print(f"scoped_ids={a['id']},{b['id']}")  # => scoped_ids=2,3

    reset_global_cache()
    rebuilt = run_in_injection_context(lambda resolver: resolver.resolve(settings))
    print(f"after_reset_id={rebuilt['id']}")  # => after_reset_id=4


if __name__ == "__main__":
    main()
