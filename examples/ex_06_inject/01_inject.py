"""Implicit injection: resolve through the active context with ``inject``.

While a factory or a function passed to ``run_in_injection_context`` runs,
``inject`` resolves against the current resolver, including its local
overrides. Outside an injection context it raises, unless ``optional`` is set.
"""

from __future__ import annotations

from lazywire import (
    LazywireNoActiveContextError,
    Resolver,
    inject,
    is_in_injection_context,
    provide,
    run_in_injection_context,
)

greeting = provide(lambda _: "hello")
message = provide(
    lambda _: f"{inject(greeting)}, world",
    mode="scoped",
    local_overrides=[provide(lambda _: "hi", overrides=greeting)],
)


def main() -> None:
    print(f"in_context={is_in_injection_context()}")  # => in_context=False

    def handler(_: Resolver) -> str:
        return f"{inject(message)} / {inject(greeting)}"

    print(run_in_injection_context(handler))  # => hi, world / hello

    try:
        inject(greeting)
    except LazywireNoActiveContextError:
        print("outside_context=error")  # => outside_context=error

    print(f"optional={inject(greeting, optional=True)}")  # => optional=None


if __name__ == "__main__":
    main()
