"""Local overrides: substitute a dependency for one sub-graph only.

A provider can carry overrides that apply to everything resolved while its
factory runs. Callers and siblings still see the original providers.
"""

from __future__ import annotations

from lazywire import Resolver, provide, run_in_injection_context

config = provide(lambda _: {"url": "https://prod.example.com"}, name="config")
client = provide(lambda resolver: f"client({resolver.resolve(config)['url']})", mode="scoped")

test_client = provide(
    lambda resolver: resolver.resolve(client),
    mode="scoped",
    local_overrides=[
        provide(lambda _: {"url": "https://test.example.com"}, overrides=config),
    ],
)


def main() -> None:
    def resolve_all(resolver: Resolver) -> tuple[str, str]:
        return resolver.resolve(test_client), resolver.resolve(client)

    overridden, original = run_in_injection_context(resolve_all)

    print(overridden)  # => client(https://test.example.com)
    print(original)  # => client(https://prod.example.com)

    # A shared provider keeps whichever configuration built it first.
    service = provide(lambda resolver: resolver.resolve(config)["url"])
    local_service = provide(
        lambda resolver: resolver.resolve(service),
        local_overrides=[provide(lambda _: {"url": "https://local.example.com"}, overrides=config)],
    )
    first_built = run_in_injection_context(lambda resolver: resolver.resolve(local_service))
    print(f"first_write={first_built}")  # => first_write=https://local.example.com
    print(f"shared_service={run_in_injection_context(lambda r: r.resolve(service))}")  # => shared_service=https://local.example.com


if __name__ == "__main__":
    main()
