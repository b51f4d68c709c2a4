"""Tests for local overrides and override scoping."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from lazywire import InstanceMode, Resolver, provide, run_in_injection_context
from tests.conftest import CallCounter


def resolve(ref: Any) -> Any:
    return run_in_injection_context(lambda resolver: resolver.resolve(ref))


class TestOverrideShadowing:
    def test_override_is_visible_to_transitive_dependencies(self) -> None:
        base = provide(lambda _: "base")
        service = provide(lambda r: f"service({r.resolve(base)})")
        wrapper = provide(
            lambda r: r.resolve(service),
            local_overrides=[provide(lambda _: "X", overrides=base)],
        )

        assert resolve(wrapper) == "service(X)"
        assert resolve(base) == "base"

    def test_override_is_not_visible_to_the_caller(self) -> None:
        cfg = provide(lambda _: {"url": "a"})
        child = provide(
            lambda r: r.resolve(cfg)["url"],
            local_overrides=[provide(lambda _: {"url": "b"}, overrides=cfg)],
        )

        def resolve_both(resolver: Resolver) -> tuple[str, dict[str, str]]:
            return resolver.resolve(child), resolver.resolve(cfg)

        assert run_in_injection_context(resolve_both) == ("b", {"url": "a"})

    def test_override_is_not_visible_to_siblings(self) -> None:
        value = provide(lambda _: "root", mode="scoped")
        overriding = provide(
            lambda r: r.resolve(value),
            mode="scoped",
            local_overrides=[provide(lambda _: "local", overrides=value)],
        )
        sibling = provide(lambda r: r.resolve(value), mode="scoped")
        parent = provide(lambda r: (r.resolve(overriding), r.resolve(sibling)), mode="scoped")

        assert resolve(parent) == ("local", "root")

    def test_multiple_overrides_in_single_provider(self) -> None:
        a = provide(lambda _: "A")
        b = provide(lambda _: "B")
        combined = provide(
            lambda r: f"{r.resolve(a)}-{r.resolve(b)}",
            local_overrides=[
                provide(lambda _: "X", overrides=a),
                provide(lambda _: "Y", overrides=b),
            ],
        )

        def resolve_all(resolver: Resolver) -> tuple[str, str, str]:
            return resolver.resolve(a), resolver.resolve(b), resolver.resolve(combined)

        assert run_in_injection_context(resolve_all) == ("A", "B", "X-Y")

    def test_later_override_of_same_target_wins(self) -> None:
        value = provide(lambda _: "root")
        ref = provide(
            lambda r: r.resolve(value),
            local_overrides=[
                provide(lambda _: "first", overrides=value),
                provide(lambda _: "second", overrides=value),
            ],
        )

        assert resolve(ref) == "second"

    def test_override_without_target_replaces_only_itself(self) -> None:
        original = provide(lambda _: "original")
        service = provide(
            lambda r: f"service:{r.resolve(original)}",
            local_overrides=[provide(lambda _: "new")],
        )

        assert resolve(original) == "original"
        assert resolve(service) == "service:original"

    def test_empty_local_overrides(self) -> None:
        ref = provide(lambda _: "value", local_overrides=[])

        assert resolve(ref) == "value"


class TestNestedOverrides:
    def test_innermost_override_wins(self) -> None:
        value = provide(lambda _: "root")
        level1 = provide(
            lambda r: f"L1:{r.resolve(value)}",
            mode=InstanceMode.SCOPED,
            local_overrides=[provide(lambda _: "level1", overrides=value)],
        )
        level2 = provide(
            lambda r: f"L2:{r.resolve(level1)}",
            mode=InstanceMode.SCOPED,
            local_overrides=[provide(lambda _: "level2", overrides=value)],
        )

        assert resolve(level2) == "L2:L1:level1"
        assert resolve(level1) == "L1:level1"
        assert resolve(value) == "root"

    def test_ancestor_override_applies_when_inner_scope_does_not_override(self) -> None:
        value = provide(lambda _: "root")
        unrelated = provide(lambda _: "unrelated")
        inner = provide(
            lambda r: r.resolve(value),
            mode=InstanceMode.SCOPED,
            local_overrides=[provide(lambda _: "other", overrides=unrelated)],
        )
        outer = provide(
            lambda r: r.resolve(inner),
            mode=InstanceMode.SCOPED,
            local_overrides=[provide(lambda _: "outer", overrides=value)],
        )

        assert resolve(outer) == "outer"

    def test_shared_inner_provider_keeps_first_configuration(self) -> None:
        value = provide(lambda _: "root")
        level1 = provide(
            lambda r: f"L1:{r.resolve(value)}",
            local_overrides=[provide(lambda _: "level1", overrides=value)],
        )
        level2 = provide(
            lambda r: f"L2:{r.resolve(level1)}",
            local_overrides=[provide(lambda _: "level2", overrides=value)],
        )

        def resolve_all(resolver: Resolver) -> tuple[str, str, str]:
            return resolver.resolve(value), resolver.resolve(level1), resolver.resolve(level2)

        assert run_in_injection_context(resolve_all) == ("root", "L1:level1", "L2:L1:level1")

    def test_deep_dependency_chain_with_override(self) -> None:
        config = provide(lambda _: {"url": "prod.com"})
        http = provide(lambda r: {"base_url": r.resolve(config)["url"]}, mode="scoped")
        api = provide(lambda r: f"https://{r.resolve(http)['base_url']}/api", mode="scoped")
        app = provide(
            lambda r: r.resolve(api),
            local_overrides=[provide(lambda _: {"url": "test.com"}, overrides=config)],
        )

        assert resolve(app) == "https://test.com/api"
        assert resolve(api) == "https://prod.com/api"


class TestFirstWriteWins:
    def test_override_does_not_affect_singleton_created_before(self) -> None:
        config = provide(lambda _: "global config")
        service = provide(lambda r: r.resolve(config))
        local_service = provide(
            lambda r: r.resolve(service),
            local_overrides=[provide(lambda _: "local config", overrides=config)],
        )

        def resolve_both(resolver: Resolver) -> tuple[str, str]:
            return resolver.resolve(service), resolver.resolve(local_service)

        assert run_in_injection_context(resolve_both) == ("global config", "global config")

    def test_override_becomes_singleton_when_created_first(self) -> None:
        config = provide(lambda _: "global config")
        service = provide(lambda r: r.resolve(config))
        local_service = provide(
            lambda r: r.resolve(service),
            local_overrides=[provide(lambda _: "local config", overrides=config)],
        )

        def resolve_both(resolver: Resolver) -> tuple[str, str]:
            return resolver.resolve(local_service), resolver.resolve(service)

        assert run_in_injection_context(resolve_both) == ("local config", "local config")
        assert resolve(service) == "local config"
        assert resolve(config) == "global config"

    def test_shared_provider_is_shared_across_override_scopes(self, counter: CallCounter) -> None:
        shared = provide(lambda _: {"id": counter()})
        dummy = provide(lambda _: "root")
        child = provide(
            lambda r: r.resolve(shared),
            local_overrides=[provide(lambda _: "child", overrides=dummy)],
        )

        def resolve_both(resolver: Resolver) -> tuple[Any, Any]:
            return resolver.resolve(shared), resolver.resolve(child)

        root_value, child_value = run_in_injection_context(resolve_both)

        assert child_value is root_value
        assert counter.count == 1


class TestCapturedResolver:
    def test_captured_resolver_keeps_override_scope(self) -> None:
        config = provide(lambda _: "global config")

        def make_service(resolver: Resolver) -> Callable[[], str]:
            return lambda: resolver.resolve(config)

        service = provide(
            make_service,
            local_overrides=[provide(lambda _: "local config", overrides=config)],
        )

        def resolve_both(resolver: Resolver) -> tuple[str, str]:
            get_config = resolver.resolve(service)
            return get_config(), resolver.resolve(config)

        assert run_in_injection_context(resolve_both) == ("local config", "global config")


@dataclass
class Tenant:
    id: str
    name: str


class TestMultiTenantScenario:
    def test_each_tenant_sees_its_own_configuration(self) -> None:
        tenant = provide(lambda _: Tenant(id="default", name="Default"))
        database = provide(
            lambda r: f"db://{r.resolve(tenant).id}",
            mode="scoped",
        )
        repository = provide(
            lambda r: {"tenant": r.resolve(tenant).name, "db": r.resolve(database)},
            mode="scoped",
        )

        def tenant_app(tenant_id: str, name: str) -> Any:
            return provide(
                lambda r: r.resolve(repository),
                mode="scoped",
                local_overrides=[provide(lambda _: Tenant(id=tenant_id, name=name), overrides=tenant)],
            )

        acme = tenant_app("acme", "Acme")
        globex = tenant_app("globex", "Globex")

        def resolve_all(resolver: Resolver) -> tuple[Any, Any, Any]:
            return resolver.resolve(acme), resolver.resolve(globex), resolver.resolve(repository)

        acme_repo, globex_repo, default_repo = run_in_injection_context(resolve_all)

        assert acme_repo == {"tenant": "Acme", "db": "db://acme"}
        assert globex_repo == {"tenant": "Globex", "db": "db://globex"}
        assert default_repo == {"tenant": "Default", "db": "db://default"}
