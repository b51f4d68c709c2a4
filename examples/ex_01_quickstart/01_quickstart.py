"""Quickstart: declare providers and resolve them in an injection context.

Each provider wraps a factory that receives a resolver. Dependencies are
resolved on demand, so nothing is built until the top-level provider is
asked for.
"""

from __future__ import annotations

from dataclasses import dataclass

from lazywire import Resolver, provide, run_in_injection_context


@dataclass
class Database:
    host: str


@dataclass
class UserRepository:
    database: Database


@dataclass
class UserService:
    repository: UserRepository


database = provide(lambda _: Database(host="localhost"))


def make_repository(resolver: Resolver) -> UserRepository:
    return UserRepository(database=resolver.resolve(database))


repository = provide(make_repository)
service = provide(lambda resolver: UserService(repository=resolver.resolve(repository)))


def main() -> None:
    user_service = run_in_injection_context(lambda resolver: resolver.resolve(service))

    print(f"db_host={user_service.repository.database.host}")  # => db_host=localhost

    chain = (
        f"{type(user_service).__name__}"
        f">{type(user_service.repository).__name__}"
        f">{type(user_service.repository.database).__name__}"
    )
    print(f"chain={chain}")  # => chain=UserService>UserRepository>Database
    print(f"repository_name={repository.name}")  # => repository_name=make_repository
    print(f"service_name={service.name}")  # => service_name=<anonymous>


if __name__ == "__main__":
    main()
