"""Quickstart: build an object graph and call a method with resolved arguments.

Only the top-level service is requested. Its constructor dependencies are
built from their type hints, and ``call`` fills method parameters from named
arguments.
"""

from __future__ import annotations

from diresolve import Resolve


class Database:
    def __init__(self) -> None:
        self.host = "localhost"


class UserRepository:
    def __init__(self, database: Database) -> None:
        self.database = database


class UserService:
    def __init__(self, repository: UserRepository) -> None:
        self.repository = repository

    def get_user(self, user_id: int) -> str:
        return f"user-{user_id}@{self.repository.database.host}"


def main() -> None:
    resolve = Resolve()
    service = resolve.make(UserService)

    print(f"db_host={service.repository.database.host}")  # => db_host=localhost

    chain = (
        f"{type(service).__name__}"
        f">{type(service.repository).__name__}"
        f">{type(service.repository.database).__name__}"
    )
    print(f"chain={chain}")  # => chain=UserService>UserRepository>Database

    print(resolve.call(service.get_user, {"user_id": 42}))  # => user-42@localhost


if __name__ == "__main__":
    main()
