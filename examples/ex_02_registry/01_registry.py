"""Registry: hand ready-made values to the resolver.

Class-typed parameters are looked up by the dotted class name, untyped and
builtin-typed parameters by their own name. Registry values are shared while
everything else is built fresh for every request.
"""

from __future__ import annotations

from diresolve import DictRegistry, Resolve, class_name


class Settings:
    def __init__(self, dsn: str) -> None:
        self.dsn = dsn


class Database:
    def __init__(self, settings: Settings) -> None:
        self.settings = settings


class Repository:
    def __init__(self, database: Database, table: str) -> None:
        self.database = database
        self.table = table


def main() -> None:
    database = Database(Settings("sqlite:///app.db"))
    registry = DictRegistry({Database: database, "table": "users"})
    resolve = Resolve(registry)

    first = resolve.make(Repository)
    second = resolve.make(Repository)

    print(f"table={first.table}")  # => table=users
    print(f"dsn={first.database.settings.dsn}")  # => dsn=sqlite:///app.db
    print(f"shared_database={first.database is second.database}")  # => shared_database=True
    print(f"new_repository={first is not second}")  # => new_repository=True
    print(f"registry_key={class_name(Database)}")  # => registry_key=__main__.Database


if __name__ == "__main__":
    main()
