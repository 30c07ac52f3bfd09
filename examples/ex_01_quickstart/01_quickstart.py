"""Quickstart: register providers by token and resolve a dependency chain.

Tokens are plain strings. Providers receive the scope that is resolving them
and use it to resolve their own dependencies.
"""

from __future__ import annotations

from autocontainer import Container, class_provider


class Database:
    def __init__(self) -> None:
        self.host = "localhost"


class UserRepository:
    def __init__(self, database: Database) -> None:
        self.database = database


class UserService:
    def __init__(self, repository: UserRepository) -> None:
        self.repository = repository


def main() -> None:
    container = Container.create()
    container.provide("Database@app/db.py", lambda scope, hint: Database())
    container.provide(
        "UserRepository@app/users.py",
        lambda scope, hint: UserRepository(scope.make("Database@app/db.py")),
    )
    # Constructor providers build the class hint from resolved tokens.
    container.provide("UserService@app/users.py", class_provider("UserRepository@app/users.py"))

    service = container.make("UserService@app/users.py", UserService)

    print(f"db_host={service.repository.database.host}")  # => db_host=localhost

    chain = (
        f"{type(service).__name__}"
        f">{type(service.repository).__name__}"
        f">{type(service.repository.database).__name__}"
    )
    print(f"chain={chain}")  # => chain=UserService>UserRepository>Database


if __name__ == "__main__":
    main()
