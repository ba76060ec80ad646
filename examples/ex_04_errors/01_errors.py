"""Errors: missing registrations surface with the exact missing contract.

Resolution aborts on the first unregistered dependency, even when it sits
deep inside the graph, and the error names that dependency rather than the
root that was requested.
"""

from __future__ import annotations

from tinywire import Container, UnregisteredServiceError


class Database:
    pass


class Repository:
    def __init__(self, database: Database) -> None:
        self.database = database


class Service:
    def __init__(self, repository: Repository) -> None:
        self.repository = repository


def main() -> None:
    container = Container()
    container.add_transient(Service)
    container.add_transient(Repository)

    try:
        container.resolve(Service)
    except UnregisteredServiceError as error:
        print(f"missing={error.contract.__name__}")  # => missing=Database


if __name__ == "__main__":
    main()
