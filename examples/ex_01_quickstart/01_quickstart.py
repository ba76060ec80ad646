"""Quickstart: bind contracts to implementations and resolve the graph.

Register an abstract ``Logger`` as a singleton and a ``UserService`` that
depends on it as transient. Resolving ``UserService`` builds the logger first
and injects it through the constructor.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from tinywire import Container, Lifetime


class Logger(ABC):
    @abstractmethod
    def log(self, message: str) -> None: ...


class ConsoleLogger(Logger):
    def log(self, message: str) -> None:
        print(f"[LOG] {message}")  # => [LOG] Creating user: John Doe


class UserService(ABC):
    @abstractmethod
    def create_user(self, name: str) -> None: ...


class UserServiceImpl(UserService):
    def __init__(self, logger: Logger) -> None:
        self.logger = logger

    def create_user(self, name: str) -> None:
        self.logger.log(f"Creating user: {name}")


def main() -> None:
    container = Container()
    container.register(Logger, ConsoleLogger, lifetime=Lifetime.SINGLETON)
    container.register(UserService, UserServiceImpl, lifetime=Lifetime.TRANSIENT)

    first = container.resolve(UserService)
    second = container.resolve(UserService)
    first.create_user("John Doe")

    print(f"services_distinct={first is not second}")  # => services_distinct=True
    shared = first.logger is second.logger is container.resolve(Logger)
    print(f"logger_shared={shared}")  # => logger_shared=True


if __name__ == "__main__":
    main()
