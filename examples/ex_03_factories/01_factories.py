"""Factories: build a contract with a callable instead of a constructor.

Factory parameters are auto-wired exactly like constructor parameters, so a
factory can depend on other registered contracts.
"""

from __future__ import annotations

from dataclasses import dataclass

from tinywire import Container, Lifetime


@dataclass
class Settings:
    api_url: str = "https://api.example.com"


class HttpClient:
    def __init__(self, base_url: str) -> None:
        self.base_url = base_url


def build_client(settings: Settings) -> HttpClient:
    return HttpClient(base_url=settings.api_url)


def main() -> None:
    container = Container()
    container.add_singleton(Settings)
    container.add_factory(build_client, provides=HttpClient, lifetime=Lifetime.SINGLETON)

    client = container.resolve(HttpClient)
    print(f"base_url={client.base_url}")  # => base_url=https://api.example.com
    print(f"cached={client is container.resolve(HttpClient)}")  # => cached=True


if __name__ == "__main__":
    main()
