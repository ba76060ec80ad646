"""Lifetimes: ``TRANSIENT`` and ``SINGLETON``.

See how object identity changes across repeated resolves, and how a singleton
dependency is shared between otherwise independent transient services.
"""

from __future__ import annotations

from tinywire import Container


class Clock:
    pass


class ReportBuilder:
    def __init__(self, clock: Clock) -> None:
        self.clock = clock


class AuditTrail:
    def __init__(self, clock: Clock) -> None:
        self.clock = clock


def main() -> None:
    container = Container()
    container.add_singleton(Clock)
    container.add_transient(ReportBuilder)
    container.add_transient(AuditTrail)

    builder_first = container.resolve(ReportBuilder)
    builder_second = container.resolve(ReportBuilder)
    print(f"transient_new={builder_first is not builder_second}")  # => transient_new=True

    audit = container.resolve(AuditTrail)
    print(f"singleton_shared={builder_first.clock is audit.clock}")  # => singleton_shared=True

    container.add_transient(Clock)
    rebound = container.resolve(ReportBuilder)
    print(f"rebound_fresh={rebound.clock is not audit.clock}")  # => rebound_fresh=True


if __name__ == "__main__":
    main()
