from __future__ import annotations

from typing import Any


def describe_key(key: Any) -> str:
    """Return a readable name for a dependency key."""
    return getattr(key, "__qualname__", None) or repr(key)


class TinyWireError(Exception):
    """Represent a base class for all tinywire-specific failures.

    Catch this type when you want to handle any tinywire error path without
    matching each concrete exception class individually.
    """


class UnregisteredServiceError(TinyWireError):
    """Signal that a contract has no registered service descriptor.

    Raised by ``Container.resolve`` for the requested contract, or for any
    contract reached while resolving constructor dependencies. In the nested
    case the error names the innermost missing contract, not the root.

    Typical fix is registering the contract with ``Container.register``,
    ``Container.add_transient``, ``Container.add_singleton`` or
    ``Container.add_factory`` before resolving.
    """

    def __init__(self, contract: Any) -> None:
        self.contract = contract
        super().__init__(f"Service of type '{describe_key(contract)}' is not registered.")


class NoSuitableConstructorError(TinyWireError):
    """Signal that an implementation cannot be constructed by the container.

    Raised while resolving when the bound implementation is not a class, is an
    abstract class, or exposes a constructor whose signature cannot be
    inspected.

    Typical fixes include binding a concrete subclass or registering a factory
    with ``Container.add_factory`` instead.
    """

    def __init__(self, implementation: Any, reason: str) -> None:
        self.implementation = implementation
        self.reason = reason
        super().__init__(
            f"No suitable constructor found for '{describe_key(implementation)}': {reason}",
        )


class DependencyInferenceError(NoSuitableConstructorError):
    """Signal that a required constructor parameter has no usable annotation.

    Common triggers are missing annotations or forward references that cannot
    be evaluated in the implementation's module.

    Typical fixes include annotating the parameter with the contract it needs
    or giving it a default value.
    """
