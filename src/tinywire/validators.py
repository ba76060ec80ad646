from __future__ import annotations

import inspect

from tinywire.exceptions import NoSuitableConstructorError


class ImplementationValidator:
    """Validates bound implementations before their constructors are inspected."""

    def validate_implementation(self, implementation: object) -> None:
        """Validate that an implementation is an instantiable class."""
        if not inspect.isclass(implementation):
            raise NoSuitableConstructorError(implementation, "implementation must be a class.")

        if getattr(implementation, "_is_protocol", False):
            raise NoSuitableConstructorError(
                implementation,
                "protocols cannot be instantiated; bind a concrete implementation.",
            )

        if inspect.isabstract(implementation):
            raise NoSuitableConstructorError(
                implementation,
                "abstract classes cannot be instantiated; bind a concrete subclass.",
            )

    def validate_factory(self, factory: object) -> None:
        """Validate that a factory is callable."""
        if not callable(factory):
            raise NoSuitableConstructorError(factory, "factory must be callable.")
