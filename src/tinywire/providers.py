from __future__ import annotations

import inspect
import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum, auto
from inspect import Parameter
from typing import Any, TypeAlias, get_type_hints

from tinywire.exceptions import (
    DependencyInferenceError,
    NoSuitableConstructorError,
    UnregisteredServiceError,
)

Contract: TypeAlias = Any
"""A dependency key registered or requested by the user's code."""

ImplementationType: TypeAlias = type[Any]
"""A concrete class instantiated to satisfy a contract."""

FactoryProvider: TypeAlias = Callable[..., Any]
"""A callable producing an instance that satisfies a contract."""

_MISSING_ANNOTATION: Any = object()


class Lifetime(Enum):
    """Define cache behavior for resolved instances."""

    TRANSIENT = auto()
    """Disable caching and build a new instance for every resolution call."""

    SINGLETON = auto()
    """Build once on first resolution and share the instance for the container lifetime."""


@dataclass(kw_only=True)
class ServiceDescriptor:
    """Describe how a single contract is satisfied and cached.

    Exactly one of ``implementation`` or ``factory`` is set. ``instance`` is
    populated at most once, on the first resolution of a singleton, and is
    never populated for transient descriptors.
    """

    contract: Contract
    """The contract this descriptor satisfies."""

    implementation: ImplementationType | None = None
    """Concrete class instantiated through its constructor, if applicable."""
    factory: FactoryProvider | None = None
    """Callable invoked to build the instance, if applicable."""

    lifetime: Lifetime
    """Instance reuse policy."""

    instance: Any = None
    """Cached singleton instance; meaningful only when ``is_cached`` is true."""
    is_cached: bool = False
    """True once a singleton instance has been stored."""

    lock: threading.RLock | None = None
    """Guard for first singleton construction; ``None`` disables locking."""

    dependencies: list[ConstructorDependency] | None = field(default=None, repr=False)
    """Constructor dependencies, extracted on first construction."""

    @property
    def provider(self) -> Callable[..., Any]:
        """Return the callable used to build new instances."""
        if self.factory is not None:
            return self.factory
        return self.implementation  # type: ignore[return-value]

    def cache(self, instance: Any) -> None:
        """Store a freshly built singleton instance."""
        self.instance = instance
        self.is_cached = True


class ServiceRegistry:
    """Store service descriptors indexed by contract.

    Contracts are unique: adding a descriptor for an already registered
    contract replaces the previous one.
    """

    def __init__(self) -> None:
        self._descriptors_by_contract: dict[Contract, ServiceDescriptor] = {}

    def add(self, descriptor: ServiceDescriptor) -> None:
        """Add or replace the descriptor for ``descriptor.contract``."""
        self._descriptors_by_contract[descriptor.contract] = descriptor

    def find(self, contract: Contract) -> ServiceDescriptor | None:
        """Get the descriptor for a contract, if it exists."""
        return self._descriptors_by_contract.get(contract)

    def get(self, contract: Contract) -> ServiceDescriptor:
        """Get the descriptor for a contract.

        Raises:
            UnregisteredServiceError: If the contract has no descriptor.

        """
        descriptor = self._descriptors_by_contract.get(contract)
        if descriptor is None:
            raise UnregisteredServiceError(contract)
        return descriptor

    def values(self) -> list[ServiceDescriptor]:
        """Get all descriptors in registration order."""
        return list(self._descriptors_by_contract.values())

    def __contains__(self, contract: object) -> bool:
        return contract in self._descriptors_by_contract

    def __len__(self) -> int:
        return len(self._descriptors_by_contract)


@dataclass(slots=True)
class ConstructorDependency:
    """Represents a constructor parameter satisfied by resolving a contract."""

    provides: Contract
    parameter: Parameter

    @property
    def has_default(self) -> bool:
        return self.parameter.default is not Parameter.empty

    @property
    def is_positional_only(self) -> bool:
        return self.parameter.kind is Parameter.POSITIONAL_ONLY


@dataclass(slots=True)
class ConstructorDependenciesExtractor:
    """Extracts ordered constructor dependencies from implementations and factories.

    A class is inspected through ``inspect.signature(cls)``, which follows the
    same ``__new__``/``__init__`` lookup the interpreter uses to instantiate
    it, so selection is deterministic. Generated initializers from
    dataclasses, NamedTuple, attrs, pydantic and msgspec are inspected the same
    way.
    """

    def extract_from_implementation(
        self,
        implementation: ImplementationType,
    ) -> list[ConstructorDependency]:
        """Extract dependencies from a concrete class constructor."""
        return self._extract_dependencies(
            provider=implementation,
            provider_name=implementation.__qualname__,
        )

    def extract_from_factory(
        self,
        factory: FactoryProvider,
    ) -> list[ConstructorDependency]:
        """Extract dependencies from a factory callable."""
        return self._extract_dependencies(
            provider=factory,
            provider_name=self._provider_name(factory),
        )

    def _extract_dependencies(
        self,
        *,
        provider: Callable[..., Any],
        provider_name: str,
    ) -> list[ConstructorDependency]:
        parameters = self._provider_parameters(provider)
        annotations, annotation_error = self._resolved_type_hints(provider)
        dependencies: list[ConstructorDependency] = []

        for parameter in parameters:
            if parameter.kind in (Parameter.VAR_POSITIONAL, Parameter.VAR_KEYWORD):
                continue

            provides = self._resolve_parameter_annotation(
                parameter=parameter,
                annotations=annotations,
                annotation_error=annotation_error,
                provider=provider,
                provider_name=provider_name,
            )
            if provides is _MISSING_ANNOTATION:
                continue

            dependencies.append(ConstructorDependency(provides=provides, parameter=parameter))

        return dependencies

    def _resolve_parameter_annotation(
        self,
        *,
        parameter: Parameter,
        annotations: dict[str, Any],
        annotation_error: Exception | None,
        provider: Callable[..., Any],
        provider_name: str,
    ) -> Any:
        annotation = annotations.get(parameter.name, _MISSING_ANNOTATION)
        if annotation is not _MISSING_ANNOTATION:
            return annotation

        raw_annotation = parameter.annotation
        if raw_annotation is not Parameter.empty and not isinstance(raw_annotation, str):
            return raw_annotation

        # Unannotated optional parameters keep their default.
        if parameter.default is not Parameter.empty:
            return _MISSING_ANNOTATION

        reason = (
            f"unable to infer dependency for required parameter '{parameter.name}' "
            f"in '{provider_name}'. Add a type annotation or a default value."
        )
        if annotation_error is None:
            raise DependencyInferenceError(provider, reason)
        msg = f"{reason} Original annotation error: {annotation_error}"
        raise DependencyInferenceError(provider, msg) from annotation_error

    def _provider_parameters(self, provider: Callable[..., Any]) -> tuple[Parameter, ...]:
        try:
            return tuple(inspect.signature(provider).parameters.values())
        except (TypeError, ValueError) as error:
            msg = f"constructor signature cannot be inspected ({error})."
            raise NoSuitableConstructorError(provider, msg) from error

    def _resolved_type_hints(
        self,
        provider: Callable[..., Any],
    ) -> tuple[dict[str, Any], Exception | None]:
        if not inspect.isclass(provider):
            try:
                return get_type_hints(provider, include_extras=True), None
            except (AttributeError, NameError, TypeError) as error:
                return {}, error

        # Constructor hints take precedence over class-level field annotations.
        merged_annotations: dict[str, Any] = {}
        merged_error: Exception | None = None
        for member in (provider.__init__, provider.__new__, provider):
            try:
                member_annotations = get_type_hints(member, include_extras=True)
            except (AttributeError, NameError, TypeError) as error:
                if merged_error is None:
                    merged_error = error
                continue
            for parameter_name, parameter_annotation in member_annotations.items():
                merged_annotations.setdefault(parameter_name, parameter_annotation)

        return merged_annotations, merged_error

    def _provider_name(self, provider: Callable[..., Any]) -> str:
        return getattr(provider, "__qualname__", repr(provider))
