from __future__ import annotations

import logging
import threading
from typing import Any, TypeVar, overload

from tinywire.exceptions import describe_key
from tinywire.lock_mode import LockMode
from tinywire.providers import (
    ConstructorDependenciesExtractor,
    ConstructorDependency,
    Contract,
    FactoryProvider,
    Lifetime,
    ServiceDescriptor,
    ServiceRegistry,
)
from tinywire.validators import ImplementationValidator

T = TypeVar("T")

logger = logging.getLogger(__name__)


class Container:
    """Register contracts against implementations and resolve wired object graphs.

    Contracts are usually abstract classes, protocols, or concrete types, but
    any hashable key (for example an ``Annotated`` token) works. Each
    implementation's constructor annotations are read at resolution time and
    every annotated parameter is resolved recursively, depth-first, before the
    implementation itself is built.

    Every container owns its registry; nothing is shared between containers.
    Dependency cycles are not detected and end in ``RecursionError``.
    """

    def __init__(
        self,
        default_lifetime: Lifetime = Lifetime.TRANSIENT,
        *,
        lock_mode: LockMode = LockMode.THREAD,
    ) -> None:
        """Initialize an empty container.

        Args:
            default_lifetime: Lifetime used by registrations that omit ``lifetime``.
            lock_mode: Locking strategy for first singleton construction.
                ``LockMode.NONE`` skips synchronization entirely.

        """
        self._default_lifetime = default_lifetime
        self._lock_mode = lock_mode
        self._registry = ServiceRegistry()
        self._dependencies_extractor = ConstructorDependenciesExtractor()
        self._validator = ImplementationValidator()

    @overload
    def register(
        self,
        contract: type[T],
        implementation: type[T] | None = None,
        *,
        lifetime: Lifetime | None = None,
    ) -> None: ...

    @overload
    def register(
        self,
        contract: Any,
        implementation: type[Any] | None = None,
        *,
        lifetime: Lifetime | None = None,
    ) -> None: ...

    def register(
        self,
        contract: Any,
        implementation: type[Any] | None = None,
        *,
        lifetime: Lifetime | None = None,
    ) -> None:
        """Bind a contract to a concrete implementation.

        Re-registering a contract replaces the previous binding, including any
        cached singleton instance. Registration never validates the
        implementation; construction problems surface on ``resolve``.

        Args:
            contract: Dependency key callers resolve.
            implementation: Concrete class to instantiate. Defaults to ``contract``.
            lifetime: Instance reuse policy. Defaults to the container's
                ``default_lifetime``.

        Examples:
            .. code-block:: python

                container.register(Logger, ConsoleLogger, lifetime=Lifetime.SINGLETON)
                container.register(UserService, UserServiceImpl)

        """
        resolved_implementation = contract if implementation is None else implementation
        resolved_lifetime = self._default_lifetime if lifetime is None else lifetime
        self._registry.add(
            ServiceDescriptor(
                contract=contract,
                implementation=resolved_implementation,
                lifetime=resolved_lifetime,
                lock=self._new_lock(resolved_lifetime),
            ),
        )
        logger.debug(
            "Registered %s -> %s (%s)",
            describe_key(contract),
            describe_key(resolved_implementation),
            resolved_lifetime.name,
        )

    def add_transient(self, contract: type[T], implementation: type[T] | None = None) -> None:
        """Bind a contract with ``Lifetime.TRANSIENT``."""
        self.register(contract, implementation, lifetime=Lifetime.TRANSIENT)

    def add_singleton(self, contract: type[T], implementation: type[T] | None = None) -> None:
        """Bind a contract with ``Lifetime.SINGLETON``."""
        self.register(contract, implementation, lifetime=Lifetime.SINGLETON)

    def add_factory(
        self,
        factory: FactoryProvider,
        *,
        provides: Contract,
        lifetime: Lifetime | None = None,
    ) -> None:
        """Bind a contract to a factory callable.

        The factory's annotated parameters are resolved exactly like
        constructor parameters, so factories may depend on other contracts.

        Args:
            factory: Callable returning the instance.
            provides: Dependency key callers resolve.
            lifetime: Instance reuse policy. Defaults to the container's
                ``default_lifetime``.

        Examples:
            .. code-block:: python

                def build_client(settings: Settings) -> HttpClient:
                    return HttpClient(base_url=settings.api_url)

                container.add_factory(build_client, provides=HttpClient)

        """
        resolved_lifetime = self._default_lifetime if lifetime is None else lifetime
        self._registry.add(
            ServiceDescriptor(
                contract=provides,
                factory=factory,
                lifetime=resolved_lifetime,
                lock=self._new_lock(resolved_lifetime),
            ),
        )
        logger.debug(
            "Registered %s -> factory %s (%s)",
            describe_key(provides),
            describe_key(factory),
            resolved_lifetime.name,
        )

    def is_registered(self, contract: Contract) -> bool:
        """Return whether a contract has a binding."""
        return contract in self._registry

    def __contains__(self, contract: object) -> bool:
        return self.is_registered(contract)

    def __len__(self) -> int:
        return len(self._registry)

    @overload
    def resolve(self, contract: type[T]) -> T: ...

    @overload
    def resolve(self, contract: Any) -> Any: ...

    def resolve(self, contract: Any) -> Any:
        """Resolve a contract into a fully constructed instance.

        Singletons are returned from cache after their first construction.
        Otherwise the bound implementation's constructor dependencies are
        resolved left to right, recursively, and the implementation is built
        with them.

        Args:
            contract: Dependency key to resolve.

        Raises:
            UnregisteredServiceError: If ``contract`` or any transitive
                dependency is not registered. The error names the missing key.
            NoSuitableConstructorError: If an implementation cannot be built.

        """
        descriptor = self._registry.get(contract)

        if descriptor.lifetime is not Lifetime.SINGLETON:
            return self._create(descriptor)

        if descriptor.is_cached:
            return descriptor.instance

        if descriptor.lock is None:
            return self._create_singleton(descriptor)

        with descriptor.lock:
            if descriptor.is_cached:
                return descriptor.instance
            return self._create_singleton(descriptor)

    def _create_singleton(self, descriptor: ServiceDescriptor) -> Any:
        instance = self._create(descriptor)
        descriptor.cache(instance)
        logger.debug("Cached singleton %s", describe_key(descriptor.contract))
        return instance

    def _create(self, descriptor: ServiceDescriptor) -> Any:
        dependencies = self._dependencies_for(descriptor)

        args: list[Any] = []
        kwargs: dict[str, Any] = {}
        positional_gap = False
        for dependency in dependencies:
            if dependency.has_default and (
                (positional_gap and dependency.is_positional_only)
                or dependency.provides not in self._registry
            ):
                # Later positional-only arguments cannot skip over a defaulted one.
                positional_gap = positional_gap or dependency.is_positional_only
                continue
            value = self.resolve(dependency.provides)
            if dependency.is_positional_only:
                args.append(value)
            else:
                kwargs[dependency.parameter.name] = value

        return descriptor.provider(*args, **kwargs)

    def _dependencies_for(self, descriptor: ServiceDescriptor) -> list[ConstructorDependency]:
        if descriptor.dependencies is not None:
            return descriptor.dependencies

        if descriptor.factory is not None:
            self._validator.validate_factory(descriptor.factory)
            dependencies = self._dependencies_extractor.extract_from_factory(descriptor.factory)
        else:
            self._validator.validate_implementation(descriptor.implementation)
            dependencies = self._dependencies_extractor.extract_from_implementation(
                descriptor.implementation,  # type: ignore[arg-type]
            )

        descriptor.dependencies = dependencies
        return dependencies

    def _new_lock(self, lifetime: Lifetime) -> threading.RLock | None:
        if self._lock_mode is LockMode.THREAD and lifetime is Lifetime.SINGLETON:
            return threading.RLock()
        return None
