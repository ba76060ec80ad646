from tinywire.container import Container
from tinywire.exceptions import (
    DependencyInferenceError,
    NoSuitableConstructorError,
    TinyWireError,
    UnregisteredServiceError,
)
from tinywire.lock_mode import LockMode
from tinywire.providers import Lifetime, ServiceDescriptor

__all__ = [
    "Container",
    "DependencyInferenceError",
    "Lifetime",
    "LockMode",
    "NoSuitableConstructorError",
    "ServiceDescriptor",
    "TinyWireError",
    "UnregisteredServiceError",
]
