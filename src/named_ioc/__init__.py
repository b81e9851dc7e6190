"""
named-ioc: Name-based dependency resolution container with explicit wiring.

Public API exports for the named-ioc package.
"""

# Application exports
from named_ioc.application.container import Container, ContainerBuilder

# Domain exports
from named_ioc.domain.enums import Lifetime
from named_ioc.domain.exceptions import (
    CircularDependencyError,
    ConstructionError,
    ContainerFrozenError,
    DuplicateRegistrationError,
    InvalidRegistrationError,
    IoCException,
    UnknownRegistrationError,
)
from named_ioc.domain.models import Registration, RegistrationOptions

__version__ = "0.1.0"

__all__ = [
    # Container
    "Container",
    "ContainerBuilder",
    # Models
    "Registration",
    "RegistrationOptions",
    # Enums
    "Lifetime",
    # Exceptions
    "IoCException",
    "DuplicateRegistrationError",
    "InvalidRegistrationError",
    "ContainerFrozenError",
    "UnknownRegistrationError",
    "CircularDependencyError",
    "ConstructionError",
]
