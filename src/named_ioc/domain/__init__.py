"""
Domain layer - Core registry concepts.

This layer contains the registration model, lifetimes and error kinds.
It has no dependencies on other layers.
"""

from .enums import Lifetime
from .exceptions import (
    CircularDependencyError,
    ConstructionError,
    ContainerFrozenError,
    DuplicateRegistrationError,
    InvalidRegistrationError,
    IoCException,
    UnknownRegistrationError,
)
from .interfaces import IContainer, IContainerBuilder, ILifetimeManager, IResolver
from .models import OptionsLike, Registration, RegistrationOptions, ResolutionContext

__all__ = [
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
    # Interfaces
    "IContainer",
    "IContainerBuilder",
    "IResolver",
    "ILifetimeManager",
    # Models
    "OptionsLike",
    "Registration",
    "RegistrationOptions",
    "ResolutionContext",
]
