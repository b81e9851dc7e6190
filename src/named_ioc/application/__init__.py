"""
Application layer - Use cases and orchestration.

This layer contains the container facade, the resolver and the lifetime manager.
It depends only on the Domain layer.
"""

from .circular_detector import CircularDependencyDetector
from .container import ComponentSpec, Container, ContainerBuilder
from .lifetime_manager import LifetimeManager
from .resolver import DependencyResolver

__all__ = [
    "ComponentSpec",
    "Container",
    "ContainerBuilder",
    "DependencyResolver",
    "LifetimeManager",
    "CircularDependencyDetector",
]
