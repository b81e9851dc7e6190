from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional

from named_ioc.domain.models import OptionsLike, Registration


class IContainer(ABC):
    """Abstract interface for the frozen, serving-phase container."""

    @abstractmethod
    def resolve(self, name: str) -> Any:
        """Resolve and return the component registered under ``name``.

        Args:
            name: The registration name to resolve.
        """

    @abstractmethod
    def get_registration(self, name: str) -> Registration:
        """Return the registration stored under ``name``."""

    @abstractmethod
    def names(self) -> List[str]:
        """Return every registered name."""

    @abstractmethod
    def __contains__(self, name: object) -> bool:
        """Whether ``name`` is registered."""


class IContainerBuilder(ABC):
    """Abstract interface for the mutable, bootstrap-phase registry."""

    @abstractmethod
    def register(self, name: str, target: Any, options: Optional[OptionsLike] = None) -> None:
        """Register a component under a unique name.

        Args:
            name: Unique registration name.
            target: A value, a type, or a constructible factory.
            options: ``None`` for a plain value, otherwise registration options.
        """

    @abstractmethod
    def freeze(self) -> IContainer:
        """End the bootstrap phase and return the serving container."""

    @property
    @abstractmethod
    def is_frozen(self) -> bool:
        """Whether ``freeze`` has been called."""

    @abstractmethod
    def get_registrations_copy(self) -> Dict[str, Registration]:
        """Get a copy of the current registrations."""


class IResolver(ABC):
    """Abstract interface for constructing a registration's target."""

    @abstractmethod
    def resolve_dependencies(self, registration: Registration, container: IContainer) -> Any:
        """Resolve declared dependencies in order and construct the target.

        Args:
            registration: The constructible registration to build.
            container: The container used to resolve dependency names.

        Returns:
            The constructed instance.

        Raises:
            ConstructionError: If the target raises while being constructed.
        """


class ILifetimeManager(ABC):
    """Abstract interface for applying lifetime policies."""

    @abstractmethod
    def get_or_create(self, registration: Registration, factory: Callable[[], Any]) -> Any:
        """Get an existing instance or create one according to the lifetime.

        Args:
            registration: The registration being resolved.
            factory: A callable constructing a new instance when needed.
        """

    @abstractmethod
    def is_built(self, name: str) -> bool:
        """Whether a singleton instance has been cached for ``name``."""

    @abstractmethod
    def clear_cache(self) -> None:
        """Clear all cached singleton instances."""
