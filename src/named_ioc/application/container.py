import logging
from types import MappingProxyType
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional, Sequence, Set, Tuple, Union

from named_ioc.application.circular_detector import CircularDependencyDetector
from named_ioc.application.lifetime_manager import LifetimeManager
from named_ioc.application.resolver import DependencyResolver
from named_ioc.domain import (
    ContainerFrozenError,
    DuplicateRegistrationError,
    IContainer,
    IContainerBuilder,
    ILifetimeManager,
    InvalidRegistrationError,
    IResolver,
    OptionsLike,
    Registration,
    RegistrationOptions,
    ResolutionContext,
    UnknownRegistrationError,
)

logger = logging.getLogger(__name__)

ComponentSpec = Union[Callable[..., Any], Tuple[Callable[..., Any], Sequence[str]]]


class Container(IContainer):
    """Frozen dependency container used while serving.

    Holds a read-only snapshot of the registrations and resolves names
    recursively, applying each registration's lifetime. It exposes no way to
    add registrations; those are made on a ContainerBuilder before freezing.

    Attributes:
        _registry: Read-only mapping of names to registrations.
        _resolver: Component constructing targets from their dependencies.
        _lifetime_manager: Component applying lifetimes and caching singletons.
        _circular_detector: Component tracking the active resolution path.
    """

    def __init__(
        self,
        registrations: Mapping[str, Registration],
        resolver: Optional[IResolver] = None,
        lifetime_manager: Optional[ILifetimeManager] = None,
    ) -> None:
        """Initialize the container from a set of registrations.

        Args:
            registrations: The registrations to serve. The mapping is copied.
            resolver: Optional resolver; a DependencyResolver by default.
            lifetime_manager: Optional lifetime manager; a LifetimeManager by default.
        """
        self._registry: Mapping[str, Registration] = MappingProxyType(dict(registrations))
        self._resolver: IResolver = resolver or DependencyResolver()
        self._lifetime_manager: ILifetimeManager = lifetime_manager or LifetimeManager()
        self._circular_detector = CircularDependencyDetector()

    def resolve(self, name: str) -> Any:
        """Resolve and return the component registered under ``name``.

        Values and types are returned by identity. Singletons are built on
        first use and then served from the cache without touching their
        dependencies again. Transients are built on every call.

        Args:
            name: The registration name.

        Returns:
            The resolved component.

        Raises:
            UnknownRegistrationError: If ``name`` or one of its dependencies is not registered.
            CircularDependencyError: If construction revisits a name on the active path.
            ConstructionError: If a constructor raises.

        Example:
            >>> controller = container.resolve("TourController")
        """
        registration = self.get_registration(name)
        return self._lifetime_manager.get_or_create(
            registration,
            lambda: self._construct(registration),
        )

    def _construct(self, registration: Registration) -> Any:
        """Build a constructible registration while it is on the active resolution path."""
        self._circular_detector.push(registration.name)
        try:
            return self._resolver.resolve_dependencies(registration, self)
        finally:
            self._circular_detector.pop()

    def get_registration(self, name: str) -> Registration:
        """Return the registration stored under ``name``.

        Raises:
            UnknownRegistrationError: If nothing is registered under ``name``.
        """
        registration = self._registry.get(name) if isinstance(name, str) else None
        if registration is None:
            raise UnknownRegistrationError(str(name))
        return registration

    def is_built(self, name: str) -> bool:
        """Whether the singleton registered under ``name`` has been constructed."""
        return self._lifetime_manager.is_built(name)

    def names(self) -> List[str]:
        """Return every registered name, sorted."""
        return sorted(self._registry)

    def __contains__(self, name: object) -> bool:
        return name in self._registry

    def __len__(self) -> int:
        return len(self._registry)

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())


class ContainerBuilder(IContainerBuilder):
    """Mutable registry used while bootstrapping the application.

    Components are declared flat and in any order under unique names. Calling
    ``freeze`` ends the bootstrap phase: it returns the serving Container and
    rejects every later registration.

    Attributes:
        _registry: Dictionary mapping names to registrations.
        _validate_on_freeze: Whether ``freeze`` checks the dependency graph first.
        _container: The frozen container, once ``freeze`` has been called.
    """

    def __init__(self, validate_on_freeze: bool = False) -> None:
        """Initialize an empty builder.

        Args:
            validate_on_freeze: Check for dangling names and cycles before freezing.
        """
        self._registry: Dict[str, Registration] = {}
        self._validate_on_freeze = validate_on_freeze
        self._container: Optional[Container] = None

    @property
    def is_frozen(self) -> bool:
        """Whether ``freeze`` has been called."""
        return self._container is not None

    def register(self, name: str, target: Any, options: Optional[OptionsLike] = None) -> None:
        """Register a component under a unique name.

        Without options the target is a plain value returned verbatim. With
        ``{"type": True}`` the target is a type returned verbatim. Any other
        options make the target constructible: ``dependencies`` lists the
        names injected positionally and ``singleton`` shares one instance.

        Args:
            name: Unique registration name.
            target: A value, a type, or a constructible class or function.
            options: ``None``, a mapping, or RegistrationOptions.

        Raises:
            ContainerFrozenError: If the builder has been frozen.
            InvalidRegistrationError: If the name is empty or the options are malformed.
            DuplicateRegistrationError: If the name is already registered.

        Example:
            >>> builder.register("ConnectionString", "mongodb://localhost/tours")
            >>> builder.register("TourModelType", TourModel, {"type": True})
            >>> builder.register(
            ...     "TourRepositorySingleton",
            ...     TourRepository,
            ...     {"dependencies": ["TourModelType"], "singleton": True},
            ... )
        """
        if self.is_frozen:
            raise ContainerFrozenError(name if isinstance(name, str) else None)

        if not name or not isinstance(name, str):
            raise InvalidRegistrationError("name must be a non-empty string")

        if name in self._registry:
            raise DuplicateRegistrationError(name)

        registration = Registration.from_options(name, target, options)
        self._registry[name] = registration
        logger.debug(
            "Registered '%s' (%s, dependencies=%s)",
            name,
            registration.lifetime,
            list(registration.dependency_names),
        )

    def register_values(self, values: Dict[str, Any]) -> None:
        """Register multiple plain values at once.

        Example:
            >>> builder.register_values({"ConnectionString": "mongodb://localhost/tours"})
        """
        for name, value in values.items():
            self.register(name, value)

    def register_types(self, types: Dict[str, Any]) -> None:
        """Register multiple types that are handed out without instantiation.

        Example:
            >>> builder.register_types({"UserModelType": UserModel, "TourModelType": TourModel})
        """
        for name, type_ref in types.items():
            self.register(name, type_ref, RegistrationOptions(is_type=True))

    def register_singletons(self, components: Dict[str, ComponentSpec]) -> None:
        """Register multiple singleton components at once.

        Args:
            components: Names mapped to a factory, or to a ``(factory, dependency_names)`` pair.

        Example:
            >>> builder.register_singletons({
            ...     "UserRepositorySingleton": (UserRepository, ["UserModelType"]),
            ...     "UserServiceSingleton": (UserService, ["UserRepositorySingleton"]),
            ... })
        """
        for name, component in components.items():
            factory, dependencies = _split_component(name, component)
            self.register(name, factory, RegistrationOptions(dependencies=dependencies, singleton=True))

    def register_transients(self, components: Dict[str, ComponentSpec]) -> None:
        """Register multiple transient components at once.

        Args:
            components: Names mapped to a factory, or to a ``(factory, dependency_names)`` pair.

        Example:
            >>> builder.register_transients({
            ...     "UserController": (UserController, ["UserServiceSingleton"]),
            ... })
        """
        for name, component in components.items():
            factory, dependencies = _split_component(name, component)
            self.register(name, factory, RegistrationOptions(dependencies=dependencies))

    def validate(self) -> None:
        """Check the declared dependency graph without constructing anything.

        Raises:
            UnknownRegistrationError: If a dependency name is not registered.
            CircularDependencyError: If the graph contains a cycle.
        """
        checked: Set[str] = set()
        for name in self._registry:
            self._validate_from(name, None, ResolutionContext(), checked)

    def _validate_from(
        self,
        name: str,
        requested_by: Optional[str],
        context: ResolutionContext,
        checked: Set[str],
    ) -> None:
        if name in checked:
            return
        registration = self._registry.get(name)
        if registration is None:
            raise UnknownRegistrationError(name, requested_by)

        context.push(name)
        for dependency_name in registration.dependency_names:
            self._validate_from(dependency_name, name, context, checked)
        context.pop()
        checked.add(name)

    def freeze(self) -> Container:
        """End the bootstrap phase and return the serving container.

        The transition is one-way; calling ``freeze`` again returns the same
        container.

        Returns:
            The frozen Container holding a snapshot of the registrations.

        Raises:
            UnknownRegistrationError: If validation on freeze is enabled and a name is dangling.
            CircularDependencyError: If validation on freeze is enabled and the graph has a cycle.
        """
        if self._container is not None:
            return self._container

        if self._validate_on_freeze:
            self.validate()

        self._container = Container(self._registry)
        logger.debug("Container frozen with %d registrations", len(self._registry))
        return self._container

    build = freeze

    def get_registrations_copy(self) -> Dict[str, Registration]:
        """Get a copy of the registrations made so far."""
        return self._registry.copy()

    def __contains__(self, name: object) -> bool:
        return name in self._registry

    def __len__(self) -> int:
        return len(self._registry)


def _split_component(name: str, component: ComponentSpec) -> Tuple[Callable[..., Any], List[str]]:
    """Split a bulk registration entry into its factory and dependency names."""
    if isinstance(component, tuple):
        if len(component) != 2:
            raise InvalidRegistrationError("expected a (factory, dependency_names) pair", name)
        factory, dependencies = component
        return factory, list(dependencies)
    return component, []
