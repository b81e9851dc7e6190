import logging
from typing import Any, List

from named_ioc.domain import (
    ConstructionError,
    IContainer,
    IResolver,
    Registration,
    UnknownRegistrationError,
)

logger = logging.getLogger(__name__)


class DependencyResolver(IResolver):
    """Builds a registration's target from its declared dependency names.

    Dependencies are resolved through the container in declared order and
    passed to the target positionally, so the n-th name fills the n-th
    constructor argument.
    """

    def resolve_dependencies(self, registration: Registration, container: IContainer) -> Any:
        """Resolve declared dependencies and construct the target.

        Args:
            registration: The constructible registration to build.
            container: The container to resolve dependency names from.

        Returns:
            The constructed instance.

        Raises:
            UnknownRegistrationError: If a dependency name is not registered.
            CircularDependencyError: If a dependency leads back to a name being constructed.
            ConstructionError: If the target raises while being constructed.

        Example:
            >>> class UserController:
            ...     def __init__(self, service, link_provider):
            ...         self.service = service
            ...         self.link_provider = link_provider
            >>>
            >>> registration = Registration.from_options(
            ...     "UserController",
            ...     UserController,
            ...     {"dependencies": ["UserServiceSingleton", "LinkProvider"]},
            ... )
            >>> controller = DependencyResolver().resolve_dependencies(registration, container)
        """
        args: List[Any] = []
        for dependency_name in registration.dependency_names:
            try:
                args.append(container.resolve(dependency_name))
            except UnknownRegistrationError as e:
                if e.name == dependency_name and e.requested_by is None:
                    raise UnknownRegistrationError(dependency_name, registration.name) from e
                raise

        try:
            return registration.target(*args)
        except Exception as e:
            logger.warning("Constructor for '%s' raised %s", registration.name, type(e).__name__)
            raise ConstructionError(registration.name, e) from e
