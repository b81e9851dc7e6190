from typing import List, Optional


class IoCException(Exception):
    """Base exception for container errors."""


class DuplicateRegistrationError(IoCException):
    """Raised when a name is registered twice.

    Attributes:
        name: The name that is already registered.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"A component named '{name}' is already registered")


class InvalidRegistrationError(IoCException):
    """Raised for malformed registrations.

    This occurs when:
    - The name is empty or not a string.
    - The options contain unknown keys or an unsupported combination.
    - A constructible target is not callable.

    Attributes:
        name: The offending registration name, if known.
        reason: Why the registration was rejected.
    """

    def __init__(self, reason: str, name: Optional[str] = None) -> None:
        self.name = name
        self.reason = reason
        message = f"Invalid registration '{name}': {reason}" if name else f"Invalid registration: {reason}"
        super().__init__(message)


class ContainerFrozenError(InvalidRegistrationError):
    """Raised when registering on a builder that has already been frozen."""

    def __init__(self, name: Optional[str] = None) -> None:
        super().__init__("the container is frozen and no longer accepts registrations", name)


class UnknownRegistrationError(IoCException):
    """Raised when resolving a name that was never registered.

    Attributes:
        name: The missing name.
        requested_by: The registration that declared the missing name as a dependency, if any.
    """

    def __init__(self, name: str, requested_by: Optional[str] = None) -> None:
        self.name = name
        self.requested_by = requested_by
        message = f"No component registered under the name '{name}'"
        if requested_by:
            message += f" (required by '{requested_by}')"
        super().__init__(message)


class CircularDependencyError(IoCException):
    """Raised when a circular dependency is detected.

    Attributes:
        dependency_chain: The names forming the cycle, first and last element equal.
    """

    def __init__(self, dependency_chain: List[str]) -> None:
        self.dependency_chain = dependency_chain
        message = f"Circular dependency detected: {' -> '.join(dependency_chain)}"
        super().__init__(message)


class ConstructionError(IoCException):
    """Raised when a registered constructor fails.

    The original exception is kept both as ``cause`` and as ``__cause__``.

    Attributes:
        name: The registration whose constructor failed.
        cause: The exception raised by the constructor.
    """

    def __init__(self, name: str, cause: BaseException) -> None:
        self.name = name
        self.cause = cause
        super().__init__(f"Failed to construct '{name}': {type(cause).__name__}: {cause}")
