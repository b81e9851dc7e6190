from typing import Any, List, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr, ValidationError

from named_ioc.domain.enums import Lifetime
from named_ioc.domain.exceptions import CircularDependencyError, InvalidRegistrationError


class RegistrationOptions(BaseModel):
    """Options accepted by ``register`` for constructible and type registrations.

    Attributes:
        dependencies: Names resolved and passed positionally to the target, in order.
        singleton: Build the target once and share the instance.
        is_type: Hand the target out verbatim (populated from the ``type`` key).
    """

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    dependencies: Optional[List[StrictStr]] = Field(
        default=None,
        description="Dependency names, consumed positionally by the target.",
    )
    singleton: StrictBool = Field(default=False, description="Share a single instance.")
    is_type: StrictBool = Field(default=False, alias="type", description="Return the target verbatim.")


OptionsLike = Union[RegistrationOptions, Mapping[str, Any]]


class Registration(BaseModel):
    """Value object describing how one named component is resolved.

    Attributes:
        name: Unique registration name.
        target: A literal value, a class handed out as-is, or a constructible factory.
        dependency_names: Names resolved and passed positionally to the target.
        lifetime: Lifetime policy applied on resolve.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str = Field(..., description="The unique registration name.")
    target: Any = Field(..., description="The registered value, type or factory.")
    dependency_names: Tuple[str, ...] = Field(
        default=(),
        description="Ordered dependency names injected positionally.",
    )
    lifetime: Lifetime = Field(..., description="The lifetime of the registration.")

    @property
    def is_constructible(self) -> bool:
        """Whether resolving this registration calls its target."""
        return self.lifetime in (Lifetime.TRANSIENT, Lifetime.SINGLETON)

    @classmethod
    def from_options(cls, name: str, target: Any, options: Optional[OptionsLike] = None) -> "Registration":
        """Derive a registration from ``register`` arguments.

        Args:
            name: The registration name.
            target: The value, type or factory being registered.
            options: ``None`` for a plain value, otherwise a mapping or RegistrationOptions.

        Returns:
            The registration with its lifetime and dependency names filled in.

        Raises:
            InvalidRegistrationError: If the options are malformed or the target cannot be constructed.
        """
        if options is None:
            return cls(name=name, target=target, lifetime=Lifetime.VALUE)

        parsed = _parse_options(name, options)

        if parsed.is_type:
            if parsed.singleton or parsed.dependencies:
                raise InvalidRegistrationError(
                    "'type' cannot be combined with 'singleton' or 'dependencies'",
                    name,
                )
            return cls(name=name, target=target, lifetime=Lifetime.TYPE)

        if not callable(target):
            raise InvalidRegistrationError(
                f"target of type {type(target).__name__} is not callable",
                name,
            )

        dependency_names = tuple(parsed.dependencies or ())
        for dependency_name in dependency_names:
            if not dependency_name:
                raise InvalidRegistrationError("dependency names must be non-empty strings", name)

        lifetime = Lifetime.SINGLETON if parsed.singleton else Lifetime.TRANSIENT
        return cls(name=name, target=target, dependency_names=dependency_names, lifetime=lifetime)


def _parse_options(name: str, options: OptionsLike) -> RegistrationOptions:
    if isinstance(options, RegistrationOptions):
        return options
    if not isinstance(options, Mapping):
        raise InvalidRegistrationError(
            f"options must be a mapping, got {type(options).__name__}",
            name,
        )
    try:
        return RegistrationOptions.model_validate(dict(options))
    except ValidationError as e:
        raise InvalidRegistrationError(f"invalid options: {e}", name) from e


class ResolutionContext(BaseModel):
    """Tracks the names currently being constructed.

    Attributes:
        stack: Names on the active resolution path, outermost first.
    """

    stack: List[str] = Field(
        default_factory=list,
        description="Names currently being resolved.",
    )

    def push(self, name: str) -> None:
        """Add a name to the resolution path.

        Raises:
            CircularDependencyError: If the name is already on the path.
        """
        if name in self.stack:
            cycle = self.stack[self.stack.index(name) :] + [name]
            raise CircularDependencyError(cycle)
        self.stack.append(name)

    def pop(self) -> None:
        """Remove the most recent name from the path."""
        if self.stack:
            self.stack.pop()

    def clear(self) -> None:
        """Clear the entire resolution path."""
        self.stack.clear()
