import logging
from typing import Mapping, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from named_ioc.application import ContainerBuilder
from named_ioc.domain import InvalidRegistrationError

PACKAGE_LOGGER = "named_ioc"


class ContainerSettings(BaseSettings):
    """Container settings read from ``IOC_*`` environment variables.

    Attributes:
        validate_on_freeze: Check the dependency graph when the builder is frozen.
        log_level: Level applied to the ``named_ioc`` logger by ``configure_logging``.
    """

    model_config = SettingsConfigDict(env_prefix="IOC_", extra="ignore")

    validate_on_freeze: bool = Field(default=False, description="Validate the graph on freeze.")
    log_level: str = Field(default="WARNING", description="Log level for the named_ioc logger.")


def create_builder(settings: Optional[ContainerSettings] = None) -> ContainerBuilder:
    """Create a ContainerBuilder configured from settings."""
    settings = settings or ContainerSettings()
    return ContainerBuilder(validate_on_freeze=settings.validate_on_freeze)


def configure_logging(settings: Optional[ContainerSettings] = None) -> None:
    """Apply the configured level to the package logger.

    Handlers are left to the application.
    """
    settings = settings or ContainerSettings()
    logging.getLogger(PACKAGE_LOGGER).setLevel(settings.log_level.upper())


def register_settings(builder: ContainerBuilder, settings: BaseSettings, names: Mapping[str, str]) -> None:
    """Register selected settings fields as plain values.

    Args:
        builder: The builder to register into.
        settings: Any pydantic-settings instance.
        names: Settings field names mapped to registration names.

    Raises:
        InvalidRegistrationError: If a field does not exist on the settings.

    Example:
        >>> class AppSettings(BaseSettings):
        ...     db_connection_string: str
        >>>
        >>> register_settings(builder, AppSettings(), {"db_connection_string": "ConnectionString"})
    """
    fields = type(settings).model_fields
    for field_name, registration_name in names.items():
        if field_name not in fields:
            raise InvalidRegistrationError(
                f"{type(settings).__name__} has no field '{field_name}'",
                registration_name,
            )
        builder.register(registration_name, getattr(settings, field_name))
