"""
Settings module.

Environment-driven configuration for the container and settings registration helpers.
"""

from .settings import ContainerSettings, configure_logging, create_builder, register_settings

__all__ = [
    "ContainerSettings",
    "configure_logging",
    "create_builder",
    "register_settings",
]
