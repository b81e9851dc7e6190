"""
FastAPI integration module.

Passes the frozen container to request handlers as an explicit handle.
"""

from .integration import (
    ContainerMiddleware,
    create_fastapi_dependency,
    create_static_dependency,
    get_container,
    install_container,
)

__all__ = [
    "install_container",
    "get_container",
    "create_fastapi_dependency",
    "create_static_dependency",
    "ContainerMiddleware",
]
