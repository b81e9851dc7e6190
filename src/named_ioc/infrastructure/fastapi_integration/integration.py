from typing import Any, Awaitable, Callable

from fastapi import FastAPI, Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from named_ioc.domain import IContainer

STATE_ATTRIBUTE = "ioc_container"


def install_container(app: FastAPI, container: IContainer) -> None:
    """Attach a frozen container to the application state.

    Args:
        app: The FastAPI application.
        container: The serving container produced by ``ContainerBuilder.freeze``.

    Example:
        >>> app = FastAPI()
        >>> install_container(app, builder.freeze())
    """
    setattr(app.state, STATE_ATTRIBUTE, container)


def get_container(request: Request) -> IContainer:
    """Return the container handle carried by the request.

    The request state is checked first (set by ContainerMiddleware), then the
    application state (set by ``install_container``).

    Raises:
        RuntimeError: If no container has been attached.
    """
    container = getattr(request.state, STATE_ATTRIBUTE, None)
    if container is None:
        container = getattr(request.app.state, STATE_ATTRIBUTE, None)
    if container is None:
        raise RuntimeError(
            "Request does not carry an IoC container. Did you forget install_container() or ContainerMiddleware?"
        )
    return container


def create_fastapi_dependency(name: str) -> Callable[[Request], Any]:
    """Create a FastAPI Depends() callable resolving ``name`` from the request's container.

    The resolved instance follows the registration's lifetime, so a transient
    controller is built once per request while its singleton services are shared.

    Args:
        name: The registration name to resolve.

    Returns:
        A callable that FastAPI can use with Depends().

    Example:
        >>> get_tour_controller = create_fastapi_dependency("TourController")
        >>>
        >>> @app.get("/tours")
        >>> async def list_tours(controller=Depends(get_tour_controller)):
        ...     return await controller.find_all()
    """

    def dependency(request: Request) -> Any:
        """Resolve the registration from the request's container."""
        return get_container(request).resolve(name)

    return dependency


def create_static_dependency(container: IContainer, name: str) -> Callable[[], Any]:
    """Create a FastAPI Depends() callable resolving ``name`` from a given container.

    Args:
        container: The container to resolve from.
        name: The registration name to resolve.

    Returns:
        A callable that FastAPI can use with Depends().
    """

    def dependency() -> Any:
        """Resolve the registration from the container."""
        return container.resolve(name)

    return dependency


class ContainerMiddleware(BaseHTTPMiddleware):
    """Middleware that passes the container handle along with each request.

    The handle is accessible via ``request.state.ioc_container``.

    Attributes:
        container: The frozen container shared by all requests.

    Example:
        >>> app = FastAPI()
        >>> app.add_middleware(ContainerMiddleware, container=builder.freeze())
        >>>
        >>> @app.get("/")
        >>> async def root(request: Request):
        ...     controller = request.state.ioc_container.resolve("HomeController")
        ...     return controller.index()
    """

    def __init__(self, app: FastAPI, container: IContainer):
        """Initialize the middleware with the serving container.

        Args:
            app: The FastAPI/Starlette application.
            container: The frozen container to attach to each request.
        """
        super().__init__(app)
        self.container = container

    async def dispatch(self, request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
        """Attach the container to the request and call the next handler.

        Args:
            request: The incoming HTTP request.
            call_next: The next middleware or endpoint handler.

        Returns:
            The response from the endpoint.
        """
        setattr(request.state, STATE_ATTRIBUTE, self.container)
        return await call_next(request)
