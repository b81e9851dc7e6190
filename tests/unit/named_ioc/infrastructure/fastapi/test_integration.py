"""Unit tests for FastAPI integration."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import FastAPI
from starlette.responses import Response

from named_ioc.application.container import ContainerBuilder
from named_ioc.domain.exceptions import UnknownRegistrationError
from named_ioc.infrastructure.fastapi_integration.integration import (
    STATE_ATTRIBUTE,
    ContainerMiddleware,
    create_fastapi_dependency,
    create_static_dependency,
    get_container,
    install_container,
)


class TourController:
    def __init__(self, service):
        self.service = service


def build_container():
    builder = ContainerBuilder()
    builder.register("TourServiceSingleton", object, {"singleton": True})
    builder.register("TourController", TourController, {"dependencies": ["TourServiceSingleton"]})
    return builder.freeze()


def make_request(request_container=None, app_container=None):
    request_state = SimpleNamespace()
    app_state = SimpleNamespace()
    if request_container is not None:
        setattr(request_state, STATE_ATTRIBUTE, request_container)
    if app_container is not None:
        setattr(app_state, STATE_ATTRIBUTE, app_container)
    return SimpleNamespace(state=request_state, app=SimpleNamespace(state=app_state))


class TestInstallContainer:
    """Test cases for install_container."""

    def test_stores_container_on_app_state(self):
        """Test that the container is attached to the application state."""
        app = FastAPI()
        container = build_container()

        install_container(app, container)

        assert getattr(app.state, STATE_ATTRIBUTE) is container


class TestGetContainer:
    """Test cases for get_container."""

    def test_prefers_request_state(self):
        """Test that the request handle wins over the app handle."""
        request_container = build_container()
        app_container = build_container()

        request = make_request(request_container, app_container)

        assert get_container(request) is request_container

    def test_falls_back_to_app_state(self):
        """Test that the app handle is used when the request has none."""
        app_container = build_container()

        assert get_container(make_request(app_container=app_container)) is app_container

    def test_missing_container_raises(self):
        """Test that a request without a container raises RuntimeError."""
        with pytest.raises(RuntimeError, match="IoC container"):
            get_container(make_request())


class TestCreateFastAPIDependency:
    """Test cases for create_fastapi_dependency."""

    def test_resolves_from_request_container(self):
        """Test that the dependency resolves the name per call."""
        container = build_container()
        dependency = create_fastapi_dependency("TourController")
        request = make_request(app_container=container)

        first = dependency(request)
        second = dependency(request)

        assert isinstance(first, TourController)
        assert first is not second
        assert first.service is second.service

    def test_unknown_name_propagates(self):
        """Test that resolution errors are not translated."""
        dependency = create_fastapi_dependency("Missing")

        with pytest.raises(UnknownRegistrationError):
            dependency(make_request(app_container=build_container()))


class TestCreateStaticDependency:
    """Test cases for create_static_dependency."""

    def test_resolves_from_given_container(self):
        """Test that the dependency resolves from the captured container."""
        container = build_container()
        dependency = create_static_dependency(container, "TourServiceSingleton")

        assert dependency() is container.resolve("TourServiceSingleton")


class TestContainerMiddleware:
    """Test cases for ContainerMiddleware."""

    def test_middleware_stores_container(self):
        """Test that the middleware keeps the container."""
        container = build_container()
        middleware = ContainerMiddleware(FastAPI(), container=container)

        assert middleware.container is container

    @pytest.mark.asyncio
    async def test_dispatch_attaches_container(self):
        """Test that dispatch sets the handle on the request before calling the endpoint."""
        container = build_container()
        middleware = ContainerMiddleware(FastAPI(), container=container)
        request = MagicMock()
        request.state = SimpleNamespace()
        expected = Response("ok")
        call_next = AsyncMock(return_value=expected)

        response = await middleware.dispatch(request, call_next)

        assert response is expected
        assert getattr(request.state, STATE_ATTRIBUTE) is container
        call_next.assert_awaited_once_with(request)
