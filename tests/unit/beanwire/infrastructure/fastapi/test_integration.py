"""Unit tests for FastAPI integration helpers."""

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

pytest.importorskip("fastapi")

from fastapi import FastAPI

from beanwire import ComponentContainer, NotFoundError, RequiredDependencyMissingError
from beanwire.infrastructure.fastapi_integration.integration import (
    STATE_ATTRIBUTE,
    container_lifespan,
    create_fastapi_dependency,
    create_state_dependency,
)


class Clock:
    pass


class Request:
    pass


def build_container():
    container = ComponentContainer()
    container.register_component(Clock)
    container.register_component(Request, scope="prototype")
    return container


def fake_request(container=None):
    request = MagicMock()
    request.app.state = SimpleNamespace()
    if container is not None:
        setattr(request.app.state, STATE_ATTRIBUTE, container)
    return request


class TestCreateFastAPIDependency:
    """Test cases for create_fastapi_dependency."""

    def test_returns_callable(self):
        """Test that a zero-argument callable is returned."""
        dependency = create_fastapi_dependency(build_container(), "clock")

        assert callable(dependency)

    def test_resolves_singleton(self):
        """Test that the dependency returns the shared singleton."""
        container = build_container()
        dependency = create_fastapi_dependency(container, "clock")

        assert dependency() is container.get("clock")
        assert dependency() is dependency()

    def test_resolves_prototype(self):
        """Test that prototypes are built per call."""
        dependency = create_fastapi_dependency(build_container(), "request")

        assert dependency() is not dependency()

    def test_missing_component_raises(self):
        """Test that unknown identifiers surface as NotFoundError."""
        dependency = create_fastapi_dependency(build_container(), "missing")

        with pytest.raises(NotFoundError):
            dependency()


class TestCreateStateDependency:
    """Test cases for create_state_dependency."""

    def test_resolves_from_app_state(self):
        """Test that the container stored on app state is used."""
        container = build_container()
        dependency = create_state_dependency("clock")

        assert dependency(fake_request(container)) is container.get("clock")

    def test_missing_container_raises_runtime_error(self):
        """Test the error raised when the lifespan was not installed."""
        dependency = create_state_dependency("clock")

        with pytest.raises(RuntimeError, match="container_lifespan"):
            dependency(fake_request())


class TestContainerLifespan:
    """Test cases for container_lifespan."""

    @pytest.mark.asyncio
    async def test_lifespan_refreshes_and_publishes_container(self):
        """Test that startup refreshes the container and stores it on app state."""
        container = build_container()
        app = FastAPI()

        async with container_lifespan(container)(app):
            assert getattr(app.state, STATE_ATTRIBUTE) is container
            assert "clock" in container.get_singleton_cache_copy()

    @pytest.mark.asyncio
    async def test_lifespan_drops_instances_on_shutdown(self):
        """Test that shutdown drops built instances but keeps the descriptors."""
        container = build_container()

        async with container_lifespan(container)(FastAPI()):
            pass

        assert container.get_singleton_cache_copy() == {}
        assert [descriptor.identifier for descriptor in container.get_catalog_copy()] == ["clock", "request"]

    @pytest.mark.asyncio
    async def test_lifespan_can_run_again_after_shutdown(self):
        """Test that a second startup refreshes the same container with fresh singletons."""
        container = build_container()
        app = FastAPI()
        lifespan = container_lifespan(container)

        async with lifespan(app):
            first_clock = container.get("clock")

        async with lifespan(app):
            second_clock = container.get("clock")
            assert isinstance(second_clock, Clock)

        assert second_clock is not first_clock

    @pytest.mark.asyncio
    async def test_lifespan_propagates_refresh_failure(self):
        """Test that a failing refresh aborts startup."""
        container = build_container()
        container.register_component(Clock, identifier="broken", dependencies=["ghost"])
        app = FastAPI()

        with pytest.raises(RequiredDependencyMissingError) as exc_info:
            async with container_lifespan(container)(app):
                pass

        assert "ghost" in str(exc_info.value)
        assert not hasattr(app.state, STATE_ATTRIBUTE)
