from contextlib import asynccontextmanager
from typing import Any, AsyncContextManager, AsyncIterator, Callable

from fastapi import FastAPI, Request

from beanwire.domain import IContainer

STATE_ATTRIBUTE = "component_container"


def create_fastapi_dependency(container: IContainer, identifier: str) -> Callable[[], Any]:
    """Create a FastAPI Depends() callable that resolves a component from the container.

    The resolved instance follows the component scope: singletons are shared
    across requests, prototypes are built for each request.

    Args:
        container: The container to resolve the component from.
        identifier: Identifier of the component to resolve.

    Returns:
        A callable that FastAPI can use with Depends().

    Example:
        >>> container = ComponentContainer()
        >>> container.register_component(UserRepository, dependencies=["database"])
        >>>
        >>> get_user_repo = create_fastapi_dependency(container, "userRepository")
        >>>
        >>> @app.get("/users")
        >>> async def list_users(repo: UserRepository = Depends(get_user_repo)):
        ...     return await repo.get_all()
    """

    def dependency() -> Any:
        """Resolve the component from the container."""
        return container.get(identifier)

    return dependency


def container_lifespan(container: IContainer) -> Callable[[FastAPI], AsyncContextManager[None]]:
    """Create a FastAPI lifespan that refreshes the container on startup.

    The container is stored on `app.state.component_container` for
    dependencies created with `create_state_dependency`. On shutdown the
    built instances are dropped but the descriptors are kept, so the same
    application can start again. A failed refresh aborts application startup.

    Args:
        container: The container to manage.

    Returns:
        A lifespan callable for `FastAPI(lifespan=...)`.

    Example:
        >>> app = FastAPI(lifespan=container_lifespan(container))
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        container.refresh()
        setattr(app.state, STATE_ATTRIBUTE, container)
        try:
            yield
        finally:
            container.clear_instances()

    return lifespan


def create_state_dependency(identifier: str) -> Callable[[Request], Any]:
    """Create a FastAPI dependency resolving from the container held in application state.

    Requires the application to be created with `container_lifespan`.

    Args:
        identifier: Identifier of the component to resolve.

    Returns:
        A callable that resolves from `request.app.state.component_container`.

    Example:
        >>> get_clock = create_state_dependency("clock")
        >>>
        >>> @app.get("/now")
        >>> async def now(clock: Clock = Depends(get_clock)):
        ...     return {"now": clock.now()}
    """

    def state_dependency(request: Request) -> Any:
        """Resolve from the application-state container."""
        container = getattr(request.app.state, STATE_ATTRIBUTE, None)
        if container is None:
            raise RuntimeError(
                "Application state does not hold a component container. "
                "Did you forget to create the app with container_lifespan?"
            )
        return container.get(identifier)

    return state_dependency
