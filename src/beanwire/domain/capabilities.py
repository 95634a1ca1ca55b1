"""Optional capabilities a component may implement.

Capabilities are structural: a component satisfies one by defining the
methods below, without inheriting from anything.
"""

from typing import Any, Optional, Protocol, runtime_checkable


@runtime_checkable
class NameAware(Protocol):
    """Receives the identifier the component is registered under."""

    def set_component_name(self, name: str) -> None: ...


@runtime_checkable
class InitializingComponent(Protocol):
    """Runs a hook once all dependencies have been injected."""

    def after_properties_set(self) -> None: ...


@runtime_checkable
class ComponentPostProcessor(Protocol):
    """Intercepts every component built after this one is registered.

    Returning None from either method stops the chain; the instance as it
    stood before that call is kept.
    """

    def post_process_before_initialization(self, identifier: str, instance: Any) -> Optional[Any]: ...

    def post_process_after_initialization(self, identifier: str, instance: Any) -> Optional[Any]: ...
