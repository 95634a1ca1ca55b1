from abc import ABC, abstractmethod
from typing import Any, Dict, List, Type, TypeVar

from beanwire.domain.models import ComponentDescriptor, DependencySpec

T = TypeVar("T")


class IContainer(ABC):
    """Abstract interface for component container operations."""

    @abstractmethod
    def register(self, descriptor: ComponentDescriptor) -> None:
        """Add a descriptor to the catalog, replacing any with the same identifier.

        Args:
            descriptor: The component descriptor.
        """

    @abstractmethod
    def get(self, identifier: str) -> Any:
        """Return the component registered under the identifier.

        Args:
            identifier: The component identifier.
        """

    @abstractmethod
    def get_by_type(self, component_type: Type[T]) -> T:
        """Return the single component whose type is a subclass of the given type.

        Args:
            component_type: The type to look up.
        """

    @abstractmethod
    def refresh(self) -> None:
        """Eagerly realize every registered component."""

    @abstractmethod
    def clear(self) -> None:
        """Drop all descriptors and cached instances from the container."""

    @abstractmethod
    def clear_instances(self) -> None:
        """Drop cached instances but keep the registered descriptors."""

    @abstractmethod
    def get_catalog_copy(self) -> List[ComponentDescriptor]:
        """Get a copy of the registered descriptors in registration order."""

    @abstractmethod
    def get_singleton_cache_copy(self) -> Dict[str, Any]:
        """Get a copy of the finished singleton cache."""


class IInstantiator(ABC):
    """Abstract interface for building the raw instance of a component."""

    @abstractmethod
    def instantiate(self, descriptor: ComponentDescriptor) -> Any:
        """Build the raw, pre-injection instance described by the descriptor.

        Args:
            descriptor: The component descriptor.

        Returns:
            The raw instance.

        Raises:
            ConstructionError: If the instance cannot be built.
        """


class IInjector(ABC):
    """Abstract interface for assigning a resolved dependency onto a consumer."""

    @abstractmethod
    def inject(self, instance: Any, dependency: DependencySpec, value: Any) -> None:
        """Assign the resolved dependency onto the instance.

        Args:
            instance: The consuming component.
            dependency: The declared dependency.
            value: The resolved dependency.
        """
