from typing import Any

from beanwire.domain import (
    ComponentDescriptor,
    ConstructionError,
    ContainerError,
    DependencySpec,
    IInjector,
    IInstantiator,
)


class DefaultInstantiator(IInstantiator):
    """Builds raw instances by calling the descriptor's component type with no arguments."""

    def instantiate(self, descriptor: ComponentDescriptor) -> Any:
        """Call the component type and return the raw instance.

        Args:
            descriptor: The component descriptor.

        Returns:
            The raw, pre-injection instance.

        Raises:
            ConstructionError: If the call fails or produces None.

        Example:
            >>> class Clock:
            ...     pass
            >>> DefaultInstantiator().instantiate(ComponentDescriptor.for_type(Clock))
            <Clock object at ...>
        """
        try:
            instance = descriptor.component_type()
        except ContainerError:
            raise
        except Exception as e:
            raise ConstructionError(descriptor.identifier, f"{type(e).__name__}: {e}") from e

        if instance is None:
            raise ConstructionError(descriptor.identifier, "component type returned None")
        return instance


class AttributeInjector(IInjector):
    """Assigns resolved dependencies as attributes of the consuming instance.

    Fails with AttributeError for instances that do not accept the attribute
    (slots, frozen dataclasses, read-only properties).
    """

    def inject(self, instance: Any, dependency: DependencySpec, value: Any) -> None:
        setattr(instance, dependency.target_attribute, value)
