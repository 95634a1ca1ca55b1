"""Application layer - Lifecycle callbacks."""

import logging
from typing import Any

from beanwire.domain import InitializationError, InitializingComponent, NameAware

logger = logging.getLogger(__name__)


class LifecycleDispatcher:
    """Invokes the lifecycle capabilities a component chooses to implement.

    Name-awareness is always delivered before the post-construction hook.
    """

    def invoke_aware_methods(self, identifier: str, instance: Any) -> None:
        """Deliver the component identifier to a NameAware instance.

        Args:
            identifier: The identifier the component is registered under.
            instance: The component instance.
        """
        if isinstance(instance, NameAware):
            instance.set_component_name(identifier)

    def invoke_init_methods(self, identifier: str, instance: Any) -> None:
        """Run the post-construction hook of an InitializingComponent.

        Args:
            identifier: The identifier the component is registered under.
            instance: The component instance.

        Raises:
            InitializationError: If the hook raises.
        """
        if not isinstance(instance, InitializingComponent):
            return
        logger.debug("Invoking after_properties_set on '%s'", identifier)
        try:
            instance.after_properties_set()
        except Exception as e:
            raise InitializationError(identifier, f"after_properties_set failed: {e}") from e
