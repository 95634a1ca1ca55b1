"""Application layer - Descriptor catalog."""

import inspect
import logging
from typing import Dict, Iterable, List, Optional

from beanwire.domain import ComponentDescriptor

logger = logging.getLogger(__name__)


class DescriptorCatalog:
    """Ordered mapping from component identifier to its descriptor.

    The catalog is filled before the container is refreshed and is treated as
    read-only afterwards. It never validates the dependency graph: a dependency
    on an unregistered identifier only fails when it is requested.

    Attributes:
        _descriptors: Descriptors keyed by identifier, in registration order.
    """

    def __init__(self, descriptors: Iterable[ComponentDescriptor] = ()) -> None:
        self._descriptors: Dict[str, ComponentDescriptor] = {}
        for descriptor in descriptors:
            self.register(descriptor)

    def register(self, descriptor: ComponentDescriptor) -> None:
        """Add a descriptor, replacing any previous one with the same identifier.

        A replaced descriptor keeps the position of the one it replaces.

        Args:
            descriptor: The descriptor to add.
        """
        if descriptor.identifier in self._descriptors:
            logger.debug("Replacing descriptor for component '%s'", descriptor.identifier)
        self._descriptors[descriptor.identifier] = descriptor

    def lookup(self, identifier: str) -> Optional[ComponentDescriptor]:
        return self._descriptors.get(identifier)

    def all(self) -> List[ComponentDescriptor]:
        """Return every descriptor in registration order."""
        return list(self._descriptors.values())

    def identifiers(self) -> List[str]:
        return list(self._descriptors)

    def find_by_type(self, component_type: type) -> List[ComponentDescriptor]:
        """Return descriptors whose component type is a subclass of the given type.

        Descriptors built from plain factory functions never match.

        Args:
            component_type: The type to match against.

        Returns:
            Matching descriptors in registration order.
        """
        return [
            descriptor
            for descriptor in self._descriptors.values()
            if inspect.isclass(descriptor.component_type) and issubclass(descriptor.component_type, component_type)
        ]

    def copy(self) -> "DescriptorCatalog":
        return DescriptorCatalog(self._descriptors.values())

    def clear(self) -> None:
        self._descriptors.clear()

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._descriptors

    def __len__(self) -> int:
        return len(self._descriptors)
