"""
beanwire: Component container with singleton/prototype scopes, lifecycle hooks
and circular-reference resolution between singletons.

Public API exports for the beanwire package.
"""

import logging

# Application exports
from beanwire.application.container import ComponentContainer

# Domain exports
from beanwire.domain.capabilities import ComponentPostProcessor, InitializingComponent, NameAware
from beanwire.domain.enums import Scope
from beanwire.domain.exceptions import (
    AmbiguousComponentError,
    CircularReferenceError,
    ConstructionError,
    ContainerError,
    ContainerStateError,
    DuplicatePromotionError,
    InitializationError,
    NotFoundError,
    RequiredDependencyMissingError,
)
from beanwire.domain.models import ComponentDescriptor, ContainerSettings, DependencySpec

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    # Container
    "ComponentContainer",
    "ContainerSettings",
    # Models
    "ComponentDescriptor",
    "DependencySpec",
    # Enums
    "Scope",
    # Capabilities
    "NameAware",
    "InitializingComponent",
    "ComponentPostProcessor",
    # Exceptions
    "ContainerError",
    "NotFoundError",
    "ConstructionError",
    "RequiredDependencyMissingError",
    "InitializationError",
    "DuplicatePromotionError",
    "CircularReferenceError",
    "AmbiguousComponentError",
    "ContainerStateError",
]
