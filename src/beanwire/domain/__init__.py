"""
Domain layer - Core models, capabilities and errors.

This layer contains the fundamental rules and models of the component container.
It has no dependencies on other layers.
"""

from .capabilities import ComponentPostProcessor, InitializingComponent, NameAware
from .enums import Scope
from .exceptions import (
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
from .interfaces import IContainer, IInjector, IInstantiator
from .models import ComponentDescriptor, ContainerSettings, DependencyLike, DependencySpec

__all__ = [
    # Enums
    "Scope",
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
    # Capabilities
    "NameAware",
    "InitializingComponent",
    "ComponentPostProcessor",
    # Interfaces
    "IContainer",
    "IInstantiator",
    "IInjector",
    # Models
    "ComponentDescriptor",
    "DependencySpec",
    "DependencyLike",
    "ContainerSettings",
]
