"""
Application layer - Component creation and orchestration.

This layer builds, wires and caches components described by the domain models.
It depends only on the Domain layer.
"""

from .catalog import DescriptorCatalog
from .container import ComponentContainer
from .creation_pipeline import CreationPipeline
from .instantiation import AttributeInjector, DefaultInstantiator
from .lifecycle import LifecycleDispatcher
from .post_processors import PostProcessorChain
from .singleton_registry import SingletonRegistry

__all__ = [
    "ComponentContainer",
    "CreationPipeline",
    "DescriptorCatalog",
    "SingletonRegistry",
    "PostProcessorChain",
    "LifecycleDispatcher",
    "DefaultInstantiator",
    "AttributeInjector",
]
