import logging
from typing import Any, Callable, Dict, Iterable, List, Optional, Type, TypeVar, Union

from beanwire.application.catalog import DescriptorCatalog
from beanwire.application.creation_pipeline import CreationPipeline
from beanwire.application.instantiation import AttributeInjector, DefaultInstantiator
from beanwire.application.lifecycle import LifecycleDispatcher
from beanwire.application.post_processors import PostProcessorChain
from beanwire.application.singleton_registry import SingletonRegistry
from beanwire.domain import (
    AmbiguousComponentError,
    ComponentDescriptor,
    ContainerSettings,
    ContainerStateError,
    DependencyLike,
    IContainer,
    IInjector,
    IInstantiator,
    NotFoundError,
    Scope,
)

T = TypeVar("T")

logger = logging.getLogger(__name__)


class ComponentContainer(IContainer):
    """Main component container.

    Holds a catalog of descriptors and builds the components they describe,
    injecting dependencies by identifier. Singletons are built once and
    cached; prototypes are built on every request. Dependency cycles between
    singletons are resolved unless circular references are disabled.

    Every container owns its own caches, so independent containers never
    share state.

    Attributes:
        _settings: Runtime switches.
        _catalog: Registered descriptors.
        _registry: Three-tier singleton cache.
        _post_processors: Registered component post-processors.
        _pipeline: Builds components from descriptors.
        _refresh_failed: Set when a refresh aborted, blocking further use.

    Example:
        >>> container = ComponentContainer()
        >>> container.register_component(OrderService, dependencies=["paymentGateway"])
        >>> container.register_component(PaymentGateway, dependencies=["orderService"])
        >>> container.refresh()
        >>> container.get("orderService").paymentGateway.orderService is container.get("orderService")
        True
    """

    def __init__(
        self,
        settings: Optional[ContainerSettings] = None,
        instantiator: Optional[IInstantiator] = None,
        injector: Optional[IInjector] = None,
    ) -> None:
        """Initialize the container with an empty catalog and empty caches.

        Args:
            settings: Runtime switches. Defaults to circular references enabled.
            instantiator: Builds raw instances. Defaults to a zero-argument call.
            injector: Assigns dependencies. Defaults to attribute assignment.
        """
        self._settings = settings if settings is not None else ContainerSettings()
        self._catalog = DescriptorCatalog()
        self._registry = SingletonRegistry(lambda: self._settings.allow_circular_references)
        self._post_processors = PostProcessorChain()
        self._pipeline = CreationPipeline(
            catalog=self._catalog,
            registry=self._registry,
            post_processors=self._post_processors,
            lifecycle=LifecycleDispatcher(),
            instantiator=instantiator if instantiator is not None else DefaultInstantiator(),
            injector=injector if injector is not None else AttributeInjector(),
        )
        self._refresh_failed = False

    @property
    def settings(self) -> ContainerSettings:
        return self._settings

    @property
    def allow_circular_references(self) -> bool:
        return self._settings.allow_circular_references

    @allow_circular_references.setter
    def allow_circular_references(self, value: bool) -> None:
        self._settings.allow_circular_references = value

    def register(self, descriptor: ComponentDescriptor) -> None:
        """Add a descriptor to the catalog. The last registration for an identifier wins.

        Args:
            descriptor: The component descriptor.
        """
        self._catalog.register(descriptor)

    def register_component(
        self,
        component_type: Callable[[], Any],
        identifier: Optional[str] = None,
        scope: Optional[Union[str, Scope]] = None,
        dependencies: Iterable[DependencyLike] = (),
    ) -> ComponentDescriptor:
        """Describe and register a component in one call.

        Args:
            component_type: Class or zero-argument factory.
            identifier: Explicit identifier. Defaults to the type name with a lower-case first letter.
            scope: "singleton" (default when absent or empty) or "prototype".
            dependencies: Identifiers or DependencySpec objects, injected in order.

        Returns:
            The registered descriptor.

        Example:
            >>> container.register_component(
            ...     UserService,
            ...     dependencies=["userRepository", DependencySpec(identifier="auditLog", required=False)],
            ... )
        """
        descriptor = ComponentDescriptor.for_type(
            component_type,
            identifier=identifier,
            scope=scope,
            dependencies=dependencies,
        )
        self.register(descriptor)
        return descriptor

    def register_all(self, descriptors: Iterable[ComponentDescriptor]) -> None:
        """Register several descriptors at once, in order."""
        for descriptor in descriptors:
            self.register(descriptor)

    def contains(self, identifier: str) -> bool:
        return identifier in self._catalog

    def get(self, identifier: str) -> Any:
        """Return the component registered under the identifier.

        Args:
            identifier: The component identifier.

        Returns:
            The component. Singletons are the same object on every call.

        Raises:
            NotFoundError: If no descriptor is registered under the identifier.
            ConstructionError: If the component cannot be built.
            RequiredDependencyMissingError: If a required dependency cannot be resolved.
            InitializationError: If a lifecycle hook or post-processor fails.
            CircularReferenceError: If a singleton cycle is hit while circular references are disabled.
            ContainerStateError: If a previous refresh failed.
        """
        if self._refresh_failed:
            raise ContainerStateError("Container failed to refresh and can no longer be used; clear it or build a new one")
        return self._pipeline.get(identifier)

    def get_by_type(self, component_type: Type[T]) -> T:
        """Return the single registered component whose type is a subclass of the given type.

        Args:
            component_type: The type to look up.

        Raises:
            NotFoundError: If no component matches.
            AmbiguousComponentError: If several components match.
        """
        candidates = self._catalog.find_by_type(component_type)
        if not candidates:
            raise NotFoundError(component_type.__name__, "no component of this type is registered")
        if len(candidates) > 1:
            raise AmbiguousComponentError(component_type, [candidate.identifier for candidate in candidates])
        return self.get(candidates[0].identifier)

    def refresh(self) -> None:
        """Eagerly realize every registered component in registration order.

        Stops at the first error. The container is then left partially
        initialized and refuses further requests until cleared.

        Raises:
            ContainerError: The first error raised while building a component.
        """
        descriptors = self._catalog.all()
        logger.debug("Refreshing container with %d components", len(descriptors))
        for descriptor in descriptors:
            try:
                self.get(descriptor.identifier)
            except Exception:
                self._refresh_failed = True
                logger.error("Container refresh failed while creating '%s'", descriptor.identifier)
                raise

    def get_catalog_copy(self) -> List[ComponentDescriptor]:
        return self._catalog.all()

    def get_singleton_cache_copy(self) -> Dict[str, Any]:
        return self._registry.get_singleton_cache_copy()

    def clear(self) -> None:
        """Clear all descriptors, cached instances and post-processors.

        Useful for testing or resetting the container state.
        """
        self._catalog.clear()
        self.clear_instances()

    def clear_instances(self) -> None:
        """Drop cached singletons and post-processors but keep the catalog."""
        self._registry.clear()
        self._post_processors.clear()
        self._refresh_failed = False
