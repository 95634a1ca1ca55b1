"""Application layer - Component creation pipeline."""

import logging
from typing import Any, Callable

from beanwire.application.catalog import DescriptorCatalog
from beanwire.application.lifecycle import LifecycleDispatcher
from beanwire.application.post_processors import PostProcessorChain
from beanwire.application.singleton_registry import SingletonRegistry
from beanwire.domain import (
    CircularReferenceError,
    ComponentDescriptor,
    ComponentPostProcessor,
    ConstructionError,
    ContainerError,
    IInjector,
    IInstantiator,
    InitializationError,
    NotFoundError,
    RequiredDependencyMissingError,
    Scope,
)

logger = logging.getLogger(__name__)


class CreationPipeline:
    """Builds components: construction, injection, then initialization.

    Singletons go through the SingletonRegistry, which caches finished
    instances and hands out raw instances to break dependency cycles.
    Prototypes are built fresh on every request and never cached. A
    prototype that depends on itself, directly or through other prototypes,
    recurses until Python raises RecursionError.

    Attributes:
        _catalog: Descriptors to build from.
        _registry: Singleton caches and creation lock.
        _post_processors: Interceptors run around initialization.
        _lifecycle: Dispatcher for name-awareness and init hooks.
        _instantiator: Builds raw instances.
        _injector: Assigns resolved dependencies.
    """

    def __init__(
        self,
        catalog: DescriptorCatalog,
        registry: SingletonRegistry,
        post_processors: PostProcessorChain,
        lifecycle: LifecycleDispatcher,
        instantiator: IInstantiator,
        injector: IInjector,
    ) -> None:
        self._catalog = catalog
        self._registry = registry
        self._post_processors = post_processors
        self._lifecycle = lifecycle
        self._instantiator = instantiator
        self._injector = injector

    def get(self, identifier: str) -> Any:
        """Return the component registered under the identifier, building it if needed.

        Args:
            identifier: The component identifier.

        Returns:
            The finished component. Inside a singleton cycle this may be the
            raw instance of a component whose dependencies are still being injected.

        Raises:
            NotFoundError: If no descriptor is registered under the identifier.
            ConstructionError: If the raw instance cannot be built.
            RequiredDependencyMissingError: If a required dependency cannot be resolved.
            InitializationError: If a lifecycle hook or post-processor fails.
            CircularReferenceError: If a cycle is hit while circular references are disabled.
        """
        descriptor = self._catalog.lookup(identifier)
        if descriptor is None:
            raise NotFoundError(identifier)

        if descriptor.scope is Scope.PROTOTYPE:
            return self._create(descriptor)

        singleton = self._registry.get_singleton(identifier)
        if singleton is not None:
            return singleton

        with self._registry.creation_lock():
            # Another thread may have finished it while this one waited
            singleton = self._registry.get_singleton(identifier)
            if singleton is not None:
                return singleton

            if self._registry.is_currently_in_creation(identifier):
                raise CircularReferenceError(self._registry.creation_path() + [identifier])

            checkpoint = self._registry.promotion_checkpoint()
            with self._registry.creating(identifier):
                logger.debug("Creating singleton '%s'", identifier)
                try:
                    singleton = self._create(descriptor)
                    self._registry.promote(identifier, singleton)
                except Exception:
                    self._abandon(identifier, checkpoint)
                    raise
            return singleton

    def _abandon(self, identifier: str, checkpoint: int) -> None:
        # Partners finished during the build may hold the exposed raw instance
        exposed = self._registry.get_early_reference(identifier) is not None
        self._registry.discard(identifier)
        if not exposed:
            return
        rolled_back = self._registry.rollback_promotions(checkpoint)
        for instance in rolled_back.values():
            self._post_processors.unregister(instance)
        if rolled_back:
            logger.warning(
                "Singleton '%s' failed after being handed out early; dropped %s so they are rebuilt",
                identifier,
                ", ".join(rolled_back),
            )

    def _create(self, descriptor: ComponentDescriptor) -> Any:
        identifier = descriptor.identifier
        raw_instance = self._instantiate(descriptor)

        if self._registry.register_early_factory(identifier, descriptor.scope, lambda: raw_instance):
            logger.debug("Registered early factory for singleton '%s'", identifier)

        self._populate(descriptor, raw_instance)
        exposed_instance = self._initialize(identifier, raw_instance)

        early_reference = self._registry.get_early_reference(identifier)
        if early_reference is not None and exposed_instance is not early_reference:
            logger.warning(
                "Singleton '%s' was handed out early as its raw instance, but post-processing "
                "replaced it; components in the cycle keep the raw instance",
                identifier,
            )

        if isinstance(exposed_instance, ComponentPostProcessor) and self._post_processors.register(
            exposed_instance
        ):
            if descriptor.is_singleton:
                logger.debug("Component '%s' registered as post-processor", identifier)
            else:
                logger.warning(
                    "Prototype '%s' registered as post-processor; every request adds another "
                    "processor to the chain (%d registered)",
                    identifier,
                    len(self._post_processors),
                )

        return exposed_instance

    def _instantiate(self, descriptor: ComponentDescriptor) -> Any:
        try:
            instance = self._instantiator.instantiate(descriptor)
        except ContainerError:
            raise
        except Exception as e:
            raise ConstructionError(descriptor.identifier, f"{type(e).__name__}: {e}") from e

        if instance is None:
            raise ConstructionError(descriptor.identifier, "instantiator returned None")
        return instance

    def _populate(self, descriptor: ComponentDescriptor, instance: Any) -> None:
        for dependency in descriptor.dependencies:
            try:
                value = self.get(dependency.identifier)
            except NotFoundError as e:
                if dependency.required:
                    raise RequiredDependencyMissingError(descriptor.identifier, dependency.identifier) from e
                logger.debug(
                    "Optional dependency '%s' of '%s' not found, leaving it unset",
                    dependency.identifier,
                    descriptor.identifier,
                )
                continue
            except RequiredDependencyMissingError:
                if dependency.required:
                    raise
                logger.debug(
                    "Optional dependency '%s' of '%s' could not be resolved, leaving it unset",
                    dependency.identifier,
                    descriptor.identifier,
                )
                continue

            try:
                self._injector.inject(instance, dependency, value)
            except ContainerError:
                raise
            except Exception as e:
                raise ConstructionError(
                    descriptor.identifier,
                    f"cannot inject '{dependency.identifier}' into attribute "
                    f"'{dependency.target_attribute}': {e}",
                ) from e

    def _initialize(self, identifier: str, instance: Any) -> Any:
        self._lifecycle.invoke_aware_methods(identifier, instance)
        wrapped_instance = self._post_process(self._post_processors.apply_before_initialization, identifier, instance)
        self._lifecycle.invoke_init_methods(identifier, wrapped_instance)
        return self._post_process(self._post_processors.apply_after_initialization, identifier, wrapped_instance)

    @staticmethod
    def _post_process(step: Callable[[str, Any], Any], identifier: str, instance: Any) -> Any:
        try:
            return step(identifier, instance)
        except ContainerError:
            raise
        except Exception as e:
            raise InitializationError(identifier, f"post-processor failed: {e}") from e
