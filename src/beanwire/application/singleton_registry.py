"""Application layer - Three-tier singleton cache."""

import logging
import threading
from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterator, List, Optional

from beanwire.domain import DuplicatePromotionError, Scope

logger = logging.getLogger(__name__)


class SingletonRegistry:
    """Holds singleton instances and breaks dependency cycles between them.

    Three cooperating caches separate what is fully built from what merely
    exists:

    - tier 1, finished singletons, write-once per identifier unless a
      failed build rolls them back;
    - tier 2, raw singletons already handed out to break a cycle;
    - tier 3, factories able to produce the raw singleton of a component
      still being built.

    A cycle A -> B -> A is resolved by giving B the raw instance of A before
    A's own dependencies are injected. B ends up holding a reference that
    becomes complete once A finishes, so early exposure only works for
    objects with reference semantics.

    All writes, and every read beyond the tier-1 fast path, happen under a
    single re-entrant lock which the creation pipeline also holds for the
    whole build of a singleton.

    Attributes:
        _singleton_objects: Tier 1, finished singletons.
        _early_singleton_objects: Tier 2, early-exposed raw singletons.
        _singleton_factories: Tier 3, pending early factories.
        _currently_in_creation: Identifiers being built, in creation order.
        _promoted_during_creation: Identifiers promoted since the outermost build started.
        _allow_circular_references: Callable reporting whether early exposure is enabled.
        _lock: Re-entrant lock guarding the caches and singleton creation.
    """

    def __init__(self, allow_circular_references: Callable[[], bool] = lambda: True) -> None:
        """Initialize the registry with empty caches.

        Args:
            allow_circular_references: Callable reporting whether early exposure is enabled.
                Read on every registration so the setting may change before refresh.
        """
        self._singleton_objects: Dict[str, Any] = {}
        self._early_singleton_objects: Dict[str, Any] = {}
        self._singleton_factories: Dict[str, Callable[[], Any]] = {}
        self._currently_in_creation: Dict[str, None] = {}
        self._promoted_during_creation: List[str] = []
        self._allow_circular_references = allow_circular_references
        self._lock = threading.RLock()

    def get_singleton(self, identifier: str) -> Optional[Any]:
        """Return the finished or early-exposed singleton, if any.

        Tier 1 is read without locking. An early reference is only produced
        for an identifier that is currently being built; the tier-3 factory is
        invoked at most once and its result moves to tier 2.

        Args:
            identifier: The singleton identifier.

        Returns:
            The singleton, or None when nothing can be handed out yet.
        """
        singleton = self._singleton_objects.get(identifier)
        if singleton is not None:
            return singleton

        with self._lock:
            singleton = self._singleton_objects.get(identifier)
            if singleton is not None or identifier not in self._currently_in_creation:
                return singleton

            singleton = self._early_singleton_objects.get(identifier)
            if singleton is None:
                factory = self._singleton_factories.pop(identifier, None)
                if factory is not None:
                    singleton = factory()
                    self._early_singleton_objects[identifier] = singleton
                    logger.debug("Exposed early reference to singleton '%s'", identifier)
            return singleton

    def register_early_factory(self, identifier: str, scope: Scope, factory: Callable[[], Any]) -> bool:
        """Register a factory producing the raw instance of a singleton being built.

        Nothing is registered for prototypes, when circular references are
        disabled, when the identifier is not currently in creation, or when it
        is already finished.

        Args:
            identifier: The component identifier.
            scope: The component scope.
            factory: Zero-argument callable returning the raw instance.

        Returns:
            Whether the factory was registered.
        """
        with self._lock:
            if (
                scope is not Scope.SINGLETON
                or not self._allow_circular_references()
                or identifier not in self._currently_in_creation
            ):
                return False
            if identifier in self._singleton_objects:
                return False
            self._singleton_factories[identifier] = factory
            self._early_singleton_objects.pop(identifier, None)
            return True

    def get_early_reference(self, identifier: str) -> Optional[Any]:
        """Return the tier-2 instance without invoking any pending factory."""
        return self._early_singleton_objects.get(identifier)

    def promote(self, identifier: str, instance: Any) -> None:
        """Mark a singleton as finished.

        Places the instance in tier 1 and purges the identifier from tiers 2
        and 3. Promoting the instance already held is a no-op.

        Args:
            identifier: The singleton identifier.
            instance: The fully initialized instance.

        Raises:
            DuplicatePromotionError: If a different instance is already finished.
        """
        with self._lock:
            existing = self._singleton_objects.get(identifier)
            if existing is not None:
                if existing is not instance:
                    raise DuplicatePromotionError(identifier, existing, instance)
                logger.debug("Singleton '%s' is already finished", identifier)
                return
            self._singleton_objects[identifier] = instance
            self._early_singleton_objects.pop(identifier, None)
            self._singleton_factories.pop(identifier, None)
            if self._currently_in_creation:
                self._promoted_during_creation.append(identifier)
        logger.debug("Promoted singleton '%s'", identifier)

    def discard(self, identifier: str) -> None:
        """Purge early state left behind by a failed build."""
        with self._lock:
            self._early_singleton_objects.pop(identifier, None)
            self._singleton_factories.pop(identifier, None)

    def promotion_checkpoint(self) -> int:
        """Return a marker for rolling back promotions made from now on."""
        with self._lock:
            return len(self._promoted_during_creation)

    def rollback_promotions(self, checkpoint: int) -> Dict[str, Any]:
        """Remove from tier 1 every singleton promoted since the checkpoint.

        Used when a build fails after some of its cycle partners were
        finished. Those partners may hold the raw instance of the failed
        component, so they are dropped and rebuilt on the next request.

        Args:
            checkpoint: Value returned by `promotion_checkpoint`.

        Returns:
            The instances removed from tier 1 keyed by identifier, in promotion order.
        """
        with self._lock:
            identifiers = self._promoted_during_creation[checkpoint:]
            del self._promoted_during_creation[checkpoint:]
            return {
                identifier: self._singleton_objects.pop(identifier)
                for identifier in identifiers
                if identifier in self._singleton_objects
            }

    def before_creation(self, identifier: str) -> None:
        with self._lock:
            self._currently_in_creation[identifier] = None

    def after_creation(self, identifier: str) -> None:
        with self._lock:
            self._currently_in_creation.pop(identifier, None)
            if not self._currently_in_creation:
                self._promoted_during_creation.clear()

    @contextmanager
    def creating(self, identifier: str) -> Iterator[None]:
        """Mark the identifier as in creation for the duration of the block.

        Example:
            >>> with registry.creating("userService"):
            ...     instance = build()
            ...     registry.promote("userService", instance)
        """
        self.before_creation(identifier)
        try:
            yield
        finally:
            self.after_creation(identifier)

    @contextmanager
    def creation_lock(self) -> Iterator[None]:
        """Hold the registry lock, serializing singleton creation across threads."""
        with self._lock:
            yield

    def is_currently_in_creation(self, identifier: str) -> bool:
        return identifier in self._currently_in_creation

    def creation_path(self) -> List[str]:
        """Identifiers currently being built, outermost first."""
        return list(self._currently_in_creation)

    def contains_singleton(self, identifier: str) -> bool:
        return identifier in self._singleton_objects

    def get_singleton_cache_copy(self) -> Dict[str, Any]:
        with self._lock:
            return dict(self._singleton_objects)

    def clear(self) -> None:
        """Drop every cached singleton and all in-flight creation state."""
        with self._lock:
            self._singleton_objects.clear()
            self._early_singleton_objects.clear()
            self._singleton_factories.clear()
            self._currently_in_creation.clear()
            self._promoted_during_creation.clear()
