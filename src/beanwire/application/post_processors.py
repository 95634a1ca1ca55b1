"""Application layer - Post-processor chain."""

import logging
import threading
from typing import Any, Callable, List, Optional, Tuple

from beanwire.domain import ComponentPostProcessor

logger = logging.getLogger(__name__)


class PostProcessorChain:
    """Ordered chain of component post-processors.

    Each processor receives the result of the previous one. A processor
    returning None stops the chain, and the instance as it stood before that
    processor was called is returned. Processors are only removed when the
    component they belong to is rolled back after a failed build.

    Attributes:
        _processors: Registered processors in registration order.
        _lock: Guards registration.
    """

    def __init__(self) -> None:
        self._processors: List[ComponentPostProcessor] = []
        self._lock = threading.Lock()

    def register(self, processor: ComponentPostProcessor) -> bool:
        """Append a processor unless this very instance is already registered.

        Args:
            processor: The post-processor instance.

        Returns:
            Whether the processor was appended.
        """
        with self._lock:
            if any(existing is processor for existing in self._processors):
                return False
            self._processors.append(processor)
        logger.debug("Registered post-processor %s", type(processor).__name__)
        return True

    def unregister(self, processor: Any) -> bool:
        """Remove this very instance from the chain, if registered."""
        with self._lock:
            for index, existing in enumerate(self._processors):
                if existing is processor:
                    del self._processors[index]
                    break
            else:
                return False
        logger.debug("Unregistered post-processor %s", type(processor).__name__)
        return True

    def processors(self) -> Tuple[ComponentPostProcessor, ...]:
        return tuple(self._processors)

    def apply_before_initialization(self, identifier: str, instance: Any) -> Any:
        """Run every processor's before-initialization step on the instance."""
        return self._apply(
            identifier,
            instance,
            lambda processor, current: processor.post_process_before_initialization(identifier, current),
        )

    def apply_after_initialization(self, identifier: str, instance: Any) -> Any:
        """Run every processor's after-initialization step on the instance."""
        return self._apply(
            identifier,
            instance,
            lambda processor, current: processor.post_process_after_initialization(identifier, current),
        )

    def _apply(
        self,
        identifier: str,
        instance: Any,
        step: Callable[[ComponentPostProcessor, Any], Optional[Any]],
    ) -> Any:
        current = instance
        for processor in self.processors():
            result = step(processor, current)
            if result is None:
                logger.debug(
                    "Post-processor %s returned nothing for '%s', stopping chain",
                    type(processor).__name__,
                    identifier,
                )
                return current
            current = result
        return current

    def clear(self) -> None:
        with self._lock:
            self._processors.clear()

    def __len__(self) -> int:
        return len(self._processors)
