from typing import Any, List, Optional, Sequence


class ContainerError(Exception):
    """Base exception for container-related errors."""


class NotFoundError(ContainerError):
    """Raised when no descriptor is registered for the requested identifier.

    Attributes:
        identifier: The identifier that was requested.
    """

    def __init__(self, identifier: str, reason: Optional[str] = None) -> None:
        self.identifier = identifier
        self.reason = reason
        message = f"No component registered under identifier: '{identifier}'"
        if reason:
            message += f". Reason: {reason}"
        super().__init__(message)


class ConstructionError(ContainerError):
    """Raised when the raw instance of a component cannot be built.

    This occurs when:
    - The component type cannot be called without arguments.
    - The constructor or factory raises.
    - The constructor or factory returns None.
    - The resolved dependency cannot be assigned onto the instance.

    Attributes:
        identifier: The component that failed to build.
        reason: Optional reason for the failure.
    """

    def __init__(self, identifier: str, reason: Optional[str] = None) -> None:
        self.identifier = identifier
        self.reason = reason
        message = f"Failed to construct component '{identifier}'"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class RequiredDependencyMissingError(ContainerError):
    """Raised when a required dependency cannot be resolved.

    Attributes:
        identifier: The component declaring the dependency.
        dependency: The identifier of the missing dependency.
    """

    def __init__(self, identifier: str, dependency: str) -> None:
        self.identifier = identifier
        self.dependency = dependency
        super().__init__(f"Component '{identifier}' requires '{dependency}', which cannot be resolved")


class InitializationError(ContainerError):
    """Raised when a post-construction hook or a post-processor fails.

    Attributes:
        identifier: The component being initialized.
        reason: Optional reason for the failure.
    """

    def __init__(self, identifier: str, reason: Optional[str] = None) -> None:
        self.identifier = identifier
        self.reason = reason
        message = f"Failed to initialize component '{identifier}'"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class DuplicatePromotionError(ContainerError):
    """Raised when a singleton is finalized twice with different instances.

    This is an internal invariant violation; the first promoted instance is kept.

    Attributes:
        identifier: The singleton identifier.
        existing: The instance already held in the finished cache.
        rejected: The instance that was refused.
    """

    def __init__(self, identifier: str, existing: Any, rejected: Any) -> None:
        self.identifier = identifier
        self.existing = existing
        self.rejected = rejected
        super().__init__(
            f"Singleton '{identifier}' is already finalized with a different instance "
            f"({type(existing).__name__} at {id(existing):#x})"
        )


class CircularReferenceError(ContainerError):
    """Raised when a singleton is requested again while it is still being built
    and no early reference can be handed out (circular references disabled).

    Attributes:
        path: Identifiers of the creation path, ending with the re-requested one.
    """

    def __init__(self, path: Sequence[str]) -> None:
        self.path: List[str] = list(path)
        super().__init__(f"Circular reference detected: {' -> '.join(self.path)}")


class AmbiguousComponentError(ContainerError):
    """Raised when a lookup by type matches more than one component.

    Attributes:
        component_type: The requested type.
        identifiers: Identifiers of every matching component.
    """

    def __init__(self, component_type: type, identifiers: Sequence[str]) -> None:
        self.component_type = component_type
        self.identifiers = list(identifiers)
        super().__init__(
            f"Expected a single component of type {component_type.__name__}, "
            f"found {len(self.identifiers)}: {', '.join(self.identifiers)}"
        )


class ContainerStateError(ContainerError):
    """Raised when the container is used after a failed refresh.

    A refresh that fails leaves the container partially initialized.
    Clearing it or building a new container is the only recovery.
    """
