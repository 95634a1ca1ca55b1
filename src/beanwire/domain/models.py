from typing import Any, Callable, Iterable, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from beanwire.domain.enums import Scope


class DependencySpec(BaseModel):
    """Value object describing one dependency declared by a component.

    Attributes:
        identifier: Identifier of the component to inject.
        attribute: Attribute of the consumer receiving the value. Defaults to the identifier.
        required: Whether resolution must fail when the dependency cannot be resolved.
    """

    model_config = ConfigDict(frozen=True)

    identifier: str = Field(..., min_length=1, description="Identifier of the component to inject.")
    attribute: Optional[str] = Field(
        default=None,
        description="Attribute receiving the dependency. Defaults to the identifier.",
    )
    required: bool = Field(default=True, description="Whether the dependency must be resolvable.")

    @property
    def target_attribute(self) -> str:
        return self.attribute or self.identifier


DependencyLike = Union[str, DependencySpec]


def _decapitalize(name: str) -> str:
    return name[:1].lower() + name[1:]


class ComponentDescriptor(BaseModel):
    """Static metadata describing how to build and scope a component.

    Created once when the catalog is filled and never mutated afterwards.

    Attributes:
        identifier: Unique name of the component in the catalog.
        component_type: Zero-argument callable (usually a class) producing the raw instance.
        scope: Singleton or prototype.
        dependencies: Dependencies injected after construction, in declaration order.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    identifier: str = Field(..., min_length=1, description="Unique identifier of the component.")
    component_type: Callable[[], Any] = Field(
        ..., description="Zero-argument callable producing the raw instance."
    )
    scope: Scope = Field(default=Scope.SINGLETON, description="Scope of the component.")
    dependencies: Tuple[DependencySpec, ...] = Field(
        default=(),
        description="Dependencies injected after construction, in declaration order.",
    )

    @field_validator("scope", mode="before")
    @classmethod
    def _parse_scope(cls, value: Any) -> Scope:
        return Scope.parse(value)

    @field_validator("dependencies", mode="before")
    @classmethod
    def _parse_dependencies(cls, value: Any) -> Tuple[Any, ...]:
        if value is None:
            return ()
        if isinstance(value, (str, DependencySpec)):
            value = (value,)
        return tuple(DependencySpec(identifier=item) if isinstance(item, str) else item for item in value)

    @property
    def is_singleton(self) -> bool:
        return self.scope is Scope.SINGLETON

    @classmethod
    def for_type(
        cls,
        component_type: Callable[[], Any],
        identifier: Optional[str] = None,
        scope: Optional[Union[str, Scope]] = None,
        dependencies: Iterable[DependencyLike] = (),
    ) -> "ComponentDescriptor":
        """Build a descriptor, deriving the identifier from the type name when omitted.

        Args:
            component_type: Class or zero-argument factory.
            identifier: Explicit identifier. Defaults to the type name with a lower-case first letter.
            scope: Declared scope. Absent or empty means singleton.
            dependencies: Identifiers or DependencySpec objects.

        Example:
            >>> ComponentDescriptor.for_type(UserService, dependencies=["userRepository"]).identifier
            'userService'
        """
        if not identifier:
            identifier = _decapitalize(getattr(component_type, "__name__", ""))
        if not isinstance(dependencies, (str, DependencySpec)):
            dependencies = tuple(dependencies)
        return cls(
            identifier=identifier,
            component_type=component_type,
            scope=scope,
            dependencies=dependencies,
        )


class ContainerSettings(BaseModel):
    """Runtime switches of a container.

    Attributes:
        allow_circular_references: Whether singletons in a dependency cycle
            may receive early references to each other.
    """

    model_config = ConfigDict(validate_assignment=True)

    allow_circular_references: bool = Field(
        default=True,
        description="Expose raw singletons early to resolve dependency cycles.",
    )
