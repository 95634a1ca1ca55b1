"""Unit tests for ComponentContainer."""

import pytest

from beanwire.application.container import ComponentContainer
from beanwire.domain import (
    AmbiguousComponentError,
    CircularReferenceError,
    ComponentDescriptor,
    ContainerSettings,
    ContainerStateError,
    DependencySpec,
    IContainer,
    InitializationError,
    NotFoundError,
    RequiredDependencyMissingError,
    Scope,
)


class TestContainerInitialization:
    """Test cases for ComponentContainer initialization."""

    def test_container_initialization(self):
        """Test that container initializes correctly."""
        container = ComponentContainer()

        assert container.get_catalog_copy() == []
        assert container.get_singleton_cache_copy() == {}
        assert container.allow_circular_references is True

    def test_container_implements_interface(self):
        """Test that ComponentContainer implements IContainer."""
        assert isinstance(ComponentContainer(), IContainer)

    def test_container_uses_given_settings(self):
        """Test that settings are taken from the constructor."""
        settings = ContainerSettings(allow_circular_references=False)
        container = ComponentContainer(settings=settings)

        assert container.settings is settings
        assert container.allow_circular_references is False

    def test_containers_do_not_share_state(self):
        """Test that two containers keep independent caches."""

        class Clock:
            pass

        first, second = ComponentContainer(), ComponentContainer()
        first.register_component(Clock)
        second.register_component(Clock)

        assert first.get("clock") is not second.get("clock")


class TestRegistration:
    """Test cases for registration helpers."""

    def test_register_component_derives_identifier(self):
        """Test that register_component builds and stores a descriptor."""
        container = ComponentContainer()

        class UserService:
            pass

        descriptor = container.register_component(UserService, dependencies=["userRepository"])

        assert descriptor.identifier == "userService"
        assert descriptor.dependencies == (DependencySpec(identifier="userRepository"),)
        assert container.contains("userService")

    def test_register_all_keeps_order(self):
        """Test that register_all registers in the given order."""
        container = ComponentContainer()
        descriptors = [
            ComponentDescriptor(identifier="b", component_type=object),
            ComponentDescriptor(identifier="a", component_type=object),
        ]

        container.register_all(descriptors)

        assert container.get_catalog_copy() == descriptors

    def test_last_registration_wins(self):
        """Test that re-registering an identifier replaces the descriptor."""
        container = ComponentContainer()

        class First:
            pass

        class Second:
            pass

        container.register_component(First, identifier="service")
        container.register_component(Second, identifier="service")

        assert isinstance(container.get("service"), Second)


class TestResolution:
    """Test cases for get and get_by_type."""

    def test_get_missing_raises_not_found(self):
        """Test that unknown identifiers fail."""
        with pytest.raises(NotFoundError):
            ComponentContainer().get("missing")

    def test_singleton_and_prototype(self):
        """Test scope semantics through the facade."""
        container = ComponentContainer()

        class Clock:
            pass

        class Request:
            pass

        container.register_component(Clock)
        container.register_component(Request, scope="prototype")

        assert container.get("clock") is container.get("clock")
        assert container.get("request") is not container.get("request")

    def test_get_by_type_returns_unique_match(self):
        """Test lookup by base type."""
        container = ComponentContainer()

        class Repository:
            pass

        class UserRepository(Repository):
            pass

        container.register_component(UserRepository)

        assert container.get_by_type(Repository) is container.get("userRepository")

    def test_get_by_type_without_match(self):
        """Test that an unmatched type fails with NotFoundError."""

        class Repository:
            pass

        with pytest.raises(NotFoundError, match="Repository"):
            ComponentContainer().get_by_type(Repository)

    def test_get_by_type_with_several_matches(self):
        """Test that several matches fail with AmbiguousComponentError."""
        container = ComponentContainer()

        class Repository:
            pass

        class UserRepository(Repository):
            pass

        class OrderRepository(Repository):
            pass

        container.register_component(UserRepository)
        container.register_component(OrderRepository)

        with pytest.raises(AmbiguousComponentError) as exc_info:
            container.get_by_type(Repository)

        assert exc_info.value.identifiers == ["userRepository", "orderRepository"]


class TestCircularReferenceSwitch:
    """Test cases for the circular-reference setting."""

    def test_setter_writes_through_to_settings(self):
        """Test that the property updates the settings object."""
        container = ComponentContainer()

        container.allow_circular_references = False

        assert container.settings.allow_circular_references is False

    def test_disabling_before_refresh_rejects_cycles(self):
        """Test that the switch is honored by later resolutions."""
        container = ComponentContainer()

        class Node:
            pass

        container.register_component(Node, identifier="a", dependencies=["b"])
        container.register_component(Node, identifier="b", dependencies=["a"])
        container.allow_circular_references = False

        with pytest.raises(CircularReferenceError):
            container.get("a")


class TestRefresh:
    """Test cases for refresh."""

    def test_refresh_realizes_singletons(self):
        """Test that every singleton is built eagerly in registration order."""
        built = []
        container = ComponentContainer()

        def factory(name):
            def build():
                built.append(name)
                return object()

            return build

        container.register(ComponentDescriptor(identifier="b", component_type=factory("b")))
        container.register(ComponentDescriptor(identifier="a", component_type=factory("a")))
        container.register(
            ComponentDescriptor(identifier="p", component_type=factory("p"), scope=Scope.PROTOTYPE)
        )

        container.refresh()

        assert built == ["b", "a", "p"]
        assert set(container.get_singleton_cache_copy()) == {"a", "b"}

    def test_refresh_fails_fast(self):
        """Test that the first error aborts the remaining catalog."""
        built = []
        container = ComponentContainer()

        class Failing:
            def after_properties_set(self):
                raise RuntimeError("boom")

        def later():
            built.append("later")
            return object()

        container.register_component(Failing)
        container.register(ComponentDescriptor(identifier="later", component_type=later))

        with pytest.raises(InitializationError):
            container.refresh()

        assert built == []

    def test_container_unusable_after_failed_refresh(self):
        """Test that a failed refresh blocks further requests until cleared."""
        container = ComponentContainer()

        class Clock:
            pass

        container.register_component(Clock)
        container.register_component(Clock, identifier="broken", dependencies=["ghost"])

        with pytest.raises(RequiredDependencyMissingError):
            container.refresh()

        with pytest.raises(ContainerStateError):
            container.get("clock")

        container.clear()
        container.register_component(Clock)
        assert container.get("clock") is not None


class TestClear:
    """Test cases for clear and clear_instances."""

    def test_clear_removes_everything(self):
        """Test that clear drops descriptors and instances."""
        container = ComponentContainer()

        class Clock:
            pass

        container.register_component(Clock)
        container.get("clock")

        container.clear()

        assert container.get_catalog_copy() == []
        assert container.get_singleton_cache_copy() == {}

    def test_clear_instances_keeps_catalog(self):
        """Test that clear_instances rebuilds singletons on next request."""
        container = ComponentContainer()

        class Clock:
            pass

        container.register_component(Clock)
        first = container.get("clock")

        container.clear_instances()

        assert container.contains("clock")
        assert container.get("clock") is not first
