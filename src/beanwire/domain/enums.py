from enum import Enum
from typing import Optional, Union


class Scope(str, Enum):
    """Defines how many instances of a component the container hands out.

    Attributes:
        SINGLETON: One instance per identifier for the lifetime of the container.
        PROTOTYPE: New instance built on every request, never cached.
    """

    SINGLETON = "singleton"
    PROTOTYPE = "prototype"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: Optional[Union[str, "Scope"]]) -> "Scope":
        """Map a declared scope string onto a Scope member.

        An absent or empty scope means singleton. Any string other than
        exactly "singleton" is treated as prototype.

        Args:
            value: The declared scope, a Scope member, or None.

        Returns:
            The matching Scope member.

        Raises:
            ValueError: If the value is neither None, a string nor a Scope member.

        Example:
            >>> Scope.parse("")
            <Scope.SINGLETON: 'singleton'>
            >>> Scope.parse("prototype")
            <Scope.PROTOTYPE: 'prototype'>
        """
        if isinstance(value, cls):
            return value
        if value is not None and not isinstance(value, str):
            raise ValueError(f"Scope must be a string, got {type(value).__name__}")
        if value is None or value == "" or value == cls.SINGLETON.value:
            return cls.SINGLETON
        return cls.PROTOTYPE
