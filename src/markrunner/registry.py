"""Explicit registry of the types and functions a run draws tests from."""

import inspect
from dataclasses import dataclass, field
from enum import Enum
from types import ModuleType
from typing import Any, Callable, Iterable, Optional

from markrunner.markers import Role, roles_of


class Binding(str, Enum):
    """How a member is invoked relative to its owner."""

    INSTANCE = "instance"
    STATIC = "static"
    CLASS = "class"


@dataclass(frozen=True)
class Member:
    """A function exposed by an owner, with the markers attached to it."""

    name: str
    function: Callable
    roles: frozenset[Role] = frozenset()
    binding: Binding = Binding.STATIC

    def has_role(self, role: Role) -> bool:
        """Check whether this member carries the given marker."""
        return role in self.roles


@dataclass(frozen=True)
class Owner:
    """A type (or module namespace) owning test functions and hooks."""

    name: str
    target: Any
    members: tuple[Member, ...] = field(default_factory=tuple)
    factory: Optional[Callable[[], Any]] = None

    def create_fixture(self) -> Any:
        """Construct a fresh fixture through the zero-argument factory."""
        if self.factory is None:
            raise TypeError(f"{self.name} has no zero-argument factory")
        return self.factory()

    def members_with_role(self, role: Role) -> list[Member]:
        """Get members carrying a marker, in declaration order."""
        return [m for m in self.members if m.has_role(role)]


def _member_from_attribute(name: str, value: Any) -> Optional[Member]:
    if isinstance(value, staticmethod):
        return Member(name, value.__func__, roles_of(value), Binding.STATIC)
    if isinstance(value, classmethod):
        return Member(name, value.__func__, roles_of(value), Binding.CLASS)
    if inspect.isfunction(value):
        return Member(name, value, roles_of(value), Binding.INSTANCE)
    return None


class Registry:
    """Ordered table of owners, built once before discovery.

    Only the attributes a class defines itself are registered; base classes
    are never searched.
    """

    def __init__(self) -> None:
        self._owners: list[Owner] = []

    @property
    def owners(self) -> tuple[Owner, ...]:
        """Registered owners in registration order."""
        return tuple(self._owners)

    def __len__(self) -> int:
        return len(self._owners)

    def register(
        self,
        cls: Optional[type] = None,
        *,
        factory: Optional[Callable[[], Any]] = None,
        name: Optional[str] = None,
    ) -> Any:
        """Register a class. Usable as ``@registry.register`` or with arguments.

        Args:
            cls: The class to register
            factory: Zero-argument callable producing a fixture (default: cls)
            name: Qualified owner name (default: module.QualName)

        Returns:
            The class itself, so the method works as a decorator
        """
        if cls is None:
            return lambda c: self.register(c, factory=factory, name=name)

        if not inspect.isclass(cls):
            raise TypeError(f"Only classes can be registered, got {cls!r}")

        members = []
        for attr_name, value in vars(cls).items():
            member = _member_from_attribute(attr_name, value)
            if member is not None:
                members.append(member)

        self._owners.append(
            Owner(
                name=name or f"{cls.__module__}.{cls.__qualname__}",
                target=cls,
                members=tuple(members),
                factory=factory or cls,
            )
        )
        return cls

    def register_functions(
        self, name: str, functions: Iterable[Callable], target: Any = None
    ) -> None:
        """Register free functions as the type-level members of one owner."""
        members = []
        for func in functions:
            if not callable(func):
                raise TypeError(f"Only functions can be registered, got {func!r}")
            members.append(
                Member(func.__name__, func, roles_of(func), Binding.STATIC)
            )
        self._owners.append(Owner(name=name, target=target, members=tuple(members)))

    @classmethod
    def from_module(cls, module: ModuleType) -> "Registry":
        """Build a registry from a loaded Python module.

        Module-level functions form one owner named after the module, followed
        by every class defined in the module, in declaration order. Classes
        nested in those classes follow their enclosing class.
        """
        namespace = vars(module)
        module_name = module.__name__

        registry = cls()
        functions = [
            value
            for value in namespace.values()
            if inspect.isfunction(value)
            and value.__module__ == module_name
            and roles_of(value)
        ]
        if functions:
            registry.register_functions(module_name, functions, target=module)

        for value in namespace.values():
            if inspect.isclass(value) and value.__module__ == module_name:
                registry._register_with_nested(value)

        return registry

    def _register_with_nested(self, cls: type) -> None:
        self.register(cls)
        for value in vars(cls).values():
            if (
                inspect.isclass(value)
                and value.__module__ == cls.__module__
                and value.__qualname__ == f"{cls.__qualname__}.{value.__name__}"
            ):
                self._register_with_nested(value)
