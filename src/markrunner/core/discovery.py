"""Test discovery functionality."""

from dataclasses import dataclass, field
from types import ModuleType
from typing import Union

from markrunner.markers import Role, is_valid_test_signature
from markrunner.registry import Binding, Member, Owner, Registry


class DiscoveryError(Exception):
    """Raised when a module cannot be introspected for tests."""

    pass


@dataclass(frozen=True)
class TestDescriptor:
    """Represents a discovered, not yet run test."""

    __test__ = False  # Prevent pytest from collecting this as a test class

    owner: Owner
    member: Member

    @property
    def name(self) -> str:
        """Name of the test function."""
        return self.member.name

    @property
    def full_name(self) -> str:
        """Get the full test name including the owning type."""
        return f"{self.owner.name}.{self.member.name}"

    @property
    def requires_instance(self) -> bool:
        """Whether the test runs against a fresh fixture instance."""
        return self.member.binding is Binding.INSTANCE


@dataclass
class DiscoveryResult:
    """Result of test discovery."""

    tests: list[TestDescriptor] = field(default_factory=list)

    @property
    def total_count(self) -> int:
        """Number of discovered tests."""
        return len(self.tests)


class TestDiscovery:
    """Discovers marked tests in a module or registry."""

    __test__ = False  # Prevent pytest from collecting this as a test class

    def discover(self, source: Union[Registry, ModuleType]) -> DiscoveryResult:
        """Discover all tests, in owner order then declaration order.

        Raises:
            DiscoveryError: If the source cannot be introspected
        """
        registry = self._as_registry(source)

        tests = []
        for owner in registry.owners:
            for member in owner.members_with_role(Role.TEST):
                if self._is_runnable(member):
                    tests.append(TestDescriptor(owner=owner, member=member))

        return DiscoveryResult(tests=tests)

    def _as_registry(self, source: Union[Registry, ModuleType]) -> Registry:
        if isinstance(source, Registry):
            return source
        if isinstance(source, ModuleType):
            try:
                return Registry.from_module(source)
            except (AttributeError, TypeError) as e:
                raise DiscoveryError(
                    f"Cannot introspect module {getattr(source, '__name__', source)!r}: {e}"
                ) from e
        raise DiscoveryError(
            f"Expected a module or Registry, got {type(source).__name__}"
        )

    @staticmethod
    def _is_runnable(member: Member) -> bool:
        return is_valid_test_signature(
            member.function,
            skip_receiver=member.binding is not Binding.STATIC,
        )
