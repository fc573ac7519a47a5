"""Setup/teardown resolution and member binding."""

import functools
from dataclasses import dataclass
from typing import Any, Callable, Optional

from markrunner.markers import Role
from markrunner.registry import Binding, Member, Owner


NO_FIXTURE = object()


class FixtureError(Exception):
    """Raised when a member cannot be bound to the available fixture."""

    pass


@dataclass(frozen=True)
class Hooks:
    """Lifecycle hooks honored for one owner."""

    setup: Optional[Member] = None
    teardown: Optional[Member] = None


def resolve_hooks(owner: Owner) -> Hooks:
    """Locate at most one setup and one teardown hook of an owner.

    When several members carry the same marker, the first one in declaration
    order wins. Only the owner's own members are searched.
    """
    setups = owner.members_with_role(Role.SETUP)
    teardowns = owner.members_with_role(Role.TEARDOWN)
    return Hooks(
        setup=setups[0] if setups else None,
        teardown=teardowns[0] if teardowns else None,
    )


def bind(owner: Owner, member: Member, fixture: Any = NO_FIXTURE) -> Callable[[], Any]:
    """Return a zero-argument callable invoking a member.

    Raises:
        FixtureError: If an instance member is bound without a fixture
    """
    if member.binding is Binding.INSTANCE:
        if fixture is NO_FIXTURE:
            raise FixtureError(
                f"{owner.name}.{member.name} requires an instance of {owner.name}"
            )
        return functools.partial(member.function, fixture)
    if member.binding is Binding.CLASS:
        return functools.partial(member.function, owner.target)
    return member.function
