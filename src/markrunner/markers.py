"""Marker decorators declaring the role a function plays in a run."""

import inspect
from enum import Enum
from typing import Any, Callable, TypeVar

F = TypeVar("F")

MARKER_ATTRIBUTE = "__markrunner_roles__"


class Role(str, Enum):
    """Role a marked function plays in the execution model."""

    TEST = "test"
    SETUP = "setup"
    TEARDOWN = "teardown"


def _unwrap(obj: Any) -> Any:
    """Return the plain function behind a staticmethod or classmethod."""
    if isinstance(obj, (staticmethod, classmethod)):
        return obj.__func__
    return obj


def _mark(obj: F, role: Role) -> F:
    target = _unwrap(obj)
    if not callable(target):
        raise TypeError(f"Cannot mark {obj!r} as {role.value}: not a function")

    roles = getattr(target, MARKER_ATTRIBUTE, frozenset())
    setattr(target, MARKER_ATTRIBUTE, roles | {role})
    return obj


def test(func: F) -> F:
    """Mark a function as a test."""
    return _mark(func, Role.TEST)


def setup(func: F) -> F:
    """Mark a function as the setup hook of its owning type."""
    return _mark(func, Role.SETUP)


def teardown(func: F) -> F:
    """Mark a function as the teardown hook of its owning type."""
    return _mark(func, Role.TEARDOWN)


# Keep pytest from collecting the decorator when it is imported by name.
test.__test__ = False  # type: ignore[attr-defined]


def roles_of(obj: Any) -> frozenset[Role]:
    """Get the roles attached to a function, staticmethod or classmethod."""
    return getattr(_unwrap(obj), MARKER_ATTRIBUTE, frozenset())


def has_role(obj: Any, role: Role) -> bool:
    """Check whether an object carries the given marker."""
    return role in roles_of(obj)


def _returns_nothing(annotation: Any) -> bool:
    return annotation in (inspect.Signature.empty, None, type(None), "None")


def is_valid_test_signature(func: Callable, skip_receiver: bool = False) -> bool:
    """Check that a test function takes no arguments and returns no value.

    Args:
        func: The plain (unbound) function to check
        skip_receiver: Whether the first parameter is bound to an instance
            or class at call time and should not count as an argument

    Returns:
        True if the function can be invoked with no arguments and signals
        failure only by raising
    """
    if (
        inspect.iscoroutinefunction(func)
        or inspect.isgeneratorfunction(func)
        or inspect.isasyncgenfunction(func)
    ):
        return False

    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError):
        return False

    parameters = list(signature.parameters.values())
    if skip_receiver:
        if not parameters or parameters[0].kind not in (
            inspect.Parameter.POSITIONAL_ONLY,
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
        ):
            return False
        parameters = parameters[1:]

    if parameters:
        return False

    return _returns_nothing(signature.return_annotation)
