"""
Order status transition policies.

A policy is a plain predicate ``(current, target) -> bool``. The service
layer picks one by name from settings, so switching the storefront from
the permissive behavior to strict forward-only progression is a config
change.
"""
from typing import Callable, Dict

from .enums import LIFECYCLE, OrderStatus


TransitionPolicy = Callable[[OrderStatus, OrderStatus], bool]


def permissive(current: OrderStatus, target: OrderStatus) -> bool:
    """Operators may set any status from any status."""
    return True


def monotonic(current: OrderStatus, target: OrderStatus) -> bool:
    """
    Forward-only progression.

    - same status: allowed (idempotent update)
    - delivered / cancelled: frozen
    - cancelled: only before shipping
    - otherwise the target must be further along the lifecycle
    """
    if current == target:
        return True

    if current.is_terminal:
        return False

    if target == OrderStatus.CANCELLED:
        return current in (OrderStatus.PENDING, OrderStatus.PROCESSING)

    return LIFECYCLE.index(target) > LIFECYCLE.index(current)


POLICIES: Dict[str, TransitionPolicy] = {
    "permissive": permissive,
    "monotonic": monotonic,
}


def get_transition_policy(name: str) -> TransitionPolicy:
    """
    Resolve a policy by name.

    Raises:
        ValueError: If the name is not registered
    """
    try:
        return POLICIES[name.lower()]
    except KeyError:
        raise ValueError(
            f"Unknown status policy '{name}' (expected one of {sorted(POLICIES)})"
        )
