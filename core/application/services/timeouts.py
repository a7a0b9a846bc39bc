"""Deadline helper for collaborator calls."""
import asyncio
from typing import Awaitable, TypeVar

from core.domain.exceptions import CollaboratorTimeoutError

T = TypeVar("T")


async def with_timeout(awaitable: Awaitable[T], timeout: float, operation: str) -> T:
    """
    Await a collaborator call with a deadline.

    Args:
        awaitable: Coroutine to run
        timeout: Seconds before giving up
        operation: Name used in the error message

    Raises:
        CollaboratorTimeoutError: If the deadline passes
    """
    try:
        return await asyncio.wait_for(awaitable, timeout=timeout)
    except asyncio.TimeoutError as exc:
        raise CollaboratorTimeoutError(operation, timeout) from exc
