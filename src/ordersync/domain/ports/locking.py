"""Port guarding the check-then-create window of one order."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from contextlib import AbstractContextManager


class OriginLockedError(RuntimeError):
    """Raised when another run currently holds the lock for an origin tag."""

    def __init__(self, origin_tag: str, *, holder: str | None = None) -> None:
        message = f"Origin {origin_tag} is locked"
        if holder:
            message = f"{message} by {holder}"
        super().__init__(message)
        self.origin_tag = origin_tag
        self.holder = holder


@runtime_checkable
class OriginLock(Protocol):
    """Single-flight guard keyed by origin tag.

    ``hold`` raises :class:`OriginLockedError` when the tag is held elsewhere and
    releases the tag when the block exits, whatever the outcome.
    """

    def hold(self, origin_tag: str) -> AbstractContextManager[None]: ...


__all__ = ["OriginLock", "OriginLockedError"]
