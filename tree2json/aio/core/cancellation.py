"""Cancellation token shared by every branch of one traversal."""

from typing import Optional

from ...errors import TraversalCancelled


class CancellationToken:
    """Records the first failure of a traversal and stops later work.

    One token is created per walk and handed down the recursive calls.
    Only the first error passed to cancel() is kept.
    """

    def __init__(self):
        self._error: Optional[BaseException] = None

    @property
    def cancelled(self) -> bool:
        return self._error is not None

    @property
    def error(self) -> Optional[BaseException]:
        """The first error recorded, or None."""
        return self._error

    def cancel(self, error: BaseException) -> bool:
        """Record a failure.

        Args:
            error: The exception that failed a branch

        Returns:
            True if this was the first failure recorded
        """
        if self._error is not None:
            return False
        self._error = error
        return True

    def raise_if_cancelled(self) -> None:
        """Stop the calling branch if another branch already failed."""
        if self._error is not None:
            raise TraversalCancelled("traversal cancelled after an earlier failure")

    def __repr__(self) -> str:
        state = f"error={self._error!r}" if self._error is not None else "active"
        return f"CancellationToken({state})"
