"""
Cooperative cancellation.

A CancellationTokenSource owns a flag, CancellationTokens are read-only views
handed to operations, and operations poll the token at well-defined points
instead of being interrupted.
"""

import asyncio
import logging
from typing import Any, Optional

from asyncchunk.errors import InvalidArgumentError, OperationCancelledError

logger = logging.getLogger(__name__)


class _CancellationState:
    __slots__ = ('requested',)

    def __init__(self):
        self.requested = False


class CancellationToken:
    """Read-only view of a cancellation flag."""

    NONE: 'CancellationToken'

    def __init__(self, state: Optional[_CancellationState] = None):
        self._state = state

    @property
    def can_be_cancelled(self) -> bool:
        return self._state is not None

    @property
    def is_cancellation_requested(self) -> bool:
        return self._state is not None and self._state.requested

    def throw_if_cancellation_requested(self) -> None:
        """Raise OperationCancelledError if cancellation has been requested."""
        if self.is_cancellation_requested:
            raise OperationCancelledError()

    def __repr__(self) -> str:
        return f"CancellationToken(cancelled={self.is_cancellation_requested})"


CancellationToken.NONE = CancellationToken()


class _EventToken(CancellationToken):
    """Token backed by an external flag exposing ``is_set()``."""

    def __init__(self, event: Any):
        super().__init__()
        self._event = event

    @property
    def can_be_cancelled(self) -> bool:
        return True

    @property
    def is_cancellation_requested(self) -> bool:
        return bool(self._event.is_set())


class CancellationTokenSource:
    """Owner of a cancellation flag."""

    def __init__(self):
        self._state = _CancellationState()
        self._token = CancellationToken(self._state)
        self._timer: Optional[asyncio.TimerHandle] = None

    @property
    def token(self) -> CancellationToken:
        return self._token

    @property
    def is_cancellation_requested(self) -> bool:
        return self._state.requested

    def cancel(self) -> None:
        """Request cancellation. Idempotent."""
        if not self._state.requested:
            logger.debug("Cancellation requested")
        self._state.requested = True

    def cancel_after(self, delay: float) -> None:
        """
        Request cancellation after ``delay`` seconds.

        Must be called from within a running event loop. A later call replaces
        a pending one.
        """
        if delay < 0:
            raise InvalidArgumentError.below_minimum('delay', delay, 0)

        loop = asyncio.get_running_loop()
        if self._timer is not None:
            self._timer.cancel()
        self._timer = loop.call_later(delay, self.cancel)

    def close(self) -> None:
        """Drop a pending cancel_after timer."""
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def __enter__(self) -> 'CancellationTokenSource':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


def as_cancellation_token(signal: Any) -> CancellationToken:
    """
    Coerce a cancellation signal into a CancellationToken.

    Accepts None, a CancellationToken, a CancellationTokenSource, or any flag
    object with an ``is_set()`` method (asyncio.Event, threading.Event).
    """
    if signal is None:
        return CancellationToken.NONE
    if isinstance(signal, CancellationToken):
        return signal
    if isinstance(signal, CancellationTokenSource):
        return signal.token
    if callable(getattr(signal, 'is_set', None)):
        return _EventToken(signal)
    raise InvalidArgumentError(
        'token',
        f"expected a CancellationToken or an object with is_set(), got {type(signal).__name__}",
        actual_value=signal,
    )
