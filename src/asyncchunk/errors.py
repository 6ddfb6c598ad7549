"""Exceptions raised by asyncchunk operations."""

from typing import Any, Optional


class ChunkingError(Exception):
    """Base class for errors raised by asyncchunk itself."""
    pass


class InvalidArgumentError(ChunkingError, ValueError):
    """An operator was consumed with an argument it cannot accept."""

    def __init__(self, param_name: str, message: str, actual_value: Optional[Any] = None):
        self.param_name = param_name
        self.actual_value = actual_value
        super().__init__(f"{param_name}: {message}")

    @classmethod
    def required(cls, param_name: str) -> 'InvalidArgumentError':
        return cls(param_name, f"{param_name} is required")

    @classmethod
    def below_minimum(cls, param_name: str, value: Any, minimum: int) -> 'InvalidArgumentError':
        return cls(
            param_name,
            f"must be greater than or equal to {minimum} (got {value!r})",
            actual_value=value,
        )


class OperationCancelledError(ChunkingError):
    """
    Cooperative cancellation was observed.

    Kept apart from asyncio.CancelledError: the surrounding task is not being
    cancelled, the caller asked the operation to stop through its token.
    """

    def __init__(self, message: str = "The operation was cancelled."):
        super().__init__(message)
