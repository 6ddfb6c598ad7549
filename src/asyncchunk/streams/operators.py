"""
Async stream operators.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, AsyncIterable, AsyncIterator, List, Optional, TypeVar

from asyncchunk.cancellation import as_cancellation_token
from asyncchunk.errors import InvalidArgumentError, OperationCancelledError

T = TypeVar('T')

logger = logging.getLogger(__name__)

MIN_CHUNK_SIZE = 1


class AsyncStreamOperator(ABC):
    """Base class for async stream operators."""
    
    @abstractmethod
    def apply(self, iterator: AsyncIterable[T]) -> AsyncIterator[Any]:
        """Apply operator to an async iterable."""
        pass


class ChunkOperator(AsyncStreamOperator):
    """Group elements into fixed-size chunks."""
    
    def __init__(self, size: int, token: Any = None):
        # Validated when the result is consumed, not here
        self.size = size
        self.token = token
    
    def apply(self, iterator: AsyncIterable[T]) -> AsyncIterator[List[T]]:
        return chunk_async(iterator, self.size, self.token)
    
    def __repr__(self) -> str:
        return f"ChunkOperator(size={self.size!r})"


def _validate_size(max_chunk_size: Any) -> None:
    if isinstance(max_chunk_size, bool) or not isinstance(max_chunk_size, int):
        raise InvalidArgumentError(
            'max_chunk_size',
            f"must be an integer (got {type(max_chunk_size).__name__})",
            actual_value=max_chunk_size,
        )
    if max_chunk_size < MIN_CHUNK_SIZE:
        raise InvalidArgumentError.below_minimum('max_chunk_size', max_chunk_size, MIN_CHUNK_SIZE)


async def chunk_async(source: AsyncIterable[T],
                      max_chunk_size: int,
                      token: Any = None) -> AsyncIterator[List[T]]:
    """
    Split an async iterable into lists of at most ``max_chunk_size`` elements.
    
    Every chunk except possibly the last holds exactly ``max_chunk_size``
    elements. An empty source yields no chunks at all. Each yielded list is a
    new object the caller owns.
    
    Nothing runs until the result is iterated: arguments are validated on the
    first ``__anext__`` and the source is not touched before that.
    
    Args:
        source: Async iterable to read from
        max_chunk_size: Maximum chunk length, at least 1
        token: Cooperative cancellation signal (CancellationToken,
            CancellationTokenSource, an object with ``is_set()``, or None)
    
    Raises:
        InvalidArgumentError: source is None or not async iterable, or
            max_chunk_size is not an integer >= 1
        OperationCancelledError: the token was cancelled; a partially filled
            chunk is dropped
        Exception: whatever the source raises, unchanged
    """
    if source is None:
        raise InvalidArgumentError.required('source')
    
    token = as_cancellation_token(token)
    token.throw_if_cancellation_requested()
    
    _validate_size(max_chunk_size)
    
    if not hasattr(source, '__aiter__'):
        raise InvalidArgumentError(
            'source',
            f"must be an asynchronous iterable (got {type(source).__name__})",
        )
    
    logger.debug("Chunking with max_chunk_size=%d", max_chunk_size)
    
    iterator = source.__aiter__()
    buffer: Optional[List[T]] = None
    index = 0
    batches = 0
    elements = 0
    
    try:
        while True:
            try:
                item = await iterator.__anext__()
            except StopAsyncIteration:
                break
            
            elements += 1
            token.throw_if_cancellation_requested()
            
            # Allocate only once an element exists for the chunk
            if buffer is None:
                buffer = [None] * max_chunk_size
                index = 0
            
            buffer[index] = item
            index += 1
            
            if index == max_chunk_size:
                token.throw_if_cancellation_requested()
                chunk, buffer = buffer, None
                batches += 1
                yield chunk
                token.throw_if_cancellation_requested()
        
        if buffer is not None:
            token.throw_if_cancellation_requested()
            del buffer[index:]
            chunk, buffer = buffer, None
            batches += 1
            yield chunk
    
    except OperationCancelledError:
        logger.debug("Chunking cancelled after %d chunks, %d buffered elements dropped",
                     batches, index if buffer is not None else 0)
        raise
    
    finally:
        # A source that is its own iterator belongs to the caller
        aclose = getattr(iterator, 'aclose', None) if iterator is not source else None
        if aclose is not None:
            await aclose()
    
    logger.debug("Chunking finished: %d chunks, %d elements", batches, elements)
