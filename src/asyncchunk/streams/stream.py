"""
Lazy async streams.
"""

import asyncio
import inspect
from typing import (
    Any, AsyncIterable, AsyncIterator, Callable, Iterable, List,
    Optional, TypeVar, Union
)

from asyncchunk.config import config
from asyncchunk.streams.operators import AsyncStreamOperator, ChunkOperator

T = TypeVar('T')

Source = Union[AsyncIterable[T], Iterable[T], Callable[[], Union[AsyncIterable[T], Iterable[T]]]]


async def iterate_async(iterable: Iterable[T], yield_control: Optional[bool] = None) -> AsyncIterator[T]:
    """
    Adapt a synchronous iterable to an async iterator.
    
    Args:
        iterable: Elements to produce
        yield_control: Hand control back to the event loop between elements
            (defaults to config.yield_control)
    """
    if yield_control is None:
        yield_control = config.yield_control
    
    for item in iterable:
        yield item
        if yield_control:
            await asyncio.sleep(0)


def _to_async_iterable(obj: Any) -> AsyncIterable[Any]:
    if hasattr(obj, '__aiter__'):
        return obj
    if hasattr(obj, '__iter__'):
        return iterate_async(obj)
    raise TypeError(f"Source must be iterable or async iterable, got {type(obj).__name__}")


class AsyncStream(AsyncIterable[T]):
    """
    A lazy async stream that can be chunked and consumed.
    
    Nothing is read from the source until the stream is iterated, and every
    iteration starts over from the source.
    """
    
    def __init__(self, source: Source):
        """
        Initialize stream.
        
        Args:
            source: Async iterable, iterable, or callable returning either
        """
        if hasattr(source, '__aiter__') or hasattr(source, '__iter__'):
            self._source = lambda: source
            self._length_hint = len(source) if hasattr(source, '__len__') else None
        elif callable(source):
            self._source = source
            self._length_hint = None
        else:
            raise TypeError("Source must be iterable, async iterable or callable")
        
        self._operators: List[AsyncStreamOperator] = []
    
    def __aiter__(self) -> AsyncIterator[T]:
        """Create async iterator with all operators applied."""
        iterator = _to_async_iterable(self._source())
        
        for op in self._operators:
            iterator = op.apply(iterator)
        
        return iterator.__aiter__()
    
    def _with(self, operator: AsyncStreamOperator) -> 'AsyncStream[Any]':
        new_stream = AsyncStream(self._source)
        new_stream._length_hint = self._length_hint
        new_stream._operators = self._operators.copy()
        new_stream._operators.append(operator)
        return new_stream
    
    # Intermediate operators
    
    def chunk(self, size: Optional[int] = None, token: Any = None) -> 'AsyncStream[List[T]]':
        """
        Group elements into chunks.
        
        Args:
            size: Maximum chunk size (defaults to config.calculate_chunk_size)
            token: Cooperative cancellation signal
        """
        if size is None:
            # Only a bare source has a meaningful length
            total = self._length_hint if not self._operators else None
            size = config.calculate_chunk_size(total)
        
        chunked = self._with(ChunkOperator(size, token))
        chunked._length_hint = None
        return chunked
    
    # Terminal operators
    
    async def collect(self) -> List[T]:
        """Collect all elements into a list."""
        return [item async for item in self]
    
    async def count(self) -> int:
        """Count elements."""
        total = 0
        async for _ in self:
            total += 1
        return total
    
    async def first(self) -> Optional[T]:
        """Get first element."""
        iterator = self.__aiter__()
        try:
            async for item in iterator:
                return item
            return None
        finally:
            aclose = getattr(iterator, 'aclose', None)
            if aclose is not None:
                await aclose()
    
    async def foreach(self, func: Callable[[T], Any]) -> None:
        """Apply function (sync or async) to each element."""
        async for item in self:
            result = func(item)
            if inspect.isawaitable(result):
                await result
    
    # Factory methods
    
    @classmethod
    def from_iterable(cls, iterable: Iterable[T]) -> 'AsyncStream[T]':
        """Create stream from iterable."""
        return cls(iterable)
    
    @classmethod
    def from_async_iterable(cls, iterable: AsyncIterable[T]) -> 'AsyncStream[T]':
        """Create stream from async iterable."""
        return cls(iterable)
    
    @classmethod
    def range(cls, *args) -> 'AsyncStream[int]':
        """Create stream of integers."""
        stream = cls(lambda: range(*args))
        stream._length_hint = len(range(*args))
        return stream
