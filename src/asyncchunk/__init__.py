"""
asyncchunk: group an asynchronous stream into fixed-size chunks.

Chunks are produced lazily as soon as they are full, a final partial chunk is
produced when the source ends, and cancellation is cooperative through a
token checked at every pull and every yield.
"""

from asyncchunk.config import ChunkConfig, ChunkStrategy
from asyncchunk.errors import ChunkingError, InvalidArgumentError, OperationCancelledError
from asyncchunk.cancellation import (
    CancellationToken,
    CancellationTokenSource,
    as_cancellation_token,
)
from asyncchunk.streams import AsyncStream, ChunkOperator, chunk_async, iterate_async
from asyncchunk.log import configure_logging

__version__ = "0.1.0"
__license__ = "Apache-2.0"

__all__ = [
    "ChunkConfig",
    "ChunkStrategy",
    "ChunkingError",
    "InvalidArgumentError",
    "OperationCancelledError",
    "CancellationToken",
    "CancellationTokenSource",
    "as_cancellation_token",
    "AsyncStream",
    "ChunkOperator",
    "chunk_async",
    "iterate_async",
    "configure_logging",
]
