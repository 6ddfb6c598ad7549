"""Lazy async streams and the chunking operator."""

from asyncchunk.streams.stream import (
    AsyncStream,
    iterate_async,
)
from asyncchunk.streams.operators import (
    AsyncStreamOperator,
    ChunkOperator,
    chunk_async,
)

__all__ = [
    "AsyncStream",
    "iterate_async",
    "AsyncStreamOperator",
    "ChunkOperator",
    "chunk_async",
]
