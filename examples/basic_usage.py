#!/usr/bin/env python3
"""
Basic usage examples for asyncchunk.
"""

import asyncio
import random
from asyncchunk import (
    AsyncStream,
    CancellationTokenSource,
    ChunkConfig,
    OperationCancelledError,
    chunk_async,
    configure_logging,
)
from asyncchunk.profiler import profile_async


async def paginated_source(pages: int, page_size: int):
    """Pretend to fetch rows from a slow paginated API."""
    for page in range(pages):
        await asyncio.sleep(random.uniform(0.001, 0.005))
        for row in range(page_size):
            yield {"page": page, "row": row}


async def example_chunk_async():
    """Example: batch rows for bulk inserts."""
    print("\n=== chunk_async Example ===")
    
    async for batch in chunk_async(paginated_source(pages=5, page_size=7), 10):
        print(f"Inserting batch of {len(batch)} rows "
              f"(first: page {batch[0]['page']}, row {batch[0]['row']})")


async def example_cancellation():
    """Example: stop chunking from the outside."""
    print("\n=== Cancellation Example ===")
    
    with CancellationTokenSource() as cts:
        seen = 0
        try:
            async for batch in chunk_async(paginated_source(pages=100, page_size=10), 25, cts.token):
                seen += 1
                print(f"Got batch {seen}: {len(batch)} rows")
                if seen == 3:
                    cts.cancel()
        except OperationCancelledError:
            print(f"Cancelled after {seen} batches")


async def example_stream():
    """Example: lazy streams with configured chunk size."""
    print("\n=== AsyncStream Example ===")
    
    ChunkConfig.set_defaults(chunk_strategy='sqrt_n')
    
    # √10000 = 100 elements per chunk
    sizes = [len(chunk) async for chunk in AsyncStream.range(10_000).chunk()]
    print(f"{len(sizes)} chunks of {sizes[0]} elements")
    
    # Chunks of chunks
    nested = await AsyncStream.range(20).chunk(3).chunk(2).collect()
    print(f"First nested chunk: {nested[0]}")
    
    ChunkConfig.set_defaults(chunk_strategy='fixed')


@profile_async()
async def example_profiled():
    """Example: profile a consumer."""
    print("\n=== Profiling Example ===")
    total = 0
    async for chunk in AsyncStream.range(100_000).chunk(64):
        total += sum(chunk)
    print(f"Sum: {total:,}")


async def main():
    configure_logging("INFO")
    
    await example_chunk_async()
    await example_cancellation()
    await example_stream()
    await example_profiled()


if __name__ == "__main__":
    asyncio.run(main())
