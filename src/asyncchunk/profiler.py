"""
Throughput and allocation profiling for the chunking operator.

Mirrors the benchmark grid the operator has always been measured with: item
counts of 1024, 4096 and 16384 against chunk sizes of 4, 16 and 64.
"""

import functools
import json
import logging
import time
import tracemalloc
from dataclasses import asdict, dataclass
from typing import Any, Callable, Dict, Iterable, List

import psutil

from asyncchunk.streams.operators import chunk_async
from asyncchunk.streams.stream import iterate_async

logger = logging.getLogger(__name__)

DEFAULT_ITEM_COUNTS = (1024, 4096, 16384)
DEFAULT_CHUNK_SIZES = (4, 16, 64)


@dataclass
class BenchmarkResult:
    """Result of one benchmark run."""
    item_count: int
    chunk_size: int
    batches: int
    elements: int
    duration: float
    peak_allocated_bytes: int
    rss_delta_bytes: int
    
    @property
    def items_per_second(self) -> float:
        if self.duration <= 0:
            return float('inf')
        return self.elements / self.duration
    
    @property
    def summary(self) -> str:
        return (f"items={self.item_count:>6} chunk={self.chunk_size:>3} "
                f"batches={self.batches:>5} time={self.duration * 1000:8.2f}ms "
                f"rate={self.items_per_second:12,.0f}/s "
                f"peak={self.peak_allocated_bytes / 1024:8.1f}KB")
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert result to dictionary."""
        data = asdict(self)
        data['items_per_second'] = self.items_per_second
        return data
    
    def save(self, path: str) -> None:
        """Save result to JSON file."""
        with open(path, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)


async def benchmark_chunking(item_count: int,
                             chunk_size: int,
                             yield_control: bool = True) -> BenchmarkResult:
    """
    Chunk a synthetic ``0..item_count-1`` source and measure it.
    
    Args:
        item_count: Number of source elements
        chunk_size: Chunk size passed to the operator
        yield_control: Yield to the event loop between source elements
    """
    data = list(range(item_count))
    process = psutil.Process()
    
    started_tracing = not tracemalloc.is_tracing()
    if started_tracing:
        tracemalloc.start()
    tracemalloc.reset_peak()
    
    start_rss = process.memory_info().rss
    start_time = time.perf_counter()
    
    batches = 0
    elements = 0
    try:
        async for chunk in chunk_async(iterate_async(data, yield_control), chunk_size):
            batches += 1
            elements += len(chunk)
        
        duration = time.perf_counter() - start_time
        _, peak = tracemalloc.get_traced_memory()
    finally:
        if started_tracing:
            tracemalloc.stop()
    
    rss_delta = process.memory_info().rss - start_rss
    
    if elements != item_count:
        raise RuntimeError(f"Chunking lost elements: expected {item_count}, got {elements}")
    
    result = BenchmarkResult(
        item_count=item_count,
        chunk_size=chunk_size,
        batches=batches,
        elements=elements,
        duration=duration,
        peak_allocated_bytes=peak,
        rss_delta_bytes=rss_delta,
    )
    logger.debug("Benchmark: %s", result.summary)
    return result


async def run_benchmarks(item_counts: Iterable[int] = DEFAULT_ITEM_COUNTS,
                         chunk_sizes: Iterable[int] = DEFAULT_CHUNK_SIZES,
                         yield_control: bool = True) -> List[BenchmarkResult]:
    """Run benchmark_chunking over every item count / chunk size pair."""
    chunk_sizes = list(chunk_sizes)
    results = []
    for item_count in item_counts:
        for chunk_size in chunk_sizes:
            results.append(await benchmark_chunking(item_count, chunk_size, yield_control))
    return results


def profile_async(print_summary: bool = True) -> Callable:
    """
    Decorator to time a coroutine function and its memory use.
    
    Example:
        @profile_async()
        async def consume():
            async for chunk in chunk_async(source, 16):
                ...
    """
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        async def wrapper(*args, **kwargs) -> Any:
            process = psutil.Process()
            start_memory = process.memory_info().rss
            start_time = time.perf_counter()
            
            try:
                return await func(*args, **kwargs)
            finally:
                wrapper.last_duration = time.perf_counter() - start_time
                wrapper.last_memory_used = (process.memory_info().rss - start_memory) / (1024 * 1024)
                
                if print_summary:
                    print(f"{func.__name__}: {wrapper.last_duration:.3f}s, "
                          f"memory {wrapper.last_memory_used:.1f}MB")
        
        wrapper.last_duration = None
        wrapper.last_memory_used = None
        return wrapper
    
    return decorator
