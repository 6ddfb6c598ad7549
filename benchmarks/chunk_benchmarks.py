#!/usr/bin/env python3
"""
Throughput and allocation benchmarks for chunk_async.
"""

import asyncio
import sys

from asyncchunk.profiler import run_benchmarks


async def main() -> int:
    print("=== chunk_async benchmarks ===")
    results = await run_benchmarks()
    
    for result in results:
        print(result.summary)
    
    total = sum(r.elements for r in results)
    print(f"\nChunked {total:,} elements in {len(results)} runs")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
