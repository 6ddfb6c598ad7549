#!/usr/bin/env python3
"""
Tests for chunking benchmarks and profiling helpers.
"""

import json
import os
import shutil
import tempfile
import unittest

from asyncchunk.profiler import (
    BenchmarkResult,
    benchmark_chunking,
    profile_async,
    run_benchmarks,
)


class TestBenchmarks(unittest.IsolatedAsyncioTestCase):
    """Test benchmark runs over synthetic sources."""
    
    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()
    
    def tearDown(self):
        shutil.rmtree(self.temp_dir, ignore_errors=True)
    
    async def test_benchmark_counts(self):
        """Test benchmark counts."""
        result = await benchmark_chunking(100, 7)
        
        self.assertEqual(result.item_count, 100)
        self.assertEqual(result.chunk_size, 7)
        self.assertEqual(result.batches, 15)
        self.assertEqual(result.elements, 100)
        self.assertGreaterEqual(result.duration, 0)
        self.assertGreater(result.peak_allocated_bytes, 0)
    
    async def test_empty_benchmark(self):
        """Test benchmark over an empty source."""
        result = await benchmark_chunking(0, 4, yield_control=False)
        
        self.assertEqual(result.batches, 0)
        self.assertEqual(result.elements, 0)
    
    async def test_run_benchmarks_grid(self):
        """Test run benchmarks grid."""
        results = await run_benchmarks(item_counts=(16, 32), chunk_sizes=(4, 16), yield_control=False)
        
        self.assertEqual(len(results), 4)
        self.assertEqual(
            [(r.item_count, r.chunk_size, r.batches) for r in results],
            [(16, 4, 4), (16, 16, 1), (32, 4, 8), (32, 16, 2)],
        )
    
    async def test_save_result(self):
        """Test save result."""
        result = await benchmark_chunking(64, 16)
        path = os.path.join(self.temp_dir, "result.json")
        
        result.save(path)
        
        with open(path) as f:
            data = json.load(f)
        self.assertEqual(data['batches'], 4)
        self.assertIn('items_per_second', data)
    
    def test_summary(self):
        """Test summary formatting."""
        result = BenchmarkResult(
            item_count=1024, chunk_size=16, batches=64, elements=1024,
            duration=0.5, peak_allocated_bytes=2048, rss_delta_bytes=0,
        )
        
        self.assertEqual(result.items_per_second, 2048)
        self.assertIn("batches=   64", result.summary)
    
    def test_zero_duration_rate(self):
        """Test zero duration rate."""
        result = BenchmarkResult(
            item_count=1, chunk_size=1, batches=1, elements=1,
            duration=0.0, peak_allocated_bytes=0, rss_delta_bytes=0,
        )
        
        self.assertEqual(result.items_per_second, float('inf'))


class TestProfileAsync(unittest.IsolatedAsyncioTestCase):
    """Test the coroutine profiling decorator."""
    
    async def test_records_metrics(self):
        """Test records metrics."""
        @profile_async(print_summary=False)
        async def work(n):
            return sum(range(n))
        
        self.assertIsNone(work.last_duration)
        
        self.assertEqual(await work(10), 45)
        self.assertIsNotNone(work.last_duration)
        self.assertIsNotNone(work.last_memory_used)
    
    async def test_records_metrics_on_failure(self):
        """Test records metrics on failure."""
        @profile_async(print_summary=False)
        async def fail():
            raise RuntimeError("boom")
        
        with self.assertRaises(RuntimeError):
            await fail()
        self.assertIsNotNone(fail.last_duration)


if __name__ == '__main__':
    unittest.main()
