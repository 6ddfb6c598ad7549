#!/usr/bin/env python3
"""
Tests for ChunkConfig.
"""

import unittest
from types import SimpleNamespace
from unittest import mock

from asyncchunk import ChunkConfig, ChunkStrategy
from asyncchunk.config import config


class TestChunkConfig(unittest.TestCase):
    """Test chunk size calculation."""
    
    def setUp(self):
        self.config = ChunkConfig()
    
    def test_singleton(self):
        """Test get_instance returns the module config."""
        self.assertIs(ChunkConfig.get_instance(), config)
    
    def test_set_defaults_ignores_unknown_keys(self):
        """Test set defaults ignores unknown keys."""
        original = config.default_chunk_size
        try:
            ChunkConfig.set_defaults(default_chunk_size=7, not_a_setting=1)
            
            self.assertEqual(config.default_chunk_size, 7)
            self.assertFalse(hasattr(config, 'not_a_setting'))
        finally:
            ChunkConfig.set_defaults(default_chunk_size=original)
    
    def test_fixed_strategy(self):
        """Test fixed strategy."""
        self.config.default_chunk_size = 250
        
        self.assertEqual(self.config.calculate_chunk_size(), 250)
        self.assertEqual(self.config.calculate_chunk_size(10 ** 6), 250)
    
    def test_strategy_accepts_strings(self):
        """Test strategy accepts strings."""
        self.config.chunk_strategy = 'sqrt_n'
        
        self.assertEqual(self.config.strategy, ChunkStrategy.SQRT_N)
    
    def test_unknown_strategy(self):
        """Test unknown strategy is rejected."""
        self.config.chunk_strategy = 'bogus'
        
        with self.assertRaises(ValueError):
            self.config.calculate_chunk_size(100)
    
    def test_sqrt_n_strategy(self):
        """Test sqrt_n strategy."""
        self.config.chunk_strategy = ChunkStrategy.SQRT_N
        
        self.assertEqual(self.config.calculate_chunk_size(10_000), 100)
        self.assertEqual(self.config.calculate_chunk_size(10), 3)
    
    def test_sqrt_n_unknown_size(self):
        """Test sqrt_n unknown size."""
        self.config.chunk_strategy = ChunkStrategy.SQRT_N
        self.config.default_chunk_size = 42
        
        self.assertEqual(self.config.calculate_chunk_size(None), 42)
        self.assertEqual(self.config.calculate_chunk_size(0), 42)
    
    def test_sqrt_n_clamped(self):
        """Test sqrt_n clamped."""
        self.config.chunk_strategy = ChunkStrategy.SQRT_N
        self.config.min_chunk_size = 50
        self.config.max_chunk_size = 60
        
        self.assertEqual(self.config.calculate_chunk_size(100), 50)
        self.assertEqual(self.config.calculate_chunk_size(10 ** 6), 60)
    
    def test_memory_based_strategy(self):
        """Test memory_based strategy."""
        self.config.chunk_strategy = ChunkStrategy.MEMORY_BASED
        self.config.item_size_estimate = 100
        self.config.memory_fraction = 0.5
        
        fake = SimpleNamespace(available=1_000_000)
        with mock.patch('asyncchunk.config.psutil.virtual_memory', return_value=fake):
            self.assertEqual(self.config.calculate_chunk_size(), 5000)
    
    def test_memory_based_respects_maximum(self):
        """Test memory_based respects maximum."""
        self.config.chunk_strategy = ChunkStrategy.MEMORY_BASED
        self.config.max_chunk_size = 1000
        
        fake = SimpleNamespace(available=10 ** 12)
        with mock.patch('asyncchunk.config.psutil.virtual_memory', return_value=fake):
            self.assertEqual(self.config.calculate_chunk_size(), 1000)
    
    def test_memory_based_capped_by_known_size(self):
        """Test memory_based capped by known size."""
        self.config.chunk_strategy = ChunkStrategy.MEMORY_BASED
        
        fake = SimpleNamespace(available=10 ** 12)
        with mock.patch('asyncchunk.config.psutil.virtual_memory', return_value=fake):
            self.assertEqual(self.config.calculate_chunk_size(3), 3)
            self.assertEqual(self.config.calculate_chunk_size(0), self.config.max_chunk_size)


if __name__ == '__main__':
    unittest.main()
