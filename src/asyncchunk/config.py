"""
Configuration management for chunking operations.
"""

import math
from typing import Optional, Union
from dataclasses import dataclass
from enum import Enum
import psutil


class ChunkStrategy(Enum):
    """Strategy for picking a chunk size when the caller does not give one."""
    FIXED = "fixed"
    SQRT_N = "sqrt_n"
    MEMORY_BASED = "memory_based"


@dataclass
class ChunkConfig:
    """Global configuration for chunking operations."""
    
    # Chunking
    chunk_strategy: Union[ChunkStrategy, str] = ChunkStrategy.FIXED
    default_chunk_size: int = 1000
    min_chunk_size: int = 1
    max_chunk_size: int = 10_000_000
    
    # Memory-based sizing
    item_size_estimate: int = 64  # bytes per buffered element
    memory_fraction: float = 0.1
    
    # Sync sources
    yield_control: bool = True  # hand control back to the loop between elements
    
    # Logging
    log_level: str = "WARNING"
    
    _instance: Optional['ChunkConfig'] = None
    
    @classmethod
    def get_instance(cls) -> 'ChunkConfig':
        """Get singleton instance."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance
    
    @classmethod
    def set_defaults(cls, **kwargs) -> None:
        """Set default configuration values."""
        instance = cls.get_instance()
        for key, value in kwargs.items():
            if hasattr(instance, key):
                setattr(instance, key, value)
    
    @property
    def strategy(self) -> ChunkStrategy:
        return ChunkStrategy(self.chunk_strategy)
    
    def _clamp(self, size: int) -> int:
        return max(self.min_chunk_size, min(size, self.max_chunk_size))
    
    def calculate_chunk_size(self, total_size: Optional[int] = None) -> int:
        """Calculate a chunk size based on strategy."""
        strategy = self.strategy
        
        if strategy == ChunkStrategy.SQRT_N:
            if not total_size or total_size <= 0:
                return self._clamp(self.default_chunk_size)
            return self._clamp(math.isqrt(total_size))
        
        elif strategy == ChunkStrategy.MEMORY_BASED:
            available = psutil.virtual_memory().available
            chunk_size = int(available * self.memory_fraction / max(1, self.item_size_estimate))
            # No chunk can hold more than the whole source
            if total_size and total_size > 0:
                chunk_size = min(chunk_size, total_size)
            return self._clamp(chunk_size)
        
        return self._clamp(self.default_chunk_size)


# Global configuration instance
config = ChunkConfig.get_instance()
