"""
Memory Sizing for envinfo

This module answers how much memory the hosting process may use and how much
of it is still free. The ceiling is taken from an explicit configuration or a
finite address-space limit; without either, a quarter of the physical memory
is assumed.

Classes:
    RuntimeMemory: Abstract source of memory readings
    ProcessMemory: Readings for the current interpreter process
"""

import gc
import logging
from abc import ABC, abstractmethod
from typing import Optional

import psutil

from envinfo.runtime.capability import probe_capability
from envinfo.utils.exceptions import MemoryConfigurationError

logger = logging.getLogger(__name__)


class RuntimeMemory(ABC):
    """Abstract source of memory readings, in bytes."""

    @abstractmethod
    def max_memory(self) -> Optional[int]:
        """Configured memory ceiling, or None if the process is unbounded."""
        pass

    @abstractmethod
    def total_memory(self) -> int:
        """Memory currently allocated to the process."""
        pass

    @abstractmethod
    def free_memory(self) -> int:
        """Allocated memory that is not in use."""
        pass

    @abstractmethod
    def physical_memory(self) -> int:
        """Physical memory of the host, or -1 if it cannot be determined."""
        pass

    def collect_garbage(self) -> None:
        """Reduce fragmentation before a reading."""
        gc.collect()


def _address_space_limit(resource) -> Optional[int]:
    soft, _hard = resource.getrlimit(resource.RLIMIT_AS)
    if soft == resource.RLIM_INFINITY:
        return None
    return int(soft)


class ProcessMemory(RuntimeMemory):
    """Memory readings for the running interpreter."""

    def __init__(self, max_bytes: Optional[int] = None):
        """
        Args:
            max_bytes: Explicit memory ceiling; overrides the address-space limit
        """
        self.max_bytes = max_bytes

    def max_memory(self) -> Optional[int]:
        if self.max_bytes is not None:
            return self.max_bytes
        return probe_capability("resource", _address_space_limit).value_or(None)

    def total_memory(self) -> int:
        return psutil.Process().memory_info().rss

    def free_memory(self) -> int:
        # CPython does not report unused space inside its own arenas
        return 0

    def physical_memory(self) -> int:
        try:
            return psutil.virtual_memory().total
        except Exception as e:
            logger.warning(f"Cannot determine the size of the physical memory: {e}")
            return -1


def get_max_memory(memory: Optional[RuntimeMemory] = None) -> int:
    """
    The maximum memory the process may use, in bytes.

    Uses the configured ceiling if there is one. Otherwise returns, as a
    heuristic, 1/4th of the physical memory size.

    Raises:
        MemoryConfigurationError: If neither value can be determined
    """
    memory = memory or ProcessMemory()

    max_memory = memory.max_memory()
    if max_memory is not None:
        return max_memory

    physical_memory = memory.physical_memory()
    if physical_memory != -1:
        return physical_memory // 4

    raise MemoryConfigurationError("Could not determine the amount of free memory.")


def get_size_of_free_memory(memory: Optional[RuntimeMemory] = None) -> int:
    """
    Gets an estimate of the size of the free memory, in bytes.

    The estimate may vary, depending on the current level of memory
    fragmentation and the number of dead objects. For a better (but more
    heavy-weight) estimate, use ``get_size_of_free_memory_with_defrag``.
    """
    memory = memory or ProcessMemory()
    max_memory = get_max_memory(memory)
    estimate = max_memory - memory.total_memory() + memory.free_memory()
    return min(max(estimate, 0), max_memory)


def get_size_of_free_memory_with_defrag(memory: Optional[RuntimeMemory] = None) -> int:
    """
    Gets an estimate of the size of the free memory after a garbage collection.

    NOTE: This method is heavy-weight. The collection pauses the whole
    process for an unbounded amount of time.
    """
    memory = memory or ProcessMemory()
    memory.collect_garbage()
    return get_size_of_free_memory(memory)
