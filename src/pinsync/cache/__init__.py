"""Local cache implementations."""

from pinsync.cache.json_file import JsonFileCache
from pinsync.cache.memory import MemoryCache

__all__ = ["JsonFileCache", "MemoryCache"]
