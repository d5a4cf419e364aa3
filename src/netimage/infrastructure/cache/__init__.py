# 💾 netimage/infrastructure/cache/__init__.py
from .disk_cache import CACHE_FILE_MODE, CACHE_SUBDIR, DiskCache

__all__ = ["CACHE_FILE_MODE", "CACHE_SUBDIR", "DiskCache"]
