# 🧩 netimage/domain/image_fetch/__init__.py
"""
🧩 Пакет `domain.image_fetch` публікує сутність запиту, відбиток URL та контракти.

🔹 `entities.py`: `FetchRequest` і дефолтні параметри ретраїв.
🔹 `cache_key.py`: `cache_key_for` (стабільний відбиток URL).
🔹 `interfaces.py`: `IRemoteFetcher`, `IBytesCache`, `IImageLoader`.
"""

from .cache_key import cache_key_for
from .entities import (
    SOURCE_CACHE,
    SOURCE_NETWORK,
    CacheLookup,
    DEFAULT_RETRY_DURATION_FACTOR,
    DEFAULT_RETRY_DURATION_S,
    DEFAULT_RETRY_LIMIT,
    DEFAULT_SCALE,
    DEFAULT_TIMEOUT_S,
    FetchRequest,
)
from .interfaces import IBytesCache, IImageLoader, IRemoteFetcher

__all__ = [
    "CacheLookup",
    "SOURCE_CACHE",
    "SOURCE_NETWORK",
    "DEFAULT_RETRY_DURATION_FACTOR",
    "DEFAULT_RETRY_DURATION_S",
    "DEFAULT_RETRY_LIMIT",
    "DEFAULT_SCALE",
    "DEFAULT_TIMEOUT_S",
    "FetchRequest",
    "IBytesCache",
    "IImageLoader",
    "IRemoteFetcher",
    "cache_key_for",
]
