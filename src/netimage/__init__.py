# 🖼️ netimage/__init__.py
"""
🖼️ netimage: асинхронне завантаження зображень за URL з ретраями, таймаутом,
дисковим кешем, колбеками та fallback-зображенням.

Швидкий старт::

    loader = build_image_loader()
    data = await loader.load(FetchRequest("https://example.org/a.png", use_disk_cache=True))
"""

from netimage.config.setup.container import Container, build_image_loader
from netimage.domain.image_fetch import FetchRequest, cache_key_for
from netimage.errors import CacheIOError, ErrorCode, FetchFailedError, ImageFetchError
from netimage.infrastructure.cache import DiskCache
from netimage.infrastructure.network import RemoteFetcher, retry
from netimage.infrastructure.services import NetworkImageLoader

__version__ = "0.1.0"

__all__ = [
    "CacheIOError",
    "Container",
    "DiskCache",
    "ErrorCode",
    "FetchFailedError",
    "FetchRequest",
    "ImageFetchError",
    "NetworkImageLoader",
    "RemoteFetcher",
    "build_image_loader",
    "cache_key_for",
    "retry",
]
