# 🖼️ netimage/infrastructure/services/image_loader.py
"""
🖼️ Точка входу пайплайна: кеш чи мережа, колбеки та fallback.

🔹 `resolve(request)`: детермінована ідентичність для дедуплікації викликачем.
🔹 `load(request)`:
   1. `use_disk_cache` → `DiskCache.lookup` (байти + джерело: cache | network);
   2. інакше → `RemoteFetcher.fetch` з мережевими параметрами запиту;
   3. є байти → `on_loaded()` і повертаємо байти;
   4. немає → `on_failed()`; далі fallback або `FetchFailedError`.
🔹 Колбеки: fire-and-forget: повернене значення ігнорується (awaitable чекаємо),
   їхні винятки логуються і не змінюють результат завантаження.
🔹 `CacheIOError` не підмінюється fallback-ом: файловий збій піднімаємо далі.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import inspect															# 🔍 Awaitable-результат колбеку
import logging															# 🧾 Логування завантажень
from typing import Optional												# 🧰 Типізація

# 🧩 Внутрішні модулі проєкту
from netimage.domain.image_fetch.entities import SOURCE_NETWORK, Callback, CacheLookup, FetchRequest	# 📦 Запит, колбек, результат
from netimage.domain.image_fetch.interfaces import IBytesCache, IImageLoader, IRemoteFetcher	# 📋 Контракти
from netimage.errors import CacheIOError, FetchFailedError				# 🚨 Термінальні помилки
from netimage.shared.metrics import FALLBACK_SERVED, FETCH_FAILED, FETCH_OK	# 📊 Метрики
from netimage.shared.utils.logger import LOG_NAME						# 🏷️ Ім'я базового логера

logger = logging.getLogger(f"{LOG_NAME}.loader")


# ================================
# 🖼️ ОРКЕСТРАТОР
# ================================
class NetworkImageLoader(IImageLoader):
    """🖼️ Завантажує байти зображення згідно з `FetchRequest`."""

    def __init__(self, fetcher: IRemoteFetcher, disk_cache: Optional[IBytesCache] = None) -> None:
        self._fetcher = fetcher											# 📥 Мережевий шар
        self._disk_cache = disk_cache									# 💾 Дисковий кеш (опційно)

    def resolve(self, request: FetchRequest) -> FetchRequest:
        """🔑 Запит сам є своєю ідентичністю (value-equality + узгоджений hash)."""
        return request

    async def load(self, request: FetchRequest) -> bytes:
        """📦 Байти зображення, fallback або `FetchFailedError`."""
        logger.debug("🖼️ load start: %r", request)
        try:
            data, source = await self._obtain(request)
        except CacheIOError as exc:
            FETCH_FAILED.inc()
            logger.error("💽 load failed on disk cache: %s", request.url, extra=exc.to_log_extra())
            await self._fire(request.on_failed, "on_failed", request.url)
            raise

        if data is not None:
            FETCH_OK.labels(source=source).inc()
            await self._fire(request.on_loaded, "on_loaded", request.url)
            return data

        FETCH_FAILED.inc()
        await self._fire(request.on_failed, "on_failed", request.url)
        if request.fallback_image is not None:
            FALLBACK_SERVED.inc()
            logger.info("🩹 Fallback image served for %s (%d B)", request.url, len(request.fallback_image))
            return request.fallback_image

        error = FetchFailedError(request.url)
        logger.error("❌ %s", error.message, extra=error.to_log_extra())
        raise error

    # ================================
    # 🧠 ВНУТРІШНЯ ЛОГІКА
    # ================================
    async def _obtain(self, request: FetchRequest) -> CacheLookup:
        """📥 Байти та їхнє джерело: диск (`cache`) або мережа (`network`)."""
        if request.use_disk_cache:
            if self._disk_cache is None:
                raise CacheIOError(request.url, None, details="disk cache is not configured")
            return await self._disk_cache.lookup(request)
        data = await self._fetcher.fetch(
            request.url,
            request.headers,
            request.retry_limit,
            request.retry_duration,
            request.retry_duration_factor,
            request.timeout_duration,
        )
        return CacheLookup(data, SOURCE_NETWORK)

    async def _fire(self, callback: Optional[Callback], name: str, url: str) -> None:
        """📣 Викликає колбек без аргументів; помилки лише логуються."""
        if callback is None:
            return
        try:
            result = callback()
            if inspect.isawaitable(result):
                await result
        except Exception:												# noqa: BLE001
            logger.exception("⚠️ %s callback raised for %s", name, url)


__all__ = ["NetworkImageLoader"]
