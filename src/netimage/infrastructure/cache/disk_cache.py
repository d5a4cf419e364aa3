# 💾 netimage/infrastructure/cache/disk_cache.py
"""
💾 Дисковий кеш сирих байтів зображень за відбитком URL.

🔹 Файл `<cache_root>/imagecache/<cache_key>` містить байти без метаданих і TTL.
🔹 Якщо файл є: віддаємо його вміст без звірки з мережею.
🔹 Якщо немає: завантажуємо через `RemoteFetcher`, записуємо атомарно
   (тимчасовий файл у тому ж каталозі + `os.replace`) і повертаємо байти.
🔹 Невдале завантаження нічого не пише: наступний запит почне з нуля.
🔹 Паралельні запити одного URL в межах екземпляра йдуть через per-key lock,
   тож мережевий запит виконується один раз.
🔹 Помилки файлової системи піднімаються як `CacheIOError`, а не маскуються під cache miss.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import asyncio															# 🔐 Per-key locks
import logging															# 🧾 Логування кешу
import os																# 🔁 Атомарна заміна файлу
import tempfile															# 🧪 Тимчасові файли для атомарного запису
from contextlib import asynccontextmanager								# 🧰 Single-flight контекст
from dataclasses import dataclass, field								# 🧱 Стан in-flight ключа
from pathlib import Path												# 🛤️ Шляхи
from typing import AsyncIterator, Dict, Optional, Union					# 🧰 Типізація

# 🌐 Зовнішні бібліотеки
import aiofiles															# 💽 Асинхронне читання/запис файлів

# 🧩 Внутрішні модулі проєкту
from netimage.domain.image_fetch.cache_key import cache_key_for			# 🔑 Відбиток URL
from netimage.domain.image_fetch.entities import SOURCE_CACHE, SOURCE_NETWORK, CacheLookup, FetchRequest	# 📦 Запит і результат
from netimage.domain.image_fetch.interfaces import IBytesCache, IRemoteFetcher	# 📋 Контракти
from netimage.errors import CacheIOError								# 🚨 Файлові збої
from netimage.shared.metrics import CACHE_HITS, CACHE_MISSES, CACHE_WRITES	# 📊 Метрики кешу
from netimage.shared.utils.logger import LOG_NAME						# 🏷️ Ім'я базового логера

logger = logging.getLogger(f"{LOG_NAME}.disk_cache")

CACHE_SUBDIR = "imagecache"												# 📁 Фіксована підпапка кешу
CACHE_FILE_MODE = 0o644													# 🔓 Права файлів кешу (mkstemp створює 0600)


@dataclass
class _InFlight:
    """🔐 Lock ключа та кількість корутин, що його тримають або чекають."""

    lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    users: int = 0


# ================================
# 💾 ДИСКОВИЙ КЕШ
# ================================
class DiskCache(IBytesCache):
    """💾 Кеш байтів на диску з дозавантаженням через мережу."""

    def __init__(
        self,
        cache_root: Union[str, Path],
        fetcher: IRemoteFetcher,
        *,
        subdir: str = CACHE_SUBDIR,
        file_mode: int = CACHE_FILE_MODE,
    ) -> None:
        self.cache_root = Path(cache_root)								# 🛤️ Корінь (tmp/кеш платформи)
        self.cache_dir = self.cache_root / subdir						# 📁 Каталог файлів кешу
        self._fetcher = fetcher											# 📥 Мережеве джерело
        self.file_mode = file_mode										# 🔓 Права записаних файлів
        self._inflight: Dict[str, _InFlight] = {}						# 🔐 Активні ключі
        logger.debug("💾 DiskCache init: %s", self.cache_dir)

    # ================================
    # 🛤️ ШЛЯХИ
    # ================================
    def path_for(self, url: str) -> Path:
        """🛤️ Детермінований шлях файлу кешу для `url` (незалежно від існування)."""
        return self.cache_dir / cache_key_for(url)

    def cached_path(self, request: FetchRequest) -> Optional[Path]:
        """🛤️ Шлях кешу або None, якщо запит не використовує дисковий кеш."""
        if not request.use_disk_cache:
            return None
        return self.path_for(request.url)

    def contains(self, url: str) -> bool:
        """🔍 Чи є файл кешу для `url`."""
        return self.path_for(url).is_file()

    # ================================
    # 🔄 ПУБЛІЧНИЙ API
    # ================================
    async def read_or_fetch(self, request: FetchRequest) -> Optional[bytes]:
        """📦 Байти з кешу; на промах: з мережі із записом у кеш. None, якщо мережа не віддала."""
        return (await self.lookup(request)).data

    async def lookup(self, request: FetchRequest) -> CacheLookup:
        """📦 Те саме, що `read_or_fetch`, разом із джерелом байтів."""
        key = request.cache_key
        path = self.cache_dir / key
        self._ensure_dir(request.url)

        async with self._single_flight(key):
            cached = await self._read_if_present(request.url, path)
            if cached is not None:
                CACHE_HITS.inc()
                logger.debug("💾 Cache hit: %s (%s)", request.url, path)
                return CacheLookup(cached, SOURCE_CACHE)

            CACHE_MISSES.inc()
            logger.debug("💾 Cache miss: %s (%s)", request.url, path)
            data = await self._fetcher.fetch(
                request.url,
                request.headers,
                request.retry_limit,
                request.retry_duration,
                request.retry_duration_factor,
                request.timeout_duration,
            )
            if data is None:
                return CacheLookup(None, SOURCE_NETWORK)

            await self._write_atomic(request.url, path, data)
            return CacheLookup(data, SOURCE_NETWORK)

    async def write(self, url: str, data: bytes) -> Path:
        """📤 Атомарно зберігає `data` як запис кешу для `url`."""
        self._ensure_dir(url)
        path = self.path_for(url)
        async with self._single_flight(path.name):
            await self._write_atomic(url, path, data)
        return path

    # ================================
    # 🧠 ВНУТРІШНЯ ЛОГІКА
    # ================================
    def _ensure_dir(self, url: str) -> None:
        """🧱 Створює каталог кешу; «вже існує»: не помилка."""
        try:
            self.cache_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            logger.error("❌ Не вдалося створити каталог кешу %s: %s", self.cache_dir, exc)
            raise CacheIOError(url, self.cache_dir, details=str(exc)) from exc

    async def _read_if_present(self, url: str, path: Path) -> Optional[bytes]:
        if not path.exists():
            return None
        try:
            async with aiofiles.open(path, "rb") as file_handle:
                return await file_handle.read()
        except FileNotFoundError:
            logger.debug("💾 Файл кешу зник між перевіркою та читанням: %s", path)
            return None
        except OSError as exc:
            logger.error("❌ Помилка читання кешу %s: %s", path, exc)
            raise CacheIOError(url, path, details=str(exc)) from exc

    async def _write_atomic(self, url: str, path: Path, data: bytes) -> None:
        """💾 Пише у тимчасовий файл і атомарно підміняє цільовий."""
        tmp_path: Optional[Path] = None
        try:
            fd, tmp_name = tempfile.mkstemp(
                prefix=path.name + ".",
                suffix=".part",
                dir=str(path.parent),
            )
            os.close(fd)
            tmp_path = Path(tmp_name)
            async with aiofiles.open(tmp_path, "wb") as file_handle:
                await file_handle.write(data)
            os.chmod(tmp_path, self.file_mode)
            os.replace(tmp_path, path)									# 🔁 Атомарно підміняємо файл
        except OSError as exc:
            logger.error("❌ Не вдалося записати кеш %s: %s", path, exc)
            raise CacheIOError(url, path, details=str(exc)) from exc
        finally:
            if tmp_path is not None and tmp_path.exists():
                tmp_path.unlink(missing_ok=True)						# 🧹 Прибираємо тимчасовий файл

        CACHE_WRITES.inc()
        logger.info("💾 Cache update: %s → %s (%d B)", url, path, len(data))

    @asynccontextmanager
    async def _single_flight(self, key: str) -> AsyncIterator[None]:
        """🔐 Серіалізує check-fetch-write для одного ключа."""
        entry = self._inflight.get(key)
        if entry is None:
            entry = self._inflight[key] = _InFlight()
        entry.users += 1
        try:
            async with entry.lock:
                yield
        finally:
            entry.users -= 1
            if entry.users == 0:
                self._inflight.pop(key, None)


__all__ = ["CACHE_FILE_MODE", "CACHE_SUBDIR", "DiskCache"]
