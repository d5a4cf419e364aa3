# 📥 netimage/infrastructure/network/remote_fetcher.py
"""
📥 Мережеве завантаження байтів зображення поверх `httpx` і ретраїв.

🔹 Одна спроба = `GET url` з заголовками, обмежений таймаутом.
🔹 Таймаут, мережева помилка чи статус ≠ 200: невдала спроба, не виняток.
🔹 Відʼємний `retry_limit` → 0 (рівно одна спроба).
🔹 Повертає байти тіла або `None`; ніколи не піднімає помилок мережі.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import asyncio															# ⏳ Загальний таймаут спроби
import logging															# 🧾 Логування результатів
import time																# ⏱️ Латентність для метрик
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional	# 🧰 Допоміжні типи

# 🌐 Зовнішні бібліотеки
import httpx															# 🌐 HTTP-клієнт

# 🧩 Внутрішні модулі проєкту
from netimage.domain.image_fetch.interfaces import IRemoteFetcher		# 📋 Контракт
from netimage.infrastructure.network.backoff_retrier import retry		# 🔁 Ретраї з backoff
from netimage.shared.metrics import FETCH_LATENCY						# ⏱️ Гістограма латентності
from netimage.shared.utils.logger import LOG_NAME						# 🏷️ Ім'я базового логера

logger = logging.getLogger(f"{LOG_NAME}.remote")


# ================================
# 📦 КОНСТАНТИ
# ================================
DEFAULT_HEADERS: Dict[str, str] = {										# 📨 Базові HTTP-заголовки
    "User-Agent": "netimage/0.1 (+https://example.org/netimage)",
    "Accept": "image/png,image/jpeg,image/webp,image/gif,image/*;q=0.8,*/*;q=0.5",
}


# ================================
# 📥 ЗАВАНТАЖУВАЧ
# ================================
class RemoteFetcher(IRemoteFetcher):
    """📥 Завантажує байти за URL з ретраями та таймаутом."""

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        *,
        default_headers: Optional[Mapping[str, str]] = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        self._client = client											# 🌐 Зовнішній клієнт (або None → тимчасовий)
        base = DEFAULT_HEADERS if default_headers is None else default_headers
        self.default_headers: Dict[str, str] = dict(base)				# 📨 Заголовки за замовчуванням
        self._sleep = sleep												# 😴 Пауза між спробами

    async def fetch(
        self,
        url: str,
        headers: Optional[Mapping[str, str]],
        retry_limit: int,
        retry_delay: float,
        factor: float,
        timeout: float,
    ) -> Optional[bytes]:
        """📦 Байти відповіді 200 або None після вичерпання спроб."""
        retry_limit = max(0, int(retry_limit))							# 🧱 Підлога на нулі
        merged = self._merge_headers(headers)
        logger.debug(
            "📥 fetch start: %s (retry_limit=%d, delay=%.3fs, factor=%.2f, timeout=%.1fs)",
            url, retry_limit, retry_delay, factor, timeout,
        )

        started = time.perf_counter()
        if self._client is not None:
            response = await self._fetch_with(self._client, url, merged, retry_limit, retry_delay, factor, timeout)
        else:
            async with httpx.AsyncClient(follow_redirects=True) as client:	# 🌐 Короткоживучий клієнт
                response = await self._fetch_with(client, url, merged, retry_limit, retry_delay, factor, timeout)
        FETCH_LATENCY.observe(time.perf_counter() - started)

        if response is None:
            logger.info("❌ fetch failed: %s", url)
            return None
        body = response.content
        logger.info("✅ fetch ok: %s (bytes=%d)", url, len(body))
        return body

    async def _fetch_with(
        self,
        client: httpx.AsyncClient,
        url: str,
        headers: httpx.Headers,
        retry_limit: int,
        retry_delay: float,
        factor: float,
        timeout: float,
    ) -> Optional[httpx.Response]:
        async def attempt() -> httpx.Response:
            return await asyncio.wait_for(
                client.get(url, headers=headers, timeout=httpx.Timeout(timeout)),
                timeout,
            )

        return await retry(
            attempt,
            retry_limit,
            retry_delay,
            factor,
            sleep=self._sleep,
            label=url,
        )

    def _merge_headers(self, headers: Optional[Mapping[str, str]]) -> httpx.Headers:
        """📨 Заголовки запиту перекривають дефолтні (без урахування регістру)."""
        merged = httpx.Headers(self.default_headers)
        if headers:
            merged.update(dict(headers))
        return merged


__all__ = ["DEFAULT_HEADERS", "RemoteFetcher"]
