# 🔁 netimage/infrastructure/network/backoff_retrier.py
"""
🔁 Ретраї з експоненційним backoff для будь-якої асинхронної операції.

🔹 Не більше `retry_limit + 1` спроб; `retry_limit <= 0` → рівно одна.
🔹 Успіх визначає `is_success` (за замовчуванням HTTP 200).
🔹 Невдалий статус, таймаут чи будь-який `Exception`: це невдала спроба:
   логуємо, рахуємо в метриках і пробуємо знову. `CancelledError` не ковтаємо.
🔹 Після невдалої спроби `t` чекаємо `base_delay * factor ** (t - 1)`;
   після останньої не чекаємо.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import asyncio															# ⏳ Паузи між спробами
import logging															# 🧾 Логування невдалих спроб
from dataclasses import dataclass										# 🧱 Політика backoff
from typing import Any, Awaitable, Callable, Optional, TypeVar			# 🧰 Допоміжні типи

# 🌐 Зовнішні бібліотеки
import httpx															# 🌐 Класифікація таймаутів

# 🧩 Внутрішні модулі проєкту
from netimage.shared.metrics import ATTEMPT_FAILURES					# 📉 Лічильник невдалих спроб
from netimage.shared.utils.logger import LOG_NAME						# 🏷️ Ім'я базового логера

logger = logging.getLogger(f"{LOG_NAME}.retrier")

T = TypeVar("T")

Operation = Callable[[], Awaitable[T]]									# 🔄 Одна спроба
SleepFn = Callable[[float], Awaitable[Any]]								# 😴 Інʼєкція паузи (для тестів)

HTTP_OK = 200


# ================================
# 🧮 ПОЛІТИКА BACKOFF
# ================================
@dataclass(frozen=True)
class BackoffPolicy:
    """🧮 Параметри ретраїв для одного завантаження."""

    retry_limit: int													# 🔁 Повтори після першої спроби
    base_delay: float													# 🐢 Затримка після першої невдачі (с)
    factor: float														# 📈 Множник експоненти

    @property
    def attempts(self) -> int:
        """🔢 Загальна кількість спроб (мінімум одна)."""
        return max(0, int(self.retry_limit)) + 1

    def delay_after(self, attempt: int) -> float:
        """⏳ Пауза після невдалої спроби `attempt` (нумерація з 1)."""
        return self.base_delay * self.factor ** (attempt - 1)


def is_http_ok(response: Any) -> bool:
    """✅ Успіх = відповідь зі статусом 200."""
    return getattr(response, "status_code", None) == HTTP_OK


# ================================
# 🔁 ОСНОВНИЙ ЦИКЛ
# ================================
async def retry(
    operation: Operation[T],
    retry_limit: int,
    base_delay: float,
    factor: float,
    *,
    is_success: Callable[[T], bool] = is_http_ok,
    sleep: SleepFn = asyncio.sleep,
    label: str = "",
) -> Optional[T]:
    """
    Виконує `operation` до першого успіху або до вичерпання спроб.

    Returns:
        Перша успішна відповідь або None.
    """
    policy = BackoffPolicy(retry_limit=retry_limit, base_delay=base_delay, factor=factor)
    attempts = policy.attempts

    for attempt in range(1, attempts + 1):
        reason: str
        try:
            response = await operation()
        except (asyncio.TimeoutError, httpx.TimeoutException):
            reason = "timeout"
            logger.warning("⏳ Timeout %s [attempt %d/%d]", label, attempt, attempts)
        except Exception as exc:										# noqa: BLE001
            reason = "transport"
            logger.warning(
                "⚠️ Load error %s [attempt %d/%d]: %s",
                label, attempt, attempts, exc,
                extra={"error_type": type(exc).__name__},
            )
        else:
            if response is not None and is_success(response):
                if attempt > 1:
                    logger.debug("✅ %s succeeded on attempt %d/%d", label, attempt, attempts)
                return response
            reason = "http_status"
            status = getattr(response, "status_code", None)
            logger.warning(
                "🌐 Load error, response status code: %s %s [attempt %d/%d]",
                status, label, attempt, attempts,
                extra={"http_status": status},
            )

        ATTEMPT_FAILURES.labels(reason=reason).inc()

        if attempt < attempts:
            delay = policy.delay_after(attempt)
            logger.debug("😴 Наступна спроба %d через %.3f с.", attempt + 1, delay)
            await sleep(delay)

    if policy.retry_limit > 0:
        logger.warning("❌ Retry failed! %s: %d attempts exhausted", label, attempts)
    return None


__all__ = [
    "BackoffPolicy",
    "HTTP_OK",
    "is_http_ok",
    "retry",
]
