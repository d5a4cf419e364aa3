# 🔑 netimage/domain/image_fetch/cache_key.py
"""
🔑 Відбиток URL для імені файлу в дисковому кеші.

🔹 Залежить лише від рядка URL (не від заголовків чи масштабу).
🔹 Стабільний між процесами: вбудований `hash()` не підходить через рандомізацію.
🔹 Не гарантує унікальність: колізія двох URL можлива, ризик прийнято.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import hashlib														# 🔐 BLAKE2b як швидкий 64-бітний відбиток

CACHE_KEY_BYTES = 8													# 📏 64 біти → 16 hex-символів


def cache_key_for(url: str) -> str:
    """🔑 Повертає filesystem-safe токен (16 hex) для `url`."""
    digest = hashlib.blake2b(url.encode("utf-8"), digest_size=CACHE_KEY_BYTES)
    return digest.hexdigest()


__all__ = ["CACHE_KEY_BYTES", "cache_key_for"]
