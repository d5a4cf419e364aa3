# netimage/domain/image_fetch/interfaces.py
"""
🧩 Контракти пайплайна завантаження зображень.
"""
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Mapping, Optional

from .entities import CacheLookup, FetchRequest

# ================================
# 🏛️ ИНТЕРФЕЙСЫ
# ================================

class IRemoteFetcher(ABC):
    """Контракт мережевого завантаження з ретраями."""
    @abstractmethod
    async def fetch(
        self,
        url: str,
        headers: Optional[Mapping[str, str]],
        retry_limit: int,
        retry_delay: float,
        factor: float,
        timeout: float,
    ) -> Optional[bytes]:
        """Повертає тіло відповіді 200 або None, якщо всі спроби невдалі."""
        pass

class IBytesCache(ABC):
    """Контракт кешу сирих байтів за URL."""
    @abstractmethod
    def cached_path(self, request: FetchRequest) -> Optional[Path]:
        """Шлях до файлу кешу або None, якщо кеш вимкнено для запиту."""
        pass

    @abstractmethod
    async def read_or_fetch(self, request: FetchRequest) -> Optional[bytes]:
        """Читає з кешу або завантажує й записує."""
        pass

    @abstractmethod
    async def lookup(self, request: FetchRequest) -> CacheLookup:
        """Як `read_or_fetch`, але також повідомляє джерело байтів (cache | network)."""
        pass

class IImageLoader(ABC):
    """Контракт точки входу: ідентичність запиту та виконання."""
    @abstractmethod
    def resolve(self, request: FetchRequest) -> FetchRequest:
        """Детермінована ідентичність для дедуплікації на боці викликача."""
        pass

    @abstractmethod
    async def load(self, request: FetchRequest) -> bytes:
        """Байти зображення, fallback або термінальна помилка."""
        pass
