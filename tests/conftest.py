# tests/conftest.py
import sys
from pathlib import Path
from typing import Any, List, Mapping, Optional

import pytest

# Додаємо src в sys.path, щоб працював імпорт "netimage.…" без інсталяції
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from netimage.domain.image_fetch.interfaces import IRemoteFetcher  # noqa: E402


class FakeFetcher(IRemoteFetcher):
    """Підставний мережевий шар: віддає заздалегідь задану відповідь і рахує виклики."""

    def __init__(self, result: Optional[bytes] = b"img", *, gate=None):
        self.result = result
        self.calls: List[dict] = []
        self._gate = gate

    async def fetch(
        self,
        url: str,
        headers: Optional[Mapping[str, str]],
        retry_limit: int,
        retry_delay: float,
        factor: float,
        timeout: float,
    ) -> Optional[bytes]:
        self.calls.append(
            {
                "url": url,
                "headers": headers,
                "retry_limit": retry_limit,
                "retry_delay": retry_delay,
                "factor": factor,
                "timeout": timeout,
            }
        )
        if self._gate is not None:
            await self._gate.wait()
        return self.result


class SleepRecorder:
    """Замінник asyncio.sleep: запамʼятовує паузи без реального очікування."""

    def __init__(self):
        self.delays: List[float] = []

    async def __call__(self, delay: float) -> Any:
        self.delays.append(delay)


@pytest.fixture
def fake_fetcher():
    return FakeFetcher()


@pytest.fixture
def sleep_recorder():
    return SleepRecorder()
