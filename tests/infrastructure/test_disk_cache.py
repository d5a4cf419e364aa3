"""
🧪 test_disk_cache.py: дисковий кеш байтів зображень

Перевіряє:
- Запис/читання точних байтів
- Теплий кеш без мережевих викликів
- Холодний кеш + невдала мережа → файл не створюється
- Single-flight для паралельних запитів одного URL
- Відсутність тимчасових .part файлів після запису
- CacheIOError, якщо корінь кешу недоступний для запису
"""

import asyncio
import stat

import pytest

from conftest import FakeFetcher
from netimage.domain.image_fetch import SOURCE_CACHE, SOURCE_NETWORK, CacheLookup, FetchRequest, cache_key_for
from netimage.errors import CacheIOError
from netimage.infrastructure.cache import CACHE_FILE_MODE, CACHE_SUBDIR, DiskCache

URL = "https://img.example.com/dog.jpg"


def _request(**kwargs):
    return FetchRequest(URL, use_disk_cache=True, **kwargs)


def test_layout_and_paths(tmp_path, fake_fetcher):
    cache = DiskCache(tmp_path, fake_fetcher)
    assert cache.cache_dir == tmp_path / CACHE_SUBDIR
    assert cache.path_for(URL) == tmp_path / CACHE_SUBDIR / cache_key_for(URL)
    assert cache.cached_path(_request()) == cache.path_for(URL)
    assert cache.cached_path(FetchRequest(URL)) is None
    assert cache.contains(URL) is False


@pytest.mark.asyncio
async def test_round_trip_returns_exact_bytes(tmp_path, fake_fetcher):
    payload = bytes(range(256)) * 4
    cache = DiskCache(tmp_path, fake_fetcher)

    path = await cache.write(URL, payload)
    assert path.read_bytes() == payload
    assert await cache.read_or_fetch(_request()) == payload
    assert fake_fetcher.calls == []


@pytest.mark.asyncio
async def test_cold_cache_fetches_and_stores(tmp_path):
    fetcher = FakeFetcher(b"fresh")
    cache = DiskCache(tmp_path, fetcher)

    assert await cache.read_or_fetch(_request(retry_limit=2, retry_duration=0.1)) == b"fresh"
    assert cache.path_for(URL).read_bytes() == b"fresh"
    assert fetcher.calls[0]["retry_limit"] == 2
    assert fetcher.calls[0]["retry_delay"] == 0.1

    # Другий запит: з диска, без мережі
    assert await cache.read_or_fetch(_request()) == b"fresh"
    assert len(fetcher.calls) == 1


@pytest.mark.asyncio
async def test_warm_cache_makes_no_network_calls(tmp_path):
    fetcher = FakeFetcher(b"network")
    cache = DiskCache(tmp_path, fetcher)
    cache.cache_dir.mkdir(parents=True)
    cache.path_for(URL).write_bytes(b"on-disk")

    assert await cache.read_or_fetch(_request()) == b"on-disk"
    assert fetcher.calls == []


@pytest.mark.asyncio
async def test_failed_fetch_writes_nothing(tmp_path):
    fetcher = FakeFetcher(None)
    cache = DiskCache(tmp_path, fetcher)

    assert await cache.read_or_fetch(_request()) is None
    assert not cache.contains(URL)
    assert list(cache.cache_dir.iterdir()) == []


@pytest.mark.asyncio
async def test_concurrent_cold_loads_share_one_fetch(tmp_path):
    gate = asyncio.Event()
    fetcher = FakeFetcher(b"shared", gate=gate)
    cache = DiskCache(tmp_path, fetcher)

    tasks = [asyncio.create_task(cache.read_or_fetch(_request())) for _ in range(3)]
    await asyncio.sleep(0)
    gate.set()
    results = await asyncio.gather(*tasks)

    assert results == [b"shared"] * 3
    assert len(fetcher.calls) == 1
    assert cache._inflight == {}


@pytest.mark.asyncio
async def test_different_urls_do_not_block_each_other(tmp_path):
    fetcher = FakeFetcher(b"x")
    cache = DiskCache(tmp_path, fetcher)

    await asyncio.gather(
        cache.read_or_fetch(FetchRequest("https://a.example/1.png", use_disk_cache=True)),
        cache.read_or_fetch(FetchRequest("https://a.example/2.png", use_disk_cache=True)),
    )
    assert len(fetcher.calls) == 2


@pytest.mark.asyncio
async def test_atomic_write_leaves_no_temp_files(tmp_path, fake_fetcher):
    cache = DiskCache(tmp_path, fake_fetcher)
    await cache.write(URL, b"v1")
    await cache.write(URL, b"v2")

    names = [p.name for p in cache.cache_dir.iterdir()]
    assert names == [cache_key_for(URL)]
    assert not any(name.endswith(".part") for name in names)
    assert cache.path_for(URL).read_bytes() == b"v2"


@pytest.mark.asyncio
async def test_unwritable_root_raises_cache_io_error(tmp_path, fake_fetcher):
    blocker = tmp_path / "not-a-dir"
    blocker.write_bytes(b"")
    cache = DiskCache(blocker, fake_fetcher)

    with pytest.raises(CacheIOError) as exc_info:
        await cache.read_or_fetch(_request())

    assert exc_info.value.url == URL
    assert exc_info.value.path == cache.cache_dir
    assert fake_fetcher.calls == []


@pytest.mark.asyncio
async def test_custom_subdir(tmp_path, fake_fetcher):
    cache = DiskCache(tmp_path, fake_fetcher, subdir="thumbs")
    await cache.read_or_fetch(_request())
    assert (tmp_path / "thumbs" / cache_key_for(URL)).read_bytes() == b"img"


@pytest.mark.asyncio
async def test_lookup_reports_source(tmp_path):
    fetcher = FakeFetcher(b"fresh")
    cache = DiskCache(tmp_path, fetcher)

    assert await cache.lookup(_request()) == CacheLookup(b"fresh", SOURCE_NETWORK)
    assert await cache.lookup(_request()) == CacheLookup(b"fresh", SOURCE_CACHE)

    fetcher.result = None
    other = FetchRequest("https://img.example.com/missing.jpg", use_disk_cache=True)
    assert await cache.lookup(other) == CacheLookup(None, SOURCE_NETWORK)


@pytest.mark.asyncio
async def test_written_files_get_shared_mode(tmp_path, fake_fetcher):
    cache = DiskCache(tmp_path, fake_fetcher)
    path = await cache.write(URL, b"data")
    assert stat.S_IMODE(path.stat().st_mode) == CACHE_FILE_MODE == 0o644


@pytest.mark.asyncio
async def test_custom_file_mode(tmp_path, fake_fetcher):
    cache = DiskCache(tmp_path, fake_fetcher, file_mode=0o600)
    await cache.read_or_fetch(_request())
    assert stat.S_IMODE(cache.path_for(URL).stat().st_mode) == 0o600
