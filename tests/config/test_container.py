"""
🧪 test_container.py: складання залежностей за конфігом
"""

import tempfile
from pathlib import Path
from unittest.mock import patch

import httpx
import pytest

from netimage import FetchRequest, NetworkImageLoader, build_image_loader
from netimage.config import ConfigService
from netimage.config.setup.container import Container, default_headers_from, resolve_cache_root


def _write_yaml(tmp_path, body: str) -> Path:
    path = tmp_path / "config.yaml"
    path.write_text(body, encoding="utf-8")
    return path


@pytest.fixture
def config(monkeypatch):
    for name in ("NETIMAGE_CACHE_DIR", "NETIMAGE_USER_AGENT", "NETIMAGE_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    yield ConfigService().reload()
    ConfigService().reload()


def test_empty_root_dir_falls_back_to_tmp(config):
    assert resolve_cache_root(config) == Path(tempfile.gettempdir())


def test_headers_from_config(config, tmp_path):
    config.reload(_write_yaml(tmp_path, "http:\n  user_agent: ua/2\n"))
    headers = default_headers_from(config)
    assert headers["User-Agent"] == "ua/2"
    assert "Accept" in headers


def test_container_wires_cache_under_configured_root(config, tmp_path):
    root = tmp_path / "cache-root"
    config.reload(_write_yaml(tmp_path, f"cache:\n  root_dir: '{root}'\n  subdir: pics\nlogging:\n  console: false\n"))

    container = Container(config)
    assert container.disk_cache.cache_dir == root / "pics"
    assert isinstance(container.image_loader, NetworkImageLoader)


def test_metrics_exporter_started_only_when_enabled(config, tmp_path):
    config.reload(_write_yaml(tmp_path, "metrics:\n  enabled: true\n  prometheus:\n    port: 9999\nlogging:\n  console: false\n"))
    with patch("netimage.config.setup.container.maybe_start_prometheus", return_value=True) as start:
        Container(config)
    start.assert_called_once_with(9999)

    config.reload(_write_yaml(tmp_path, "metrics:\n  enabled: false\n"))
    with patch("netimage.config.setup.container.maybe_start_prometheus") as start:
        Container(config, configure_logging=False)
    start.assert_not_called()


@pytest.mark.asyncio
async def test_build_image_loader_end_to_end(config, tmp_path):
    config.reload(_write_yaml(tmp_path, f"cache:\n  root_dir: '{tmp_path}'\nhttp:\n  user_agent: e2e/1\nlogging:\n  console: false\n"))
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.headers["User-Agent"])
        return httpx.Response(200, content=b"PNG")

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        loader = build_image_loader(config, client=client)
        req = FetchRequest("https://img.example.com/e2e.png", use_disk_cache=True)
        assert await loader.load(req) == b"PNG"
        assert await loader.load(req) == b"PNG"

    assert seen == ["e2e/1"]
    assert (tmp_path / "imagecache").is_dir()
