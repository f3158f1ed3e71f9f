"""
Application startup/shutdown: the monitor task and the shared client never
outlive the lifespan, whether startup succeeds or fails.
"""

import asyncio

import pytest

import config.cache as cache_module
import main
from core.artifact_cache import CompiledArtifactCache
from core.connection import ConnectionMonitor
from tests.helpers import fake_redis, run


def _live_monitor_tasks():
    return [
        t
        for t in asyncio.all_tasks()
        if t.get_name() == "redis-monitor" and not t.done()
    ]


@pytest.fixture
def shared_client(monkeypatch):
    # get_redis() returns the module client as-is once it is set
    monkeypatch.setattr(cache_module, "_client", fake_redis())
    yield
    for attr in ("redis_monitor", "artifact_cache"):
        if hasattr(main.app.state, attr):
            delattr(main.app.state, attr)


def test_failed_startup_stops_monitor_and_closes_client(
    shared_client, pristine_root, monkeypatch
):
    async def never_ready(self, timeout=None):
        raise TimeoutError("redis not ready")

    monkeypatch.setattr(ConnectionMonitor, "wait_ready", never_ready)

    async def scenario():
        with pytest.raises(TimeoutError):
            async with main.lifespan(main.app):
                pass
        await asyncio.sleep(0)
        return len(_live_monitor_tasks()), cache_module._client

    assert run(scenario()) == (0, None)


def test_startup_builds_cache_and_shutdown_cleans_up(shared_client, pristine_root):
    async def scenario():
        async with main.lifespan(main.app):
            running = len(_live_monitor_tasks())
            monitor = main.app.state.redis_monitor
            cache = main.app.state.artifact_cache
        await asyncio.sleep(0)
        return running, monitor.healthy, cache, len(_live_monitor_tasks())

    running, healthy, cache, after = run(scenario())
    assert running == 1
    assert healthy is True
    assert isinstance(cache, CompiledArtifactCache)
    assert after == 0
    assert cache_module._client is None
