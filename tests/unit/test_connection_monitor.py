import asyncio

from redis.exceptions import ConnectionError as RedisConnectionError

from core.connection import ConnectionMonitor
from tests.helpers import fake_redis, run


class FlakyClient:
    def __init__(self, up: bool = False):
        self.up = up
        self.pings = 0

    async def ping(self):
        self.pings += 1
        if not self.up:
            raise RedisConnectionError("Connection refused")
        return True


def test_ready_resolves_on_first_ping():
    async def scenario():
        monitor = ConnectionMonitor(fake_redis(), interval=0.01)
        monitor.start()
        await monitor.wait_ready(timeout=1)
        healthy = monitor.healthy
        await monitor.stop()
        return healthy, monitor.ready.result()

    assert run(scenario()) == (True, True)


def test_outage_then_recovery(caplog):
    async def scenario():
        client = FlakyClient(up=False)
        monitor = ConnectionMonitor(client, interval=0.01)
        down_first = await monitor.check()
        down_again = await monitor.check()
        was_ready = monitor.ready.done()
        client.up = True
        recovered = await monitor.check()
        return down_first, down_again, was_ready, recovered, monitor

    down_first, down_again, was_ready, recovered, monitor = run(scenario())
    assert (down_first, down_again, was_ready, recovered) == (False, False, False, True)
    assert monitor.healthy
    assert monitor.last_error is None
    lost = [r for r in caplog.records if "has been lost" in r.getMessage()]
    assert len(lost) == 1


def test_wait_ready_times_out_while_down():
    async def scenario():
        monitor = ConnectionMonitor(FlakyClient(up=False), interval=0.01)
        monitor.start()
        try:
            await monitor.wait_ready(timeout=0.05)
        except asyncio.TimeoutError:
            return "timeout"
        finally:
            await monitor.stop()
        return "ready"

    assert run(scenario()) == "timeout"
