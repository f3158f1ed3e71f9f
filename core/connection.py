import asyncio
import logging
from typing import Optional
from redis.asyncio import Redis
from redis.exceptions import RedisError

logger = logging.getLogger(__name__)


class ConnectionMonitor:
    """
    Flow:
    - `ready` resolves on the first successful PING.
    - A background task keeps pinging every `interval` seconds and flips
      `healthy`; an outage is logged once, recovery once.
    - Nothing here fails in-flight calls; callers see the client's own errors.
    """

    def __init__(self, client: Redis, interval: float = 30.0) -> None:
        self._client = client
        self._interval = interval
        self._task: Optional[asyncio.Task] = None
        self._ready: Optional[asyncio.Future] = None
        self.healthy = False
        self.last_error: Optional[BaseException] = None

    @property
    def ready(self) -> asyncio.Future:
        if self._ready is None:
            self._ready = asyncio.get_running_loop().create_future()
        return self._ready

    def start(self) -> None:
        if self._task is None:
            self._task = asyncio.create_task(self._run(), name="redis-monitor")

    async def wait_ready(self, timeout: Optional[float] = None) -> None:
        await asyncio.wait_for(asyncio.shield(self.ready), timeout)

    async def check(self) -> bool:
        try:
            await self._client.ping()
        except (RedisError, OSError) as e:
            if self.healthy or self.last_error is None:
                logger.error(
                    "The connection with Redis has been lost. "
                    "Performance issues may happen. Error: %s",
                    e,
                )
            self.healthy = False
            self.last_error = e
            return False

        if not self.healthy:
            if self.ready.done():
                logger.info("redis.connection.recovered")
            else:
                logger.info("Redis is ready to receive calls.")
                self.ready.set_result(True)
        self.healthy = True
        self.last_error = None
        return True

    async def _run(self) -> None:
        while True:
            await self.check()
            await asyncio.sleep(self._interval)

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
