# config/cache.py
import logging
from typing import Optional
from redis.asyncio import Redis, from_url
from redis.asyncio.sentinel import Sentinel
from config.settings import Settings, settings

logger = logging.getLogger(__name__)

_client: Optional[Redis] = None


def build_redis(conf: Settings = settings) -> Redis:
    """
    Build (but do not connect) the Redis client described by `conf`.
    Sentinel mode wins when REDIS_SENTINELS is set.
    """
    sentinels = conf.sentinel_hosts()
    if sentinels:
        logger.info(
            "redis.sentinel hosts=%d name=%s", len(sentinels), conf.REDIS_SENTINEL_NAME
        )
        sentinel = Sentinel(
            sentinels,
            socket_connect_timeout=conf.REDIS_CONNECT_TIMEOUT,
            sentinel_kwargs={"password": conf.REDIS_PASSWORD},
        )
        return sentinel.master_for(
            conf.REDIS_SENTINEL_NAME,
            password=conf.REDIS_PASSWORD,
            socket_connect_timeout=conf.REDIS_CONNECT_TIMEOUT,
            decode_responses=False,
        )

    return from_url(
        conf.REDIS_URL,
        encoding="utf-8",
        decode_responses=False,  # repositories get raw bytes
        socket_keepalive=True,
        socket_connect_timeout=conf.REDIS_CONNECT_TIMEOUT,
        health_check_interval=int(conf.REDIS_HEALTH_CHECK_INTERVAL),
    )


async def get_redis() -> Redis:
    global _client
    if _client is None:
        _client = build_redis()
        # Fail fast on startup if Redis is unreachable.
        await _client.ping()
    return _client


async def close_redis() -> None:
    global _client
    if _client is not None:
        await _client.aclose()
        _client = None
