"""
Redis-specific details: key layout, field-level existence and the
partial-record hazard of post.
"""

import asyncio

from repository.redis_code_repository import RedisCodeRepository
from tests.helpers import fake_redis, run


def test_key_layout_and_prefix():
    async def scenario():
        r = fake_redis()
        repo = RedisCodeRepository(r, key_prefix="fn:")
        await repo.put("backstage", "hello", "function main() {}", "h1")
        return (
            await r.hgetall("fn:code:backstage/hello"),
            await r.zrange("fn:namespaces", 0, -1, withscores=True),
        )

    fields, members = run(scenario())
    assert fields == {b"code": b"function main() {}", b"hash": b"h1"}
    assert members == [(b"backstage:hello", 0.0)]


def test_record_without_hash_field_is_missing():
    async def scenario():
        r = fake_redis()
        repo = RedisCodeRepository(r, key_prefix="")
        await r.hset("code:ns/orphan", "code", "body")
        return await repo.get("ns", "orphan"), await repo.get_hash("ns", "orphan")

    assert run(scenario()) == (None, None)


def test_post_on_partial_record_leaves_it_unindexed():
    async def scenario():
        r = fake_redis()
        repo = RedisCodeRepository(r, key_prefix="")
        await r.hset("code:ns/half", "code", "old")
        created = await repo.post("ns", "half", "new", "hnew")
        return created, await repo.get("ns", "half"), await r.zcard("namespaces")

    created, record, members = run(scenario())
    assert created is False
    # code kept its old value, hash got filled in, index never learns about it
    assert (record.code, record.hash) == ("old", "hnew")
    assert members == 0


def test_delete_prunes_index_before_record():
    async def scenario():
        r = fake_redis()
        repo = RedisCodeRepository(r, key_prefix="")
        await repo.put("ns", "fn", "code", "h")
        await repo.delete("ns", "fn")
        return await r.exists("code:ns/fn"), await r.zcard("namespaces")

    assert run(scenario()) == (0, 0)


def test_concurrent_posts_create_once():
    async def scenario():
        r = fake_redis()
        repo_a = RedisCodeRepository(r, key_prefix="")
        repo_b = RedisCodeRepository(r, key_prefix="")
        results = await asyncio.gather(
            repo_a.post("ns", "race", "A", "ha"),
            repo_b.post("ns", "race", "B", "hb"),
        )
        return results, await repo_a.get("ns", "race"), await r.zcard("namespaces")

    results, record, members = run(scenario())
    assert sorted(results) == [False, True]
    assert members == 1
    winner = ("A", "ha") if results[0] else ("B", "hb")
    assert (record.code, record.hash) == winner
