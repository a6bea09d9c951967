from __future__ import annotations

import pytest

from modboard.core.exceptions import CacheRefreshError
from modboard.services.staff_roles import StaffRoleCache


class FakeClock:
    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeRoleSource:
    def __init__(self, *role_sets) -> None:
        self.role_sets = list(role_sets)
        self.calls = 0
        self.fail = False

    async def fetch(self):
        self.calls += 1
        if self.fail:
            raise RuntimeError("database unreachable")
        index = min(self.calls, len(self.role_sets)) - 1
        return self.role_sets[index]


@pytest.mark.asyncio
async def test_fresh_snapshot_is_served_without_fetching():
    clock = FakeClock()
    source = FakeRoleSource({501, 503})
    cache = StaffRoleCache(ttl_seconds=300, clock=clock)

    first = await cache.get(source.fetch)
    clock.advance(299)
    second = await cache.get(source.fetch)

    assert first == frozenset({501, 503})
    assert second is first
    assert source.calls == 1


@pytest.mark.asyncio
async def test_expired_snapshot_is_replaced():
    clock = FakeClock()
    source = FakeRoleSource({501}, {501, 777})
    cache = StaffRoleCache(ttl_seconds=300, clock=clock)

    await cache.get(source.fetch)
    clock.advance(300)
    refreshed = await cache.get(source.fetch)

    assert refreshed == frozenset({501, 777})
    assert source.calls == 2
    assert cache.last_refreshed_at == clock.now


@pytest.mark.asyncio
async def test_empty_role_set_is_cached_like_any_other():
    clock = FakeClock()
    source = FakeRoleSource(set())
    cache = StaffRoleCache(ttl_seconds=300, clock=clock)

    assert await cache.get(source.fetch) == frozenset()
    assert await cache.get(source.fetch) == frozenset()
    assert source.calls == 1


@pytest.mark.asyncio
async def test_refresh_failure_serves_stale_snapshot():
    clock = FakeClock()
    source = FakeRoleSource({501})
    cache = StaffRoleCache(ttl_seconds=300, clock=clock)
    await cache.get(source.fetch)

    clock.advance(600)
    source.fail = True
    stale = await cache.get(source.fetch)

    assert stale == frozenset({501})
    assert source.calls == 2
    assert not cache.is_fresh()


@pytest.mark.asyncio
async def test_refresh_failure_without_snapshot_propagates():
    source = FakeRoleSource({501})
    source.fail = True
    cache = StaffRoleCache(ttl_seconds=300, clock=FakeClock())

    with pytest.raises(CacheRefreshError) as exc_info:
        await cache.get(source.fetch)

    assert isinstance(exc_info.value.__cause__, RuntimeError)
    assert cache.snapshot is None


@pytest.mark.asyncio
async def test_refresh_failure_propagates_when_stale_serving_disabled():
    clock = FakeClock()
    source = FakeRoleSource({501})
    cache = StaffRoleCache(ttl_seconds=300, clock=clock, serve_stale=False)
    await cache.get(source.fetch)

    clock.advance(301)
    source.fail = True
    with pytest.raises(CacheRefreshError):
        await cache.get(source.fetch)


@pytest.mark.asyncio
async def test_invalidate_forces_refresh():
    source = FakeRoleSource({501}, {502})
    cache = StaffRoleCache(ttl_seconds=300, clock=FakeClock())

    await cache.get(source.fetch)
    cache.invalidate()

    assert await cache.get(source.fetch) == frozenset({502})
    assert source.calls == 2
