"""Tests for the follow-up check-in banner."""

from datetime import timedelta
from unittest.mock import AsyncMock

import pytest

from app.safety.follow_up import FOLLOW_UP_DISMISS, FOLLOW_UP_MESSAGE, FollowUpScheduler
from app.safety.intervention_store import InterventionStore
from app.safety.models import InterventionRecord
from app.safety.rendering import CollectingRenderer


class TestFollowUpScheduler:
    """Test cooldown handling."""

    @pytest.fixture
    def store(self, no_redis):
        return InterventionStore(ttl=60)

    @pytest.fixture
    def renderer(self):
        return CollectingRenderer()

    @pytest.fixture
    def scheduler(self, store, renderer, clock):
        return FollowUpScheduler(
            store=store,
            renderer=renderer,
            cooldown=timedelta(minutes=10),
            clock=clock,
        )

    async def _record(self, store, clock, shown=True):
        await store.save(
            "sess-1",
            InterventionRecord(timestamp=clock.now, category="severe", action="immediate", shown=shown),
        )

    @pytest.mark.asyncio
    async def test_no_record(self, scheduler, renderer):
        assert await scheduler.check_follow_up("sess-1") is None
        assert renderer.banners == []

    @pytest.mark.asyncio
    async def test_within_cooldown(self, scheduler, store, renderer, clock):
        await self._record(store, clock)
        clock.advance(minutes=9, seconds=59)

        assert await scheduler.check_follow_up("sess-1") is None
        assert renderer.banners == []

    @pytest.mark.asyncio
    async def test_exactly_at_cooldown(self, scheduler, store, clock):
        """The cooldown must be exceeded, not just reached."""
        await self._record(store, clock)
        clock.advance(minutes=10)

        assert await scheduler.check_follow_up("sess-1") is None

    @pytest.mark.asyncio
    async def test_after_cooldown(self, scheduler, store, renderer, clock):
        await self._record(store, clock)
        clock.advance(minutes=11)

        banner = await scheduler.check_follow_up("sess-1")

        assert banner is not None
        assert banner.message == FOLLOW_UP_MESSAGE
        assert banner.dismiss_label == FOLLOW_UP_DISMISS
        assert banner.placement == "top"
        assert renderer.banners == [banner]

    @pytest.mark.asyncio
    async def test_banner_repeats_on_each_check(self, scheduler, store, renderer, clock):
        """The record is not updated, so later checks show it again."""
        await self._record(store, clock)
        clock.advance(minutes=15)

        await scheduler.check_follow_up("sess-1")
        clock.advance(minutes=1)
        await scheduler.check_follow_up("sess-1")

        assert len(renderer.banners) == 2
        record = await store.load("sess-1")
        assert record.category == "severe"

    @pytest.mark.asyncio
    async def test_not_shown_record(self, scheduler, store, clock):
        await self._record(store, clock, shown=False)
        clock.advance(hours=1)

        assert await scheduler.check_follow_up("sess-1") is None

    @pytest.mark.asyncio
    async def test_corrupt_record(self, scheduler, store, clock):
        """Unreadable records behave like no record."""
        store._in_memory_fallback["sess-1"] = "{broken"
        clock.advance(hours=1)

        assert await scheduler.check_follow_up("sess-1") is None

    @pytest.mark.asyncio
    async def test_read_only(self, renderer, clock):
        """The scheduler never writes to the store."""
        store = AsyncMock()
        store.load = AsyncMock(return_value=InterventionRecord(
            timestamp=clock.now, category="moderate", action="support",
        ))
        scheduler = FollowUpScheduler(store=store, renderer=renderer, clock=clock)
        clock.advance(minutes=30)

        assert await scheduler.check_follow_up("sess-1") is not None
        store.save.assert_not_called()
        store.clear.assert_not_called()
