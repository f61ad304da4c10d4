"""Tests for the minute tick scheduler and dispatch tasks."""

import asyncio
import time
from datetime import datetime, timedelta

import pytest

from conftest import RecordingNotifier
from scheduler import DispatchTask, QuoteScheduler, ScheduleRule

# 2026-10-19 is a Monday, 2026-10-20 a Tuesday.
MONDAY_0900 = datetime(2026, 10, 19, 9, 0, 12)
TUESDAY_0900 = datetime(2026, 10, 20, 9, 0)


@pytest.fixture
def scheduler(schedule_store, quote_store, notifier):
    return QuoteScheduler(schedule_store, quote_store, notifier, clock=lambda: MONDAY_0900)


class TestEvaluate:
    def test_any_day_matches_at_time(self, scheduler, schedule_store):
        schedule_store.add_rule("u1", None, "09:00")
        assert scheduler.evaluate(MONDAY_0900) == [("u1", ScheduleRule(None, "09:00"))]
        assert scheduler.evaluate(TUESDAY_0900) == [("u1", ScheduleRule(None, "09:00"))]

    def test_next_minute_does_not_match(self, scheduler, schedule_store):
        schedule_store.add_rule("u1", None, "09:00")
        assert scheduler.evaluate(datetime(2026, 10, 19, 9, 1)) == []

    def test_weekday_rule_only_on_its_day(self, scheduler, schedule_store):
        schedule_store.add_rule("u1", "ter", "09:00")
        assert scheduler.evaluate(MONDAY_0900) == []
        assert scheduler.evaluate(TUESDAY_0900) == [("u1", ScheduleRule(2, "09:00"))]

    def test_sunday_is_day_zero(self, scheduler, schedule_store):
        schedule_store.add_rule("u1", "dom", "09:00")
        assert len(scheduler.evaluate(datetime(2026, 10, 18, 9, 0))) == 1

    def test_multiple_users_and_rules(self, scheduler, schedule_store):
        schedule_store.add_rule("u1", None, "09:00")
        schedule_store.add_rule("u1", "seg", "09:00")
        schedule_store.add_rule("u2", None, "10:00")
        schedule_store.add_rule("u3", "seg", "09:00")
        matches = scheduler.evaluate(MONDAY_0900)
        assert sorted(user for user, _ in matches) == ["u1", "u1", "u3"]


class TestTick:
    @pytest.mark.asyncio
    async def test_single_match_dispatches_once(self, scheduler, schedule_store, notifier):
        schedule_store.add_rule("u1", None, "09:00")
        assert await scheduler.tick(MONDAY_0900) == 1
        await scheduler.drain()
        assert len(notifier.sent) == 1
        user_id, text = notifier.sent[0]
        assert user_id == "u1"
        assert text.startswith('🎉 "')

    @pytest.mark.asyncio
    async def test_no_match_dispatches_nothing(self, scheduler, schedule_store, notifier):
        schedule_store.add_rule("u1", None, "09:00")
        schedule_store.add_rule("u2", "ter", "09:00")
        assert await scheduler.tick(datetime(2026, 10, 19, 9, 1)) == 0
        await scheduler.drain()
        assert notifier.sent == []

    @pytest.mark.asyncio
    async def test_same_minute_fires_once(self, scheduler, schedule_store, notifier):
        schedule_store.add_rule("u1", None, "09:00")
        await scheduler.tick(datetime(2026, 10, 19, 9, 0, 1))
        assert await scheduler.tick(datetime(2026, 10, 19, 9, 0, 40)) == 0
        await scheduler.drain()
        assert len(notifier.sent) == 1

    @pytest.mark.asyncio
    async def test_uses_clock_by_default(self, scheduler, schedule_store, notifier):
        schedule_store.add_rule("u1", "seg", "09:00")
        assert await scheduler.tick() == 1
        await scheduler.drain()
        assert [user for user, _ in notifier.sent] == ["u1"]

    @pytest.mark.asyncio
    async def test_failure_isolated_per_user(self, schedule_store, quote_store, capsys):
        notifier = RecordingNotifier(fail_for={"u1"})
        scheduler = QuoteScheduler(schedule_store, quote_store, notifier)
        schedule_store.add_rule("u1", None, "09:00")
        schedule_store.add_rule("u2", None, "09:00")

        assert await scheduler.tick(MONDAY_0900) == 2
        await scheduler.drain()

        assert [user for user, _ in notifier.sent] == ["u2"]
        assert "Failed to notify user u1" in capsys.readouterr().out

    @pytest.mark.asyncio
    async def test_empty_quotes_sends_fallback(self, schedule_store, tmp_path, notifier):
        from quotes import NO_QUOTES_MESSAGE, QuoteStore

        quotes = QuoteStore(str(tmp_path / "missing.json"))
        quotes.load()
        scheduler = QuoteScheduler(schedule_store, quotes, notifier)
        schedule_store.add_rule("u1", None, "09:00")
        await scheduler.tick(MONDAY_0900)
        await scheduler.drain()
        assert notifier.sent == [("u1", NO_QUOTES_MESSAGE)]


class TestDispatchTask:
    @pytest.mark.asyncio
    async def test_sync_notifier(self):
        sent = []
        task = DispatchTask("u1", ScheduleRule(None, "09:00"), "hi", lambda u, t: sent.append((u, t)))
        assert await task.run() is True
        assert sent == [("u1", "hi")]

    @pytest.mark.asyncio
    async def test_failure_returns_false(self):
        def boom(user_id, text):
            raise ValueError("nope")

        task = DispatchTask("u1", ScheduleRule(None, "09:00"), "hi", boom)
        assert await task.run() is False


class TestLifecycle:
    @pytest.mark.asyncio
    async def test_loop_fires_at_minute_boundary(self, schedule_store, quote_store, notifier):
        base = datetime(2026, 10, 19, 8, 59, 59, 900000)
        started = time.monotonic()

        def clock():
            return base + timedelta(seconds=time.monotonic() - started)

        scheduler = QuoteScheduler(schedule_store, quote_store, notifier, clock=clock)
        schedule_store.add_rule("u1", None, "09:00")

        scheduler.start()
        scheduler.start()
        assert scheduler.running
        await asyncio.sleep(0.5)
        await scheduler.drain()
        await scheduler.stop()

        assert not scheduler.running
        assert [user for user, _ in notifier.sent] == ["u1"]

    @pytest.mark.asyncio
    async def test_stop_is_idempotent(self, scheduler):
        await scheduler.stop()
        scheduler.start()
        await scheduler.stop()
        await scheduler.stop()
        assert not scheduler.running

    @pytest.mark.asyncio
    async def test_stop_cancels_in_flight_deliveries(self, schedule_store, quote_store):
        delivered = []

        async def slow_notifier(user_id, text):
            await asyncio.sleep(10)
            delivered.append(user_id)

        scheduler = QuoteScheduler(schedule_store, quote_store, slow_notifier)
        schedule_store.add_rule("u1", None, "09:00")
        await scheduler.tick(MONDAY_0900)
        assert len(scheduler.tasks) == 1

        await scheduler.stop()

        assert scheduler.tasks == set()
        assert delivered == []
