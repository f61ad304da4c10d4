"""
Module: bot/scheduler/manager.py

Defines QuoteScheduler: wakes once per minute boundary, matches every stored
rule against the local wall-clock time and weekday, and starts a DispatchTask
for each match. Delivery runs concurrently and never blocks the tick.
"""
import asyncio
from datetime import datetime, timedelta
from scheduler.task import DispatchTask
from utils import log_message, weekday_number


class QuoteScheduler:
    """
    Minute-granularity tick driver.

    Responsibilities:
      - Sleep until the next minute boundary and evaluate all rules.
      - Fire each match at most once per minute.
      - Track in-flight deliveries so they can be awaited or cancelled on stop.

    Attributes:
      store: ScheduleStore read through snapshot() on each tick.
      quotes: QuoteStore used to render the phrase for each match.
      notifier: Callable notify(user_id, text), sync or async.
      clock: Zero-argument callable returning the current local datetime.
      tasks (set): In-flight delivery asyncio.Task objects.
    """
    def __init__(self, store, quotes, notifier, clock=None):
        self.store = store
        self.quotes = quotes
        self.notifier = notifier
        self.clock = clock or datetime.now
        self.tasks = set()
        self._loop_task = None
        self._last_tick = None

    @property
    def running(self):
        return self._loop_task is not None and not self._loop_task.done()

    def start(self):
        """
        Start the tick loop on the running event loop. No-op if already running.
        """
        if self.running:
            return
        self._loop_task = asyncio.get_running_loop().create_task(self._run())
        log_message("Scheduler started", "info")

    async def stop(self):
        """
        Cancel the tick loop and any deliveries still in flight.
        """
        loop_task, self._loop_task = self._loop_task, None
        if loop_task:
            loop_task.cancel()
            try:
                await loop_task
            except asyncio.CancelledError:
                pass
            log_message("Scheduler stopped", "info")
        pending = list(self.tasks)
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
        self.tasks.clear()

    async def drain(self):
        """
        Wait for every delivery started so far to finish.
        """
        while self.tasks:
            await asyncio.gather(*list(self.tasks), return_exceptions=True)

    def evaluate(self, now):
        """
        Return [(user_id, rule), ...] for every rule that fires at `now`.
        """
        current_time = now.strftime("%H:%M")
        current_day = weekday_number(now)
        return [
            (user_id, rule)
            for user_id, rules in self.store.snapshot()
            for rule in rules
            if rule.matches(current_time, current_day)
        ]

    async def tick(self, now=None):
        """
        Evaluate one minute and start a delivery for each match.

        A second tick within the same minute is skipped. Returns the number of
        deliveries started.
        """
        now = now or self.clock()
        minute = now.replace(second=0, microsecond=0)
        if self._last_tick == minute:
            log_message(f"Tick for {minute.strftime('%H:%M')} already ran, skipping", "warning")
            return 0
        self._last_tick = minute

        matches = self.evaluate(now)
        log_message(f"Tick {now.strftime('%a %H:%M')}: {len(matches)} matching rules", "debug")
        for user_id, rule in matches:
            dispatch = DispatchTask(user_id, rule, self.quotes.phrase(), self.notifier)
            task = asyncio.get_running_loop().create_task(dispatch.run())
            self.tasks.add(task)
            task.add_done_callback(self.tasks.discard)
        return len(matches)

    async def _run(self):
        while True:
            target = self.clock().replace(second=0, microsecond=0) + timedelta(minutes=1)
            await self._wait_until(target)
            try:
                await self.tick(max(self.clock(), target))
            except Exception as e:
                log_message(f"Error during scheduler tick: {e}", "error")

    async def _wait_until(self, target_time):
        """
        Sleep until the specified local datetime.
        """
        delay = (target_time - self.clock()).total_seconds()
        if delay > 0:
            await asyncio.sleep(delay)
