"""
Module: bot/scheduler/task.py

Defines DispatchTask: delivers one rendered phrase to one user through the
notifier, isolating and logging any delivery failure.
"""
import asyncio
import inspect
from errors import NotifyError
from utils import log_message


class DispatchTask:
    """
    A single fire-and-forget delivery started by a scheduler tick.

    Attributes:
      user_id: Recipient identifier as stored in the schedule.
      rule: The ScheduleRule that matched.
      phrase: Rendered text to send.
      notifier: Callable notify(user_id, text), sync or async.
    """
    def __init__(self, user_id, rule, phrase, notifier):
        self.user_id = user_id
        self.rule = rule
        self.phrase = phrase
        self.notifier = notifier

    async def run(self):
        """
        Call the notifier once. Failures are logged and swallowed so they never
        reach the tick loop; cancellation is logged and re-raised.

        Returns True if the notifier completed without raising.
        """
        try:
            result = self.notifier(self.user_id, self.phrase)
            if inspect.isawaitable(result):
                await result
        except asyncio.CancelledError:
            log_message(f"Cancelled delivery to user {self.user_id}", "warning")
            raise
        except Exception as e:
            log_message(str(NotifyError(self.user_id, e)), "error")
            return False
        log_message(
            f"Dispatched phrase to user {self.user_id} ({self.rule.describe()})",
            "info"
        )
        return True
