"""
Package: bot/scheduler

Provides ScheduleRule, UserSchedule, DispatchTask, and QuoteScheduler classes.
"""
from .rule import ScheduleRule, UserSchedule
from .task import DispatchTask
from .manager import QuoteScheduler
