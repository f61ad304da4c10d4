"""
Module: bot/store.py

Handles the JSON schedule file: loading user rules at startup, mutating them
under a lock, and atomically rewriting the whole file after every change.
"""
import json
import os
import tempfile
import threading
from errors import LoadError, ValidationError, NotFoundError, NoOpError, PersistenceError
from scheduler.rule import ScheduleRule, UserSchedule
from utils import log_message, parse_day, parse_time


class ScheduleStore:
    """
    Owner of the user -> rules mapping and its backing file.

    Mutations and snapshots hold the same lock, so the scheduler never sees a
    rule list mid-change and file writes happen in mutation order.
    """
    def __init__(self, path):
        """
        Initialize the store. Call load() to read existing schedules.
        """
        self.path = path
        self._schedules = {}
        self._lock = threading.RLock()

    def load(self):
        """
        Parse the schedule file into memory.

        A missing file starts an empty store. Any other failure logs the error,
        leaves the mapping empty and returns the LoadError. Individual malformed
        rules are skipped.
        """
        with self._lock:
            self._schedules = {}
            if not os.path.exists(self.path):
                log_message(f"No schedule file at {self.path}, starting empty", "info")
                return None
            try:
                with open(self.path, "r", encoding="utf-8") as f:
                    data = json.load(f)
                if not isinstance(data, dict):
                    raise ValueError("expected an object keyed by user id")
            except (OSError, ValueError) as e:
                error = LoadError(self.path, e)
                log_message(f"Error loading schedule file: {error}", "error")
                return error

            for user_id, entry in data.items():
                raw_rules = entry.get("schedule") if isinstance(entry, dict) else None
                if not isinstance(raw_rules, list):
                    log_message(f"Skipping malformed schedule for user {user_id}", "warning")
                    continue
                rules = []
                for raw in raw_rules:
                    try:
                        rules.append(ScheduleRule.from_dict(raw))
                    except ValidationError as e:
                        log_message(f"Skipping invalid rule {raw!r} for user {user_id}: {e}", "warning")
                if rules:
                    self._schedules[str(user_id)] = UserSchedule(user_id, rules)

            log_message(
                f"Loaded {sum(len(s) for s in self._schedules.values())} rules "
                f"for {len(self._schedules)} users from {self.path}",
                "info"
            )
            return None

    def add_rule(self, user_id, day_abbrev, time):
        """
        Append a rule for the user and persist.

        Args:
            user_id: Platform user id.
            day_abbrev (str or None): One of dom/seg/ter/qua/qui/sex/sab, or None for every day.
            time (str): Canonical "HH:MM".

        Returns the stored ScheduleRule.

        Raises:
            ValidationError: Unknown day abbreviation or malformed time.
            PersistenceError: The file could not be written (nothing is kept).
        """
        try:
            day = parse_day(day_abbrev)
        except KeyError:
            raise ValidationError(f"Unknown day abbreviation: {day_abbrev!r}") from None
        rule = ScheduleRule(day, time)

        def mutate(schedule):
            schedule.rules.append(rule)

        self._mutate(user_id, mutate)
        log_message(f"Added rule {rule!r} for user {user_id}", "debug")
        return rule

    def list_rules(self, user_id):
        with self._lock:
            schedule = self._schedules.get(str(user_id))
            return list(schedule.rules) if schedule else []

    def remove_rule(self, user_id, index):
        """
        Remove the rule at the 1-based index and persist.

        Later rules shift down by one. Returns the removed rule.

        Raises:
            NotFoundError: index is outside 1..count.
            PersistenceError: The file could not be written (rule is restored).
        """
        removed = []

        def mutate(schedule):
            count = len(schedule.rules)
            if isinstance(index, bool) or not isinstance(index, int) or not 1 <= index <= count:
                raise NotFoundError(user_id, index, count)
            removed.append(schedule.rules.pop(index - 1))

        self._mutate(user_id, mutate)
        log_message(f"Removed rule {index} ({removed[0]!r}) for user {user_id}", "debug")
        return removed[0]

    def remove_all(self, user_id):
        """
        Clear every rule of the user and persist. Returns how many were removed.

        Raises:
            NoOpError: The user has no rules.
            PersistenceError: The file could not be written (rules are restored).
        """
        removed = []

        def mutate(schedule):
            if not schedule.rules:
                raise NoOpError(f"User {user_id} has no rules")
            removed.append(len(schedule.rules))
            schedule.rules.clear()

        self._mutate(user_id, mutate)
        log_message(f"Removed all {removed[0]} rules for user {user_id}", "debug")
        return removed[0]

    def snapshot(self):
        """
        Consistent copy of every user's rules as [(user_id, (rule, ...)), ...].
        """
        with self._lock:
            return [
                (user_id, tuple(schedule.rules))
                for user_id, schedule in self._schedules.items()
                if schedule.rules
            ]

    def users(self):
        with self._lock:
            return [user_id for user_id, schedule in self._schedules.items() if schedule.rules]

    def __len__(self):
        return len(self.users())

    def _mutate(self, user_id, mutate):
        """
        Apply mutate(schedule) to the user's schedule and persist the full mapping.

        Errors raised by mutate leave state untouched. If the write fails the
        previous rules are restored and PersistenceError is raised.
        """
        key = str(user_id)
        with self._lock:
            existing = self._schedules.get(key)
            previous = list(existing.rules) if existing else None
            schedule = existing or UserSchedule(key)
            mutate(schedule)
            self._schedules[key] = schedule
            try:
                self._write()
            except OSError as e:
                if previous is None:
                    self._schedules.pop(key, None)
                else:
                    schedule.rules[:] = previous
                log_message(f"Error saving schedule file {self.path}: {e}", "error")
                raise PersistenceError(f"Failed to save schedules: {e}") from e

    def _write(self):
        """
        Serialize the whole mapping and atomically replace the backing file.
        """
        data = {
            user_id: schedule.to_dict()
            for user_id, schedule in self._schedules.items()
        }
        directory = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(directory, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=directory, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp, self.path)
        except BaseException:
            try:
                os.unlink(tmp)
            except OSError:
                pass
            raise


def normalize_time(time_str):
    """
    Canonicalize a user-typed time or raise ValidationError.
    """
    canonical = parse_time(time_str)
    if canonical is None:
        raise ValidationError(f"Invalid time {time_str!r}, expected HH:MM")
    return canonical
