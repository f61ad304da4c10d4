"""Shared test fixtures."""

import json
import random

import pytest

from quotes import QuoteStore
from store import ScheduleStore


@pytest.fixture
def schedule_path(tmp_path):
    return tmp_path / "user_schedules.json"


@pytest.fixture
def schedule_store(schedule_path):
    store = ScheduleStore(str(schedule_path))
    store.load()
    return store


@pytest.fixture
def quotes_path(tmp_path):
    path = tmp_path / "frases.json"
    path.write_text(
        json.dumps(
            [
                {"quote": "A vida é bela", "author": "Alguém"},
                {"quote": "Carpe diem", "author": "Horácio"},
                {"quote": "Conhece-te a ti mesmo", "author": "Sócrates"},
            ]
        ),
        encoding="utf-8",
    )
    return path


@pytest.fixture
def quote_store(quotes_path):
    quotes = QuoteStore(str(quotes_path), rng=random.Random(1234))
    quotes.load()
    return quotes


class RecordingNotifier:
    """Collects (user_id, text) pairs; optionally fails for some users."""

    def __init__(self, fail_for=()):
        self.sent = []
        self.fail_for = set(fail_for)

    async def __call__(self, user_id, text):
        if user_id in self.fail_for:
            raise RuntimeError(f"delivery failed for {user_id}")
        self.sent.append((user_id, text))


@pytest.fixture
def notifier():
    return RecordingNotifier()
