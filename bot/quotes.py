"""
Module: bot/quotes.py

Loads the quote collection from a JSON file and picks random phrases for delivery.
"""
import json
import random
from dataclasses import dataclass
from errors import LoadError
from utils import log_message

NO_QUOTES_MESSAGE = "Desculpe, não há frases disponíveis. 😔"


@dataclass(frozen=True, slots=True)
class QuoteRecord:
    """
    One quote and its author. Immutable once created.
    """
    text: str
    author: str


class QuoteStore:
    """
    Read-only collection of quotes loaded once at startup.

    Attributes:
        path (str): Location of the JSON quote list.
        rng (random.Random): Source of randomness; injectable for tests.
    """
    def __init__(self, path, rng=None):
        self.path = path
        self.rng = rng or random.Random()
        self._quotes = ()

    def load(self):
        """
        Read the quote list [{"quote": ..., "author": ...}, ...] from disk.

        On failure the collection is left empty and the error is logged.
        Returns None on success or the LoadError describing the failure.
        """
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            if not isinstance(data, list):
                raise ValueError("expected a list of quotes")
            self._quotes = tuple(
                QuoteRecord(str(item["quote"]), str(item.get("author", "")))
                for item in data
            )
        except (OSError, ValueError, KeyError, TypeError, AttributeError) as e:
            self._quotes = ()
            error = LoadError(self.path, e)
            log_message(f"Error loading quotes file: {error}", "error")
            return error
        log_message(f"Loaded {len(self._quotes)} quotes from {self.path}", "info")
        return None

    def pick_random(self):
        """
        Return a uniformly random QuoteRecord, or None when no quotes are loaded.
        """
        if not self._quotes:
            return None
        return self._quotes[self.rng.randrange(len(self._quotes))]

    @staticmethod
    def render(record):
        return f'🎉 "{record.text}" - {record.author} ✨'

    def phrase(self):
        """
        Rendered random quote, or the "no quotes available" message.
        """
        record = self.pick_random()
        if record is None:
            return NO_QUOTES_MESSAGE
        return self.render(record)

    def __len__(self):
        return len(self._quotes)
