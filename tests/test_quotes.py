"""Tests for the quote store."""

import random
from collections import Counter
from dataclasses import FrozenInstanceError

import pytest

from errors import LoadError
from quotes import NO_QUOTES_MESSAGE, QuoteRecord, QuoteStore


class TestLoad:
    def test_loads_records(self, quote_store):
        assert len(quote_store) == 3

    def test_missing_file_degrades_to_empty(self, tmp_path, capsys):
        quotes = QuoteStore(str(tmp_path / "nope.json"))
        error = quotes.load()
        assert isinstance(error, LoadError)
        assert len(quotes) == 0
        assert "Error loading quotes file" in capsys.readouterr().out

    def test_corrupt_file_degrades_to_empty(self, tmp_path):
        path = tmp_path / "frases.json"
        path.write_text("{not json", encoding="utf-8")
        quotes = QuoteStore(str(path))
        assert isinstance(quotes.load(), LoadError)
        assert quotes.pick_random() is None

    def test_wrong_shape_degrades_to_empty(self, tmp_path):
        path = tmp_path / "frases.json"
        path.write_text('{"quote": "x"}', encoding="utf-8")
        quotes = QuoteStore(str(path))
        assert isinstance(quotes.load(), LoadError)
        assert len(quotes) == 0


class TestPickRandom:
    def test_empty_returns_none(self, tmp_path):
        quotes = QuoteStore(str(tmp_path / "missing.json"))
        quotes.load()
        assert quotes.pick_random() is None
        assert quotes.phrase() == NO_QUOTES_MESSAGE

    def test_roughly_uniform(self, quote_store):
        quote_store.rng = random.Random(42)
        draws = 6000
        counts = Counter(quote_store.pick_random() for _ in range(draws))
        assert len(counts) == 3
        for record, count in counts.items():
            assert isinstance(record, QuoteRecord)
            assert abs(count - draws / 3) < draws * 0.05


class TestRender:
    def test_render_format(self):
        record = QuoteRecord("Carpe diem", "Horácio")
        assert QuoteStore.render(record) == '🎉 "Carpe diem" - Horácio ✨'

    def test_phrase_uses_loaded_quote(self, quote_store):
        phrase = quote_store.phrase()
        assert phrase.startswith('🎉 "')
        assert phrase.endswith(" ✨")

    def test_record_is_immutable(self):
        record = QuoteRecord("a", "b")
        with pytest.raises(FrozenInstanceError):
            record.text = "c"
        assert record == QuoteRecord("a", "b")
        assert len({record, QuoteRecord("a", "b")}) == 1
