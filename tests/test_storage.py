"""Tests for high score persistence."""

import json
import logging

import pytest

from pichuka.storage import (
    HighScoreStore,
    JsonHighScoreStore,
    MemoryHighScoreStore,
    parse_high_score,
)


class TestParseHighScore:
    @pytest.mark.parametrize("raw,expected", [
        (12, 12),
        (12.9, 12),
        ("7", 7),
        ("3.5", 3),
        (0.9, 0),
    ])
    def test_valid(self, raw, expected):
        assert parse_high_score(raw) == expected

    @pytest.mark.parametrize("raw", [
        None, 0, -4, "abc", "", float("nan"), float("inf"), True, [3], {"a": 1},
    ])
    def test_invalid_is_zero(self, raw):
        assert parse_high_score(raw) == 0


class TestMemoryStore:
    def test_default_zero(self):
        assert MemoryHighScoreStore().load_high_score() == 0

    def test_save_and_load(self):
        store = MemoryHighScoreStore()
        store.save_high_score(9)
        assert store.load_high_score() == 9
        assert store.saves == [9]

    def test_invalid_initial(self):
        assert MemoryHighScoreStore("-3").load_high_score() == 0

    def test_base_is_abstract(self):
        with pytest.raises(NotImplementedError):
            HighScoreStore().load_high_score()
        with pytest.raises(NotImplementedError):
            HighScoreStore().save_high_score(1)


class TestJsonStore:
    def test_missing_file(self, tmp_path):
        store = JsonHighScoreStore(str(tmp_path / "missing.json"))
        assert store.load_high_score() == 0
        store.close()

    def test_save_and_load(self, tmp_path):
        path = tmp_path / "nested" / "high.json"
        store = JsonHighScoreStore(str(path))
        store.save_high_score(17)
        store.flush()

        with open(path) as f:
            assert json.load(f) == {"high_score": 17}
        assert JsonHighScoreStore(str(path)).load_high_score() == 17
        store.close()

    def test_last_write_wins(self, tmp_path):
        path = tmp_path / "high.json"
        store = JsonHighScoreStore(str(path))
        for value in range(1, 6):
            store.save_high_score(value)
        store.close()
        assert JsonHighScoreStore(str(path)).load_high_score() == 5

    def test_invalid_value_ignored(self, tmp_path, caplog):
        path = tmp_path / "high.json"
        path.write_text(json.dumps({"high_score": "lots"}))
        with caplog.at_level(logging.WARNING, logger="pichuka.storage"):
            assert JsonHighScoreStore(str(path)).load_high_score() == 0
        assert "invalid stored high score" in caplog.text

    def test_negative_value_ignored(self, tmp_path):
        path = tmp_path / "high.json"
        path.write_text(json.dumps({"high_score": -2}))
        assert JsonHighScoreStore(str(path)).load_high_score() == 0

    def test_corrupt_file_ignored(self, tmp_path, caplog):
        path = tmp_path / "high.json"
        path.write_text("{not json")
        with caplog.at_level(logging.WARNING, logger="pichuka.storage"):
            assert JsonHighScoreStore(str(path)).load_high_score() == 0
        assert "unreadable" in caplog.text

    def test_fractional_value_truncated(self, tmp_path):
        path = tmp_path / "high.json"
        path.write_text(json.dumps({"high_score": 3.5}))
        assert JsonHighScoreStore(str(path)).load_high_score() == 3

    def test_bare_number_accepted(self, tmp_path):
        path = tmp_path / "high.json"
        path.write_text("23")
        assert JsonHighScoreStore(str(path)).load_high_score() == 23

    def test_write_failure_is_logged_not_raised(self, tmp_path, caplog):
        # A directory where the file should be makes open() fail
        path = tmp_path / "high.json"
        path.mkdir()
        store = JsonHighScoreStore(str(path))
        with caplog.at_level(logging.WARNING, logger="pichuka.storage"):
            store.save_high_score(4)
            store.close()
        assert "Could not save high score" in caplog.text
