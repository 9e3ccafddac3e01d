"""Tests for the JSON game store."""
import pytest

from explorer.persistence import GameStore, HIGH_SCORES_FILE, SETTINGS_FILE, VISITED_FILE


class TestHighScores:
    def test_defaults(self, store):
        assert store.get_high_scores() == {"arcade": 0, "raiden": 0}

    def test_only_higher_scores_saved(self, store):
        assert store.save_high_score("arcade", 500) is True
        assert store.save_high_score("arcade", 300) is False
        assert store.save_high_score("arcade", 500) is False
        assert store.get_high_scores() == {"arcade": 500, "raiden": 0}

    def test_unknown_game(self, store):
        with pytest.raises(ValueError):
            store.save_high_score("pong", 10)

    def test_survives_new_instance(self, store):
        store.save_high_score("raiden", 1230)
        again = GameStore(str(store.storage_dir))
        assert again.get_high_scores()["raiden"] == 1230

    def test_corrupted_file_falls_back(self, store):
        (store.storage_dir / HIGH_SCORES_FILE).write_text("{not json")
        assert store.get_high_scores() == {"arcade": 0, "raiden": 0}
        assert store.save_high_score("arcade", 10) is True


class TestVisited:
    def test_mark_and_count(self, store):
        assert not store.has_visited("Mars")
        first = store.mark_visited("Mars")
        second = store.mark_visited("Mars")
        assert first["visit_count"] == 1
        assert second["visit_count"] == 2
        assert second["last_visited"] >= first["last_visited"]
        assert store.has_visited("Mars")
        assert set(store.get_visited()) == {"Mars"}

    def test_non_dict_file_ignored(self, store):
        (store.storage_dir / VISITED_FILE).write_text("[1, 2, 3]")
        assert store.get_visited() == {}


class TestSettings:
    def test_default_unmuted(self, store):
        assert store.get_settings() == {"muted": False}

    def test_round_trip(self, store):
        store.save_settings({"muted": True})
        assert store.get_settings()["muted"] is True

    def test_clear_all(self, store):
        store.save_settings({"muted": True})
        store.save_high_score("arcade", 5)
        store.mark_visited("Earth")
        store.clear_all()
        assert not (store.storage_dir / SETTINGS_FILE).exists()
        assert store.get_settings() == {"muted": False}
        assert store.get_high_scores() == {"arcade": 0, "raiden": 0}
        assert store.get_visited() == {}
