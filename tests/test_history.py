"""UserHistory derivation from raw interactions, and the profile skill mapping."""

import pytest

from learning_path.models.user import UserHistory, UserProfile


def _interaction(cid, created_at, **kwargs):
    return {"candidate_id": cid, "created_at": created_at, "instructor": "Coach", **kwargs}


class TestFromInteractions:
    def test_empty_is_neutral(self):
        history = UserHistory.from_interactions([])
        assert history == UserHistory()
        assert history.avg_watch_duration == 0

    def test_viewed_and_saved(self):
        history = UserHistory.from_interactions(
            [
                _interaction("a", "2026-01-01", clicked=True),
                _interaction("b", "2026-01-02", saved_to_library=True),
                _interaction("c", "2026-01-03", clicked=True, saved_to_library=True),
            ]
        )
        assert history.viewed_ids == ["c", "a"]
        assert history.saved_ids == ["c", "b"]

    def test_average_watch_ignores_zero_durations(self):
        history = UserHistory.from_interactions(
            [
                _interaction("a", "2026-01-01", watch_duration=600),
                _interaction("b", "2026-01-02", watch_duration=1200),
                _interaction("c", "2026-01-03", watch_duration=0),
            ]
        )
        assert history.avg_watch_duration == pytest.approx(900)

    def test_completion_rates(self):
        history = UserHistory.from_interactions(
            [
                _interaction("a", "2026-01-01", clicked=True, completed=True, instructor="Danaher"),
                _interaction("b", "2026-01-02", clicked=True, completed=False, instructor="Danaher"),
                _interaction("c", "2026-01-03", clicked=True, completed=True, instructor="Ryan"),
                _interaction("d", "2026-01-04", clicked=False, completed=True, instructor="Ryan"),
            ]
        )
        assert history.completion_rate == pytest.approx(2 / 3)
        assert history.per_instructor_completion == {"Danaher": 0.5, "Ryan": 1.0}

    def test_limit_keeps_most_recent(self):
        interactions = [
            _interaction(f"v{i}", f"2026-01-{i + 1:02d}", clicked=True) for i in range(10)
        ]
        history = UserHistory.from_interactions(interactions, limit=3)
        assert history.viewed_ids == ["v9", "v8", "v7"]

    def test_numeric_ids_become_strings(self):
        history = UserHistory.from_interactions([_interaction(42, "2026-01-01", clicked=True)])
        assert history.viewed_ids == ["42"]


class TestProfile:
    @pytest.mark.parametrize(
        "belt,level",
        [("White", "beginner"), ("blue", "intermediate"), ("purple", "intermediate"),
         ("brown", "advanced"), ("black", "advanced"), (None, None), ("grey", None)],
    )
    def test_skill_level_from_belt(self, belt, level):
        assert UserProfile(user_id="u", belt_level=belt).skill_level == level
