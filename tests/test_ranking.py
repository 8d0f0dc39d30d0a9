"""
Ranking tests: dense monotone ranks, truncation, stable ties, history loading,
rationale text, and parallel scoring.
"""

import pytest

from learning_path.models.config import PipelineConfig
from learning_path.models.user import UserHistory
from learning_path.stages.ranking import MatchingContext, build_rationale, match_candidates
from learning_path.stores import InMemoryUserStore


def _armbar_items(make_candidate, n):
    return [
        make_candidate(
            title=f"Armbar Lesson {i}",
            quality_score=i,
            covers_mistakes=i % 2 == 0,
            teaching_clarity_score=i * 2,
            includes_drilling=i % 3 == 0,
        )
        for i in range(n)
    ]


@pytest.fixture
def context(make_understanding):
    return MatchingContext(
        query="how do I finish the armbar",
        understanding=make_understanding(technique="armbar"),
    )


class FailingUserStore:
    def get_profile(self, user_id):
        raise RuntimeError("down")

    def get_history(self, user_id, limit=50):
        raise RuntimeError("down")


class TestRanking:
    def test_ranks_are_dense_and_monotone(self, make_candidate, context):
        ranked = match_candidates(context, _armbar_items(make_candidate, 8), max_results=8)
        assert [s.rank for s in ranked] == list(range(1, 9))
        combined = [s.combined_score for s in ranked]
        assert combined == sorted(combined, reverse=True)

    def test_truncates_to_max_results(self, make_candidate, context):
        ranked = match_candidates(context, _armbar_items(make_candidate, 8), max_results=3)
        assert len(ranked) == 3
        assert [s.rank for s in ranked] == [1, 2, 3]

    def test_default_max_results_from_config(self, make_candidate, context):
        config = PipelineConfig(max_results=2)
        assert len(match_candidates(context, _armbar_items(make_candidate, 8), config=config)) == 2

    def test_ties_keep_retrieval_order(self, make_candidate, context):
        items = [
            make_candidate(id="first", title="Armbar A", quality_score=9),
            make_candidate(id="second", title="Armbar B", quality_score=5),
        ]
        ranked = match_candidates(context, items)
        assert ranked[0].combined_score == ranked[1].combined_score
        assert [s.candidate_id for s in ranked] == ["first", "second"]

    def test_empty_pool(self, make_candidate, make_understanding):
        context = MatchingContext(query="q", understanding=make_understanding(technique="omoplata"))
        assert match_candidates(context, [make_candidate(title="Armbar")]) == []

    def test_accepts_dict_pool(self, context):
        ranked = match_candidates(context, [{"id": 7, "title": "Armbar from Mount"}])
        assert ranked[0].candidate_id == "7"

    def test_invalid_pool_ranks_nothing(self, context):
        assert match_candidates(context, [{"id": 1, "title": "Armbar"}, {"id": 2}]) == []

    def test_negative_max_results_is_empty(self, make_candidate, context):
        assert match_candidates(context, _armbar_items(make_candidate, 4), max_results=-2) == []

    def test_parallel_scoring_matches_sequential(self, make_candidate, context):
        items = _armbar_items(make_candidate, 10)
        sequential = match_candidates(context, items, max_results=10)
        parallel = match_candidates(
            context,
            items,
            max_results=10,
            config=PipelineConfig(parallel_scoring=True, scoring_workers=3),
        )
        assert [(s.candidate_id, s.rank, s.combined_score) for s in parallel] == [
            (s.candidate_id, s.rank, s.combined_score) for s in sequential
        ]


class TestHistory:
    def test_history_from_user_store(self, make_candidate, make_understanding):
        store = InMemoryUserStore(
            interactions={"u1": [{"candidate_id": "seen", "clicked": True}]}
        )
        context = MatchingContext(
            query="armbar", understanding=make_understanding(technique="armbar"), user_id="u1"
        )
        items = [make_candidate(id="seen", title="Armbar Seen"), make_candidate(id="new", title="Armbar New")]
        ranked = {s.candidate_id: s for s in match_candidates(context, items, user_store=store)}
        assert ranked["seen"].scores.progression_value == 50
        assert ranked["new"].scores.progression_value == 80

    def test_preloaded_history_wins(self, make_candidate, make_understanding):
        context = MatchingContext(
            query="armbar",
            understanding=make_understanding(technique="armbar"),
            user_id="u1",
            user_history=UserHistory(viewed_ids=["x"]),
        )
        ranked = match_candidates(
            context, [make_candidate(id="x", title="Armbar")], user_store=FailingUserStore()
        )
        assert ranked[0].scores.progression_value == 50

    def test_history_failure_uses_neutral_default(self, make_candidate, make_understanding):
        context = MatchingContext(
            query="armbar", understanding=make_understanding(technique="armbar"), user_id="u1"
        )
        ranked = match_candidates(
            context, [make_candidate(title="Armbar")], user_store=FailingUserStore()
        )
        assert len(ranked) == 1
        assert ranked[0].scores.progression_value == 80


class TestRationale:
    def test_names_strong_sub_scores(self, make_candidate, context):
        item = make_candidate(
            title="Armbar Details",
            covers_mistakes=True,
            shows_live_application=True,
        )
        scored = match_candidates(context, [item])[0]
        # relevance 80, retention 95, progression 80, pedagogical fit 75
        assert scored.rationale == (
            "high retention (covers mistakes & application), "
            "highly relevant to your question, "
            "moves you forward on your BJJ journey"
        )

    def test_only_top_three_considered(self, make_understanding):
        from learning_path.models.scoring import SubScores

        scores = SubScores(
            relevance=90,
            pedagogical_fit=90,
            engagement_probability=90,
            learning_efficiency=90,
            retention_likelihood=90,
            progression_value=90,
        )
        config = PipelineConfig()
        text = build_rationale(scores, make_understanding(learning_style="visual"), config)
        assert text == (
            "highly relevant to your question, "
            "matches your visual learning style, "
            "high engagement rate with similar users"
        )

    def test_default_rationale(self, make_understanding):
        from learning_path.models.scoring import SubScores

        scores = SubScores(
            relevance=70,
            pedagogical_fit=60,
            engagement_probability=50,
            learning_efficiency=50,
            retention_likelihood=50,
            progression_value=50,
        )
        assert build_rationale(scores, make_understanding(), PipelineConfig()) == "good overall match"
