"""
Sub-score tests: each of the six scores in isolation.

Every score starts at 50, adds fixed bonuses and is capped at 100. The default
understanding is curious / intermediate / step-by-step with no prerequisites,
and the default history is empty (neutral).
"""

from datetime import datetime, timedelta, timezone

import pytest

from learning_path.models.config import DEFAULT_CONFIG
from learning_path.models.user import UserHistory
from learning_path.stages.ranking.context import ScoringContext
from learning_path.stages.ranking.sub_scores import (
    belt_proximity,
    duration_match,
    score_candidate,
    score_engagement_probability,
    score_learning_efficiency,
    score_pedagogical_fit,
    score_progression_value,
    score_relevance,
    score_retention_likelihood,
)


def _timestamps(n):
    return [{"offset": i * 60, "description": f"part {i}"} for i in range(n)]


@pytest.fixture
def ctx(make_understanding):
    def _ctx(history=None, **understanding_kwargs):
        return ScoringContext(
            understanding=make_understanding(**understanding_kwargs),
            history=history or UserHistory(),
            config=DEFAULT_CONFIG,
        )

    return _ctx


class TestRelevance:
    def test_base_score_without_matches(self, make_candidate, ctx):
        assert score_relevance(make_candidate(), ctx()) == 50

    def test_technique_in_title(self, make_candidate, ctx):
        item = make_candidate(title="Triangle Finish Details")
        assert score_relevance(item, ctx(technique="triangle")) == 80

    def test_technique_and_position_in_title(self, make_candidate, ctx):
        item = make_candidate(title="Triangle from Closed Guard")
        assert score_relevance(item, ctx(technique="triangle", position="closed guard")) == 100

    def test_mistakes_only_count_for_troubleshooting(self, make_candidate, ctx):
        item = make_candidate(covers_mistakes=True)
        assert score_relevance(item, ctx(question_type="troubleshooting")) == 60
        assert score_relevance(item, ctx(question_type="how-to")) == 50

    def test_detailed_timestamps_need_more_than_five(self, make_candidate, ctx):
        assert score_relevance(make_candidate(timestamp_index=_timestamps(6)), ctx()) == 60
        assert score_relevance(make_candidate(timestamp_index=_timestamps(5)), ctx()) == 50

    def test_capped_at_100(self, make_candidate, ctx):
        item = make_candidate(
            title="Triangle from Closed Guard",
            covers_mistakes=True,
            timestamp_index=_timestamps(7),
        )
        context = ctx(technique="triangle", position="closed guard", question_type="troubleshooting")
        assert score_relevance(item, context) == 100


class TestPedagogicalFit:
    def test_frustrated_learner_rewards_clear_teaching(self, make_candidate, ctx):
        context = ctx(emotional_state="frustrated", learning_style="visual")
        clear = make_candidate(teaching_clarity_score=16, skill_level="intermediate")
        borderline = make_candidate(teaching_clarity_score=15, skill_level="intermediate")
        assert score_pedagogical_fit(clear, context) == 100
        assert score_pedagogical_fit(borderline, context) == 75

    def test_curious_learner_rewards_advanced_items(self, make_candidate, ctx):
        context = ctx(emotional_state="curious", skill_level="advanced", learning_style="visual")
        assert score_pedagogical_fit(make_candidate(skill_level="advanced"), context) == 90

    def test_step_by_step_needs_more_than_eight_timestamps(self, make_candidate, ctx):
        context = ctx(emotional_state="confused")
        assert score_pedagogical_fit(make_candidate(timestamp_index=_timestamps(9)), context) == 95
        assert score_pedagogical_fit(make_candidate(timestamp_index=_timestamps(8)), context) == 75

    def test_belt_proximity_scales_bonus(self, make_candidate, ctx):
        context = ctx(emotional_state="confused", skill_level="beginner", learning_style="visual")
        assert score_pedagogical_fit(make_candidate(skill_level="beginner"), context) == 75
        assert score_pedagogical_fit(
            make_candidate(skill_level="intermediate"), context
        ) == pytest.approx(67.5)
        assert score_pedagogical_fit(
            make_candidate(skill_level="advanced"), context
        ) == pytest.approx(57.5)

    def test_belt_proximity_multipliers(self):
        assert belt_proximity("beginner", "beginner", DEFAULT_CONFIG) == 1.0
        assert belt_proximity("beginner", "intermediate", DEFAULT_CONFIG) == 0.7
        assert belt_proximity("advanced", "beginner", DEFAULT_CONFIG) == 0.3
        # Unknown levels count as intermediate
        assert belt_proximity(None, "intermediate", DEFAULT_CONFIG) == 1.0
        assert belt_proximity("expert", "beginner", DEFAULT_CONFIG) == 0.7


class TestEngagementProbability:
    def test_base_score_with_no_signals(self, make_candidate, ctx):
        assert score_engagement_probability(make_candidate(), ctx()) == 50

    def test_instructor_completion_rate(self, make_candidate, ctx):
        history = UserHistory(per_instructor_completion={"Danaher": 0.5})
        item = make_candidate(instructor="Danaher")
        assert score_engagement_probability(item, ctx(history=history)) == 65

    def test_production_quality_above_seven(self, make_candidate, ctx):
        assert score_engagement_probability(make_candidate(production_quality_score=8), ctx()) == 65
        assert score_engagement_probability(make_candidate(production_quality_score=7), ctx()) == 50

    def test_duration_without_history_uses_default_window(self, make_candidate, ctx):
        assert score_engagement_probability(make_candidate(duration=900), ctx()) == 65
        assert score_engagement_probability(make_candidate(duration="PT15M"), ctx()) == 65
        assert score_engagement_probability(make_candidate(duration=300), ctx()) == 57.5

    def test_zero_duration_counts_as_missing(self, make_candidate, ctx):
        assert score_engagement_probability(make_candidate(duration=0), ctx()) == 50
        assert score_engagement_probability(make_candidate(duration=""), ctx()) == 50

    def test_unparseable_duration_gets_half_credit(self, make_candidate, ctx):
        assert score_engagement_probability(make_candidate(duration="a while"), ctx()) == 57.5

    def test_duration_against_watch_history(self, make_candidate, ctx):
        context = ctx(history=UserHistory(avg_watch_duration=900))
        assert score_engagement_probability(make_candidate(duration=1000), context) == 65
        assert score_engagement_probability(
            make_candidate(duration=1300), context
        ) == pytest.approx(60.5)
        assert score_engagement_probability(
            make_candidate(duration=2000), context
        ) == pytest.approx(54.5)

    def test_fresh_content(self, make_candidate, ctx):
        recent = (datetime.now(timezone.utc) - timedelta(days=10)).isoformat()
        old = (datetime.now(timezone.utc) - timedelta(days=200)).isoformat()
        assert score_engagement_probability(make_candidate(published_at=recent), ctx()) == 60
        assert score_engagement_probability(make_candidate(published_at=old), ctx()) == 50

    def test_fresh_content_from_datetime(self, make_candidate, ctx):
        recent = datetime.now(timezone.utc) - timedelta(days=10)
        item = make_candidate(published_at=recent)
        assert item.published_at == recent.isoformat()
        assert score_engagement_probability(item, ctx()) == 60

    def test_duration_match_bands(self):
        assert duration_match(None, 0, DEFAULT_CONFIG) == 0.5
        assert duration_match(1200, 0, DEFAULT_CONFIG) == 1.0
        assert duration_match(1201, 0, DEFAULT_CONFIG) == 0.5
        assert duration_match(600, 900, DEFAULT_CONFIG) == 0.7
        assert duration_match(300, 900, DEFAULT_CONFIG) == 0.3


class TestLearningEfficiency:
    def test_fundamentals_reward_beginner_or_mistakes(self, make_candidate, ctx):
        context = ctx(prerequisites={"needs_fundamentals": True})
        assert score_learning_efficiency(make_candidate(skill_level="beginner"), context) == 80
        assert score_learning_efficiency(make_candidate(covers_mistakes=True), context) == 80
        assert score_learning_efficiency(make_candidate(skill_level="advanced"), context) == 50

    def test_ready_for_advanced(self, make_candidate, ctx):
        context = ctx(prerequisites={"ready_for_advanced": True})
        assert score_learning_efficiency(make_candidate(skill_level="advanced"), context) == 80

    def test_fundamentals_take_precedence_over_advanced(self, make_candidate, ctx):
        context = ctx(prerequisites={"needs_fundamentals": True, "ready_for_advanced": True})
        assert score_learning_efficiency(make_candidate(skill_level="advanced"), context) == 50

    def test_clarity_scales_up_to_twenty(self, make_candidate, ctx):
        assert score_learning_efficiency(make_candidate(teaching_clarity_score=10), ctx()) == 60
        assert score_learning_efficiency(make_candidate(teaching_clarity_score=20), ctx()) == 70
        assert score_learning_efficiency(make_candidate(teaching_clarity_score=30), ctx()) == 70

    def test_comprehensive_timestamps(self, make_candidate, ctx):
        assert score_learning_efficiency(make_candidate(timestamp_index=_timestamps(10)), ctx()) == 65
        assert score_learning_efficiency(make_candidate(timestamp_index=_timestamps(9)), ctx()) == 50


class TestRetentionLikelihood:
    def test_each_signal(self, make_candidate, ctx):
        assert score_retention_likelihood(make_candidate(covers_mistakes=True), ctx()) == 75
        assert score_retention_likelihood(make_candidate(shows_live_application=True), ctx()) == 70
        assert score_retention_likelihood(make_candidate(includes_drilling=True), ctx()) == 65
        assert score_retention_likelihood(make_candidate(teaching_clarity_score=18), ctx()) == 65

    def test_capped_at_100(self, make_candidate, ctx):
        item = make_candidate(
            covers_mistakes=True,
            shows_live_application=True,
            includes_drilling=True,
            teaching_clarity_score=18,
        )
        assert score_retention_likelihood(item, ctx()) == 100


class TestProgressionValue:
    def test_unseen_item(self, make_candidate, ctx):
        assert score_progression_value(make_candidate(), ctx()) == 80

    def test_viewed_item(self, make_candidate, ctx):
        item = make_candidate(id="seen-1")
        context = ctx(history=UserHistory(viewed_ids=["seen-1"]))
        assert score_progression_value(item, context) == 50

    def test_follow_up_concept_in_title(self, make_candidate, ctx):
        item = make_candidate(id="seen-2", title="Leg Lock Entries")
        context = ctx(history=UserHistory(viewed_ids=["seen-2"]), follow_up=["leg lock"])
        assert score_progression_value(item, context) == 75

    def test_credible_instructor(self, make_candidate, ctx):
        item = make_candidate(id="seen-3", instructor_credibility_score=26)
        context = ctx(history=UserHistory(viewed_ids=["seen-3"]))
        assert score_progression_value(item, context) == 65


def test_score_candidate_defaults(make_candidate, ctx):
    scores = score_candidate(make_candidate(), ctx())
    assert scores.as_dict() == {
        "relevance": 50,
        "pedagogical_fit": 75,
        "engagement_probability": 50,
        "learning_efficiency": 50,
        "retention_likelihood": 50,
        "progression_value": 80,
    }
