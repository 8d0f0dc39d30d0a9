"""Pipeline orchestrator tests: stage wiring, metadata, flags, persistence."""

from datetime import datetime, timedelta, timezone

import pytest

from learning_path.errors import RetrievalError
from learning_path.models.config import PipelineConfig
from learning_path.stages.orchestrator import PipelineServices, run_learning_path
from learning_path.stores import InMemoryPersistenceSink, InMemoryUserStore


class OfflineStore:
    def search(self, terms, fields, limit):
        raise RetrievalError("offline")


@pytest.fixture
def items(make_candidate):
    return [
        make_candidate(id="a", title="Armbar from Mount", covers_mistakes=True, quality_score=3),
        make_candidate(id="b", title="Armbar Finishing Mechanics", quality_score=2),
        make_candidate(id="c", title="Kimura Trap", quality_score=9),
    ]


@pytest.fixture
def services(fake_completion, payload_json):
    return PipelineServices(
        completion=fake_completion(
            {
                "query_understanding": payload_json(technique="armbar"),
                "recommendation_synthesis": "Control the elbow first.",
            }
        ),
        user_store=InMemoryUserStore(profiles={"u1": {"belt_level": "blue"}}),
        sink=InMemoryPersistenceSink(),
    )


class TestRunLearningPath:
    def test_full_pipeline(self, items, services):
        result = run_learning_path("u1", "how do I finish the armbar", "q1", items, services)
        assert result.understanding.explicit.technique == "armbar"
        assert [s.candidate_id for s in result.ranked] == ["a", "b"]
        assert result.learning_path.primary.id == "a"
        assert result.learning_path.framing == "Control the elbow first."
        assert result.metadata == {
            "used_fallback_interpretation": False,
            "retrieval_strategy": "technique",
            "retrieval_degraded": False,
            "candidate_count": 2,
        }
        assert services.completion.tasks() == ["query_understanding", "recommendation_synthesis"]

    def test_persists_both_records(self, items, services):
        run_learning_path("u1", "how do I finish the armbar", "q1", items, services)
        assert ("u1", "q1") in services.sink.understandings
        assert ("u1", "q1") in services.sink.learning_paths

    def test_max_results(self, items, services):
        result = run_learning_path("u1", "armbar", "q1", items, services, max_results=1)
        assert len(result.ranked) == 1
        assert result.metadata["candidate_count"] == 2

    def test_without_services(self, items):
        result = run_learning_path("u1", "armbar from mount", "q1", items)
        assert result.metadata["used_fallback_interpretation"]
        # Fallback interpretation searches the first keyword ("armbar") in titles
        assert result.metadata["retrieval_strategy"] == "keyword"
        assert result.learning_path.primary.id == "a"

    def test_interpreter_disabled(self, items, services):
        config = PipelineConfig(enable_interpreter=False)
        result = run_learning_path("u1", "armbar from mount", "q1", items, services, config=config)
        assert result.understanding.is_fallback
        assert services.completion.tasks() == ["recommendation_synthesis"]

    def test_synthesizer_disabled(self, items, services):
        config = PipelineConfig(enable_synthesizer=False)
        result = run_learning_path("u1", "how do I finish the armbar", "q1", items, services, config=config)
        assert len(result.ranked) == 2
        assert result.learning_path.primary is None
        assert result.learning_path.presentation_style == "empathetic"
        assert services.sink.learning_paths == {}

    def test_degraded_store(self, services):
        result = run_learning_path("u1", "how do I finish the armbar", "q1", OfflineStore(), services)
        assert result.ranked == []
        assert result.metadata["retrieval_degraded"]
        assert result.learning_path.primary is None

    def test_empty_query(self, items):
        with pytest.raises(ValueError):
            run_learning_path("u1", " ", "q1", items)

    def test_datetime_published_at_in_pool(self, items, services):
        published = datetime.now(timezone.utc) - timedelta(days=3)
        pool = items + [{"id": "d", "title": "Armbar Defense Escapes", "published_at": published}]
        result = run_learning_path("u1", "how do I finish the armbar", "q1", pool, services)
        assert result.metadata["candidate_count"] == 3
        fresh = next(s for s in result.ranked if s.candidate_id == "d")
        assert fresh.candidate.published_at == published.isoformat()

    def test_invalid_pool_degrades(self, items, services):
        pool = items + [{"id": "broken"}]
        result = run_learning_path("u1", "how do I finish the armbar", "q1", pool, services)
        assert result.ranked == []
        assert result.metadata["retrieval_degraded"]
        assert result.metadata["retrieval_strategy"] == "error"
        assert result.learning_path.primary is None

    def test_default_max_results_from_config(self, items, services):
        config = PipelineConfig(max_results=1)
        result = run_learning_path("u1", "how do I finish the armbar", "q1", items, services, config=config)
        assert len(result.ranked) == 1
