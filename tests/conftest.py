"""
Shared fixtures: fake completion clients, candidate and understanding factories.

The understanding payload mirrors what the completion capability returns
(camelCase keys); understanding_factory validates it into an Understanding.
"""

import itertools
import json
from typing import Dict, List, Optional, Union

import pytest

from learning_path.errors import CapabilityError
from learning_path.models.candidate import CandidateItem
from learning_path.models.completion import CompletionRequest, CompletionResult
from learning_path.models.understanding import Understanding

_ids = itertools.count(1)


def understanding_payload(
    technique: Optional[str] = None,
    position: Optional[str] = None,
    question_type: str = "how-to",
    keywords=(),
    emotional_state: str = "curious",
    skill_level: str = "intermediate",
    learning_style: str = "step-by-step",
    follow_up=(),
    prerequisites: Optional[Dict[str, bool]] = None,
    presentation_style: str = "direct",
    root_problem: str = "finishing the triangle",
    confidence: float = 0.85,
) -> Dict:
    return {
        "explicit": {
            "technique": technique,
            "position": position,
            "questionType": question_type,
            "keywords": list(keywords),
        },
        "intent": {
            "rootProblem": root_problem,
            "likelyMistakes": ["posture not broken"],
            "learningNeed": "angle and posture control",
            "skillGap": "finishing mechanics",
        },
        "userProfile": {
            "inferredSkillLevel": skill_level,
            "inferredLearningStyle": learning_style,
            "emotionalState": emotional_state,
            "urgency": "medium",
        },
        "learningPath": {
            "immediateNeed": "finish mechanics",
            "foundationalConcepts": ["posture control"],
            "followUpConcepts": list(follow_up),
            "prerequisiteCheck": prerequisites or {},
        },
        "recommendationStrategy": {
            "primary": "show the finish",
            "secondary": "common mistakes",
            "tertiary": "chains",
            "presentationStyle": presentation_style,
        },
        "confidence": confidence,
    }


class FakeCompletion:
    """
    Completion client returning canned content per task type.

    A response may be a string (returned as content) or an exception instance
    (raised). Every request is recorded in .requests.
    """

    def __init__(self, responses: Dict[str, Union[str, Exception]], model_id: str = "fake-model"):
        self.responses = dict(responses)
        self.model_id = model_id
        self.requests: List[CompletionRequest] = []

    def complete(self, request: CompletionRequest) -> CompletionResult:
        self.requests.append(request)
        response = self.responses.get(request.task_type)
        if response is None:
            raise CapabilityError(f"no canned response for {request.task_type}", request.task_type)
        if isinstance(response, Exception):
            raise response
        return CompletionResult(content=response, model_id=self.model_id)

    def tasks(self) -> List[str]:
        return [r.task_type for r in self.requests]


class UnreachableCompletion:
    """Completion client that always fails, like an unreachable provider."""

    def __init__(self):
        self.calls = 0

    def complete(self, request: CompletionRequest) -> CompletionResult:
        self.calls += 1
        raise CapabilityError("connection refused", request.task_type)


@pytest.fixture
def make_candidate():
    def _make(**overrides) -> CandidateItem:
        data = {"id": f"v{next(_ids)}", "title": "Item", "instructor": "Coach"}
        data.update(overrides)
        return CandidateItem.model_validate(data)

    return _make


@pytest.fixture
def make_understanding():
    def _make(model_id: str = "test-model", **kwargs) -> Understanding:
        payload = understanding_payload(**kwargs)
        payload["model_id"] = model_id
        return Understanding.model_validate(payload)

    return _make


@pytest.fixture
def payload_json():
    def _make(**kwargs) -> str:
        return json.dumps(understanding_payload(**kwargs))

    return _make


@pytest.fixture
def fake_completion():
    def _make(responses: Dict[str, Union[str, Exception]], model_id: str = "fake-model"):
        return FakeCompletion(responses, model_id)

    return _make


@pytest.fixture
def unreachable_completion():
    return UnreachableCompletion()
