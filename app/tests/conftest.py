import copy
import json
import time
from types import SimpleNamespace
from typing import Any, Dict, List, Optional, Tuple

import pytest


SAMPLE_GUIDE: Dict[str, Any] = {
    "companyName": "Goldman Sachs",
    "interviewQuestions": {
        "title": "Recent Internet-Based Interview Questions",
        "questions": [
            {"question": "Find the longest substring without repeating characters.", "topic": "Data Structures", "difficulty": "Medium"},
            {"question": "Design a trade reconciliation service.", "topic": "System Design", "difficulty": "Hard"},
            {"question": "Why Goldman Sachs?", "topic": "Behavioral", "difficulty": "Easy"},
        ],
    },
    "codingRound": {
        "title": "Coding Round Analysis",
        "difficultyAnalysis": "Overall, the coding rounds are considered Medium.",
        "sampleProblems": [
            {
                "problem": "Two Sum",
                "description": "Return indices of the two numbers adding up to target.",
                "solution": {
                    "python": "def two_sum(nums, target):\n    seen = {}\n    for i, n in enumerate(nums):\n        if target - n in seen:\n            return [seen[target - n], i]\n        seen[n] = i",
                    "java": "class Solution {\n    int[] twoSum(int[] nums, int target) { return new int[]{}; }\n}",
                },
            }
        ],
    },
    "roleInsights": {
        "title": "Role Insights (Software Engineer)",
        "skillsRequired": ["Java", "Data Structures", "SQL"],
        "hiringPattern": "Online assessment followed by technical and HR rounds.",
        "numberOfRounds": "4-5 rounds",
    },
    "sampleAnswers": {
        "title": "Sample HR Round Answers",
        "answers": [
            {"question": "Tell me about yourself.", "answer": "I am a backend engineer..."},
            {"question": "Why should we hire you at Goldman Sachs?", "answer": "Because..."},
        ],
    },
    "studyPlan": {
        "title": "Customized 14-Day Study Plan",
        "plan": [
            {"days": "Day 1-3", "topic": "Arrays & Strings", "details": "Two pointers, sliding window."},
            {"days": "Day 4-6", "topic": "Trees & Graphs", "details": "BFS, DFS."},
        ],
    },
    "salaryRange": {
        "title": "Expected Salary Range (India, SDE-1)",
        "entryLevel": "₹20 - ₹28 LPA",
        "midLevel": "₹30 - ₹45 LPA",
        "freshers": "₹15 - ₹22 LPA",
        "note": "Salary ranges are estimates based on recent data.",
    },
}


@pytest.fixture
def guide_dict() -> Dict[str, Any]:
    """A fresh, schema-conformant prep guide in wire format."""
    return copy.deepcopy(SAMPLE_GUIDE)


@pytest.fixture
def guide_json(guide_dict) -> str:
    return json.dumps(guide_dict, ensure_ascii=False)


@pytest.fixture
def guide(guide_dict):
    from app.schemas.interview import PrepGuide
    return PrepGuide.model_validate(guide_dict)


# -----------------------------
# Test doubles
# -----------------------------
class FakeModels:
    """Stands in for genai.Client().models; records every call."""

    def __init__(
        self,
        text: Optional[str] = None,
        error: Optional[Exception] = None,
        sources: Tuple[Tuple[str, str], ...] = (),
        delay: float = 0.0,
    ):
        self.text = text
        self.error = error
        self.sources = sources
        self.delay = delay
        self.calls: List[Dict[str, Any]] = []

    def generate_content(self, *, model, contents, config):
        self.calls.append({"model": model, "contents": contents, "config": config})
        if self.delay:
            time.sleep(self.delay)
        if self.error is not None:
            raise self.error
        chunks = [SimpleNamespace(web=SimpleNamespace(uri=uri, title=title)) for uri, title in self.sources]
        candidate = SimpleNamespace(grounding_metadata=SimpleNamespace(grounding_chunks=chunks))
        return SimpleNamespace(text=self.text, candidates=[candidate])


class FakeGenAIClient:
    def __init__(self, **kwargs):
        self.models = FakeModels(**kwargs)


@pytest.fixture
def fake_genai():
    """Factory for fake genai clients."""
    return FakeGenAIClient
