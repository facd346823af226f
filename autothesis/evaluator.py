"""Evaluator output: parsing, clamping and the baseline evaluation."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

_RUBRIC_FIELDS = (
    "evidence_coverage",
    "source_quality",
    "balance",
    "specificity",
    "decision_usefulness",
)


def _clamp(value: float, low: float = 0.0, high: float = 10.0) -> float:
    if math.isnan(value):
        return value
    return min(max(value, low), high)


def _number(data: dict[str, Any], key: str) -> float:
    if key not in data:
        raise ValueError(f"missing field `{key}`")
    value = data[key]
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"field `{key}` must be a number")
    return float(value)


def _flag(data: dict[str, Any], key: str) -> bool:
    if key not in data:
        raise ValueError(f"missing field `{key}`")
    value = data[key]
    if not isinstance(value, bool):
        raise ValueError(f"field `{key}` must be a boolean")
    return value


@dataclass
class EvaluationRubric:
    """Per-dimension scores on a 0-10 scale."""

    evidence_coverage: float
    source_quality: float
    balance: float
    specificity: float
    decision_usefulness: float


@dataclass
class EvaluatorOutput:
    """The evaluator's verdict on an iteration's draft."""

    improved: bool
    score: float
    rubric: EvaluationRubric
    reasoning: str
    should_continue: bool

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON form, with ``should_continue`` stored as ``continue``."""
        return {
            "improved": self.improved,
            "score": self.score,
            "rubric": {name: getattr(self.rubric, name) for name in _RUBRIC_FIELDS},
            "reasoning": self.reasoning,
            "continue": self.should_continue,
        }


def baseline_evaluation() -> EvaluatorOutput:
    """The evaluation given to the first iteration, which has no prior draft."""
    return EvaluatorOutput(
        improved=True,
        score=6.0,
        rubric=EvaluationRubric(*(6.0 for _ in _RUBRIC_FIELDS)),
        reasoning=(
            "Baseline iteration established the initial memo and remaining gaps "
            "should be iterated on."
        ),
        should_continue=True,
    )


def parse_evaluator_output(value: Any) -> EvaluatorOutput:
    """Parse evaluator JSON and clamp every score into [0, 10]."""
    if not isinstance(value, dict):
        raise ValueError("evaluator output must be an object")
    rubric_data = value.get("rubric")
    if not isinstance(rubric_data, dict):
        raise ValueError("missing or invalid field `rubric`")
    reasoning = value.get("reasoning")
    if not isinstance(reasoning, str):
        raise ValueError("missing or invalid field `reasoning`")
    rubric = EvaluationRubric(
        **{name: _clamp(_number(rubric_data, name)) for name in _RUBRIC_FIELDS}
    )
    return EvaluatorOutput(
        improved=_flag(value, "improved"),
        score=_clamp(_number(value, "score")),
        rubric=rubric,
        reasoning=reasoning,
        should_continue=_flag(value, "continue"),
    )