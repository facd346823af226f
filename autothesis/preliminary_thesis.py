"""Preliminary theses produced during scanning."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from autothesis.signal_detector import ScanSignal

_CATALYST_TYPES = frozenset({"earnings_catalyst", "analyst_activity"})


@dataclass
class PreliminaryThesisOutput:
    """A short thesis drafted from scan signals."""

    thesis_markdown: str
    key_catalysts: str
    risk_factors: str
    quality_score: float

    @classmethod
    def from_dict(cls, value: Any) -> PreliminaryThesisOutput:
        """Build a thesis from JSON, raising ValueError when malformed."""
        if not isinstance(value, dict):
            raise ValueError("preliminary thesis must be an object")
        texts = {}
        for key in ("thesis_markdown", "key_catalysts", "risk_factors"):
            text = value.get(key)
            if not isinstance(text, str):
                raise ValueError(f"field `{key}` must be a string")
            texts[key] = text
        score = value.get("quality_score")
        if isinstance(score, bool) or not isinstance(score, (int, float)):
            raise ValueError("field `quality_score` must be a number")
        return cls(quality_score=float(score), **texts)


def fallback_thesis(
    ticker: str, signals: Sequence[ScanSignal]
) -> PreliminaryThesisOutput:
    """A placeholder thesis listing the detected signals."""
    signal_summary = "\n".join(
        f"- {s.signal_type}: {s.description} (strength: {s.strength:.1f})"
        for s in signals
    )
    thesis = (
        f"# Preliminary Thesis for {ticker}\n\n"
        "## Summary\n\n"
        "This is a preliminary thesis generated for scanning purposes. "
        "Further research is recommended.\n\n"
        f"## Detected Signals\n\n{signal_summary}\n\n"
        "## Next Steps\n\n"
        "Run a full research iteration to develop a comprehensive thesis."
    )
    key_catalysts = "; ".join(
        s.description for s in signals if s.signal_type in _CATALYST_TYPES
    )
    return PreliminaryThesisOutput(
        thesis_markdown=thesis,
        key_catalysts=key_catalysts or "None identified in scan",
        risk_factors="Insufficient data for risk assessment. Full research required.",
        quality_score=3.0,
    )