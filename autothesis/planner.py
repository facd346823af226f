"""Research plans and their markdown rendering."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


def _string_list(data: dict[str, Any], key: str) -> list[str]:
    value = data.get(key)
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ValueError(f"field `{key}` must be a list of strings")
    return list(value)


@dataclass
class PlannerOutput:
    """A research plan produced by the planner."""

    research_goal: str
    subquestions: list[str] = field(default_factory=list)
    evidence_needed: list[str] = field(default_factory=list)
    priority_order: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, value: Any) -> PlannerOutput:
        """Build a plan from planner JSON, raising ValueError when malformed."""
        if not isinstance(value, dict):
            raise ValueError("planner output must be an object")
        goal = value.get("research_goal")
        if not isinstance(goal, str):
            raise ValueError("field `research_goal` must be a string")
        return cls(
            research_goal=goal,
            subquestions=_string_list(value, "subquestions"),
            evidence_needed=_string_list(value, "evidence_needed"),
            priority_order=_string_list(value, "priority_order"),
        )


def _bullets(items: list[str]) -> str:
    return "\n".join(f"- {item}" for item in items)


def plan_to_markdown(plan: PlannerOutput) -> str:
    """Render a plan as a markdown document."""
    return (
        f"# Research Goal\n\n{plan.research_goal}\n\n"
        f"## Subquestions\n{_bullets(plan.subquestions)}\n\n"
        f"## Evidence Needed\n{_bullets(plan.evidence_needed)}\n\n"
        f"## Priority Order\n{_bullets(plan.priority_order)}"
    )