"""Source records and the evidence notes read from them."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from typing import Any

MAX_CONCURRENT_FETCHES = 6
"""Upper bound on source fetches in flight at once per iteration."""

PROMPT_TEXT_LIMIT = 4_000
FALLBACK_NOTE_EXCERPT = 220
SOURCE_EXCERPT_LENGTH = 400


@dataclass
class SourceRecord:
    """A source selected for a research iteration."""

    id: str
    url: str
    title: str | None = None
    domain: str | None = None
    raw_text: str | None = None
    excerpt: str | None = None
    source_type: str | None = None
    quality_score: float | None = None
    fetched_at: datetime | None = None


@dataclass
class EvidenceNoteInput:
    """An evidence note about one source, ready to store."""

    source_id: str
    note_markdown: str
    claim_type: str


@dataclass
class SourceForPrompt:
    """The view of a source that is handed to the reader prompt."""

    source_id: str
    title: str | None
    url: str
    source_type: str | None
    text: str

    @classmethod
    def from_source(cls, source: SourceRecord) -> SourceForPrompt:
        """Prefer the raw text, fall back to the excerpt, and cap the length."""
        if source.raw_text is not None:
            text = source.raw_text
        elif source.excerpt is not None:
            text = source.excerpt
        else:
            text = "No extractable text available."
        return cls(
            source_id=source.id,
            title=source.title,
            url=source.url,
            source_type=source.source_type,
            text=excerpt_from_text(text, PROMPT_TEXT_LIMIT),
        )


def excerpt_from_text(value: str, max_chars: int) -> str:
    """The first ``max_chars`` characters of ``value``."""
    return value[:max_chars]


def fallback_notes(sources: Iterable[SourceRecord]) -> list[EvidenceNoteInput]:
    """One plain fact note per source, used when the reader cannot answer."""
    notes = []
    for source in sources:
        if source.excerpt is not None:
            content = source.excerpt
        elif source.raw_text is not None:
            content = source.raw_text
        else:
            content = "No extractable text was available."
        note = (
            f"- Fact: {excerpt_from_text(content, FALLBACK_NOTE_EXCERPT)}\n"
            "- Open question: Validate this source directly if the memo depends "
            "on detailed numbers."
        )
        notes.append(
            EvidenceNoteInput(source_id=source.id, note_markdown=note, claim_type="fact")
        )
    return notes


def _note_from_dict(value: Any) -> EvidenceNoteInput:
    if not isinstance(value, dict):
        raise ValueError("evidence note must be an object")
    fields = {}
    for key in ("source_id", "note_markdown", "claim_type"):
        item = value.get(key)
        if not isinstance(item, str):
            raise ValueError(f"field `{key}` must be a string")
        fields[key] = item
    return EvidenceNoteInput(**fields)


def parse_reader_output(value: Any) -> list[EvidenceNoteInput]:
    """Parse the reader's JSON reply into evidence notes."""
    if not isinstance(value, dict) or not isinstance(value.get("notes"), list):
        raise ValueError("field `notes` must be a list")
    return [_note_from_dict(item) for item in value["notes"]]