'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.
'''
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time, timezone
from typing import Any, Dict, List

from core.ids import new_document_id
from core.outline import Outline

__all__ = [
    "Document",
    "journal_title",
    "start_of_day",
    "format_datetime",
    "parse_datetime",
]


def journal_title(day: date) -> str:
    """e.g. 'Monday, January 2, 2006'"""
    return f"{day.strftime('%A, %B')} {day.day}, {day.year}"


def start_of_day(day: date) -> datetime:
    """Local midnight of day, timezone-aware."""
    return datetime.combine(day, time()).astimezone()


def format_datetime(dt: datetime) -> str:
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.isoformat(timespec="seconds")


def parse_datetime(text: str) -> datetime:
    try:
        dt = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except (AttributeError, ValueError) as e:
        raise ValueError(f"Bad RFC 3339 date {text!r}: {e}") from e
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


@dataclass
class Document:
    """A titled, dated outline. Journals are keyed by their day."""
    title: str
    date: datetime
    outline: Outline = field(default_factory=Outline)
    is_journal: bool = False
    id: str = field(default_factory=new_document_id)

    @classmethod
    def new(cls, title: str, initial_content: str = "") -> "Document":
        return cls(title=title, date=datetime.now().astimezone(),
                   outline=Outline(initial_content=initial_content))

    @classmethod
    def new_journal(cls, day: date) -> "Document":
        return cls(title=journal_title(day), date=start_of_day(day), is_journal=True)

    @property
    def day(self) -> date:
        return self.date.date()

    # ---------- JSON records ----------

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "date": format_datetime(self.date),
            "is_journal": self.is_journal,
            "blocks": [
                {"id": block_id, "content": content, "indent": indent}
                for block_id, content, indent in self.outline.records()
            ],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Document":
        """Build a document from its JSON record; ValueError on bad fields."""
        try:
            doc_id = data["id"]
            title = data.get("title", "")
            blocks: List[Dict[str, Any]] = data.get("blocks") or []
            records = [(b["id"], b.get("content", ""), int(b.get("indent", 0))) for b in blocks]
        except (KeyError, TypeError) as e:
            raise ValueError(f"Malformed document record: {e}") from e

        if not isinstance(doc_id, str) or not doc_id:
            raise ValueError("Document record has no id")

        return cls(
            id=doc_id,
            title=title,
            date=parse_datetime(data.get("date") or format_datetime(datetime.now(timezone.utc))),
            is_journal=bool(data.get("is_journal", False)),
            outline=Outline(records),
        )

    def summary(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "date": format_datetime(self.date),
            "is_journal": self.is_journal,
        }

