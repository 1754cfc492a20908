# parse/parsers.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from crosspage_selector.core.models import DEFAULT_TOTAL_RECORDS, Page, Record


class PageDecodeError(ValueError):
    """Raised when a response body cannot be turned into a Page."""


def _lookup(obj: Any, locator: str) -> Any:
    """Resolve a dot-path locator like "pagination.total"."""
    cur = obj
    for part in locator.split("."):
        if isinstance(cur, dict):
            cur = cur.get(part)
        else:
            return None
    return cur


@dataclass(frozen=True)
class FieldMapping:
    """Which response keys hold the record fields."""

    id: str = "id"
    title: str = "title"
    secondary_label: str = "artist_title"


class JsonPageParser:
    """Parser for paged JSON API responses of the form
    ``{"data": [...], "pagination": {"total": ..., ...}}``.

    Absent ``data`` is an empty page and absent ``pagination.total`` falls back
    to ``DEFAULT_TOTAL_RECORDS`` so the page count stays deterministic.
    """

    def __init__(
        self,
        fields: FieldMapping | None = None,
        items_locator: str = "data",
        total_locator: str = "pagination.total",
        default_total: int = DEFAULT_TOTAL_RECORDS,
    ):
        self.fields = fields or FieldMapping()
        self.items_locator = items_locator
        self.total_locator = total_locator
        self.default_total = default_total

    def parse_page(self, payload: Any, page_number: int, page_size: int) -> Page:
        """Decode one response body into a Page."""
        if not isinstance(payload, dict):
            raise PageDecodeError(f"expected a JSON object, got {type(payload).__name__}")

        raw_items = _lookup(payload, self.items_locator)
        if raw_items is None:
            raw_items = []
        if not isinstance(raw_items, list):
            raise PageDecodeError(f"{self.items_locator!r} is not a list")

        items = tuple(self.parse_record(obj) for obj in raw_items)
        return Page(
            items=items,
            page_number=page_number,
            page_size=page_size,
            total_records=self._total(payload),
        )

    def parse_record(self, obj: Any) -> Record:
        """Decode one item of the ``data`` array."""
        if not isinstance(obj, dict):
            raise PageDecodeError(f"record is not an object: {obj!r}")

        rid = obj.get(self.fields.id)
        if isinstance(rid, bool) or not isinstance(rid, int):
            raise PageDecodeError(f"record has no integer {self.fields.id!r}: {rid!r}")

        title = obj.get(self.fields.title)
        label = obj.get(self.fields.secondary_label)
        return Record(
            id=rid,
            title="" if title is None else str(title),
            secondary_label=None if label is None else str(label),
        )

    def _total(self, payload: Any) -> int:
        raw = _lookup(payload, self.total_locator)
        total: Optional[int]
        try:
            total = int(raw) if raw is not None else None
        except (TypeError, ValueError):
            total = None
        if total is None or total < 0:
            return self.default_total
        return total

