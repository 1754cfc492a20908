from __future__ import annotations

from typing import Dict, Iterable, Iterator, List

from crosspage_selector.core.models import Record


class SelectionSet:
    """Session-scoped set of selected record ids.

    Backed by a dict so membership is constant time and insertion order is kept
    for listing.
    """

    def __init__(self, ids: Iterable[int] = ()):
        self._ids: Dict[int, None] = dict.fromkeys(ids)

    def __contains__(self, rid: object) -> bool:
        return rid in self._ids

    def __len__(self) -> int:
        return len(self._ids)

    def __iter__(self) -> Iterator[int]:
        return iter(list(self._ids))

    def contains(self, rid: int) -> bool:
        return rid in self._ids

    def ids(self) -> List[int]:
        """Selected ids in the order they were selected."""
        return list(self._ids)

    def add(self, rid: int) -> bool:
        """Select `rid`; returns False if it was already selected."""
        if rid in self._ids:
            return False
        self._ids[rid] = None
        return True

    def discard(self, rid: int) -> None:
        self._ids.pop(rid, None)

    def toggle(self, rid: int) -> bool:
        """Flip membership of `rid`; returns the new membership."""
        if rid in self._ids:
            del self._ids[rid]
            return False
        self._ids[rid] = None
        return True

    def all_selected(self, items: Iterable[Record]) -> bool:
        """True when every item is selected. An empty page is never 'all selected'."""
        items = list(items)
        return bool(items) and all(r.id in self._ids for r in items)

    def toggle_all_on_page(self, items: Iterable[Record]) -> None:
        """Deselect the whole page if it is fully selected, otherwise select all of it."""
        items = list(items)
        if self.all_selected(items):
            for r in items:
                self.discard(r.id)
        else:
            for r in items:
                self.add(r.id)

    def clear(self) -> None:
        self._ids.clear()
