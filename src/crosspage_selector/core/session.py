from __future__ import annotations

from typing import List, Optional, Tuple

from crosspage_selector.core.accumulator import CrossPageSelector
from crosspage_selector.core.models import (
    DEFAULT_PAGE_SIZE,
    PAGE_SIZE_OPTIONS,
    AccumulatorState,
    FetchCommand,
    FetchFailure,
    FetchResult,
    Page,
    Record,
    ViewState,
)
from crosspage_selector.core.pagination import PaginationController
from crosspage_selector.core.selection import SelectionSet
from crosspage_selector.utils.logging import get_logger


class BrowseSession:
    """
    The boundary the UI talks to.

    Holds the view, the selection and the accumulator, and never does I/O:
    operations that need data return FetchCommands for a runner to execute,
    and results come back through on_fetch_result(). Every command carries a
    sequence number; only the most recently issued one may be applied.
    """

    def __init__(
        self,
        page_size: int = DEFAULT_PAGE_SIZE,
        page_size_options: Tuple[int, ...] = PAGE_SIZE_OPTIONS,
    ):
        self.pagination = PaginationController(page_size=page_size, page_size_options=page_size_options)
        self.selection = SelectionSet()
        self.selector = CrossPageSelector(self.selection)
        self.page: Optional[Page] = None
        self.last_error: Optional[FetchFailure] = None
        self._seq = 0
        self._pending: Optional[int] = None
        self.log = get_logger("session")

    # ---------- Observables ----------

    @property
    def records(self) -> Tuple[Record, ...]:
        return self.page.items if self.page else ()

    @property
    def view(self) -> ViewState:
        return self.pagination.view

    @property
    def current_page(self) -> int:
        return self.pagination.current_page

    @property
    def total_pages(self) -> int:
        return self.pagination.total_pages

    @property
    def total_records(self) -> int:
        return self.pagination.total_records

    @property
    def selected_count(self) -> int:
        return len(self.selection)

    @property
    def accumulator_state(self) -> AccumulatorState:
        return self.selector.state

    @property
    def latest_seq(self) -> int:
        return self._seq

    @property
    def pending_seq(self) -> Optional[int]:
        """Sequence number of the in-flight fetch, if any."""
        return self._pending

    def all_on_page_selected(self) -> bool:
        return self.selection.all_selected(self.records)

    # ---------- User operations ----------

    def open(self) -> List[FetchCommand]:
        """Initial load of the current view."""
        return [self._issue()]

    def reload(self) -> List[FetchCommand]:
        """Re-request the current view, e.g. after a failed fetch."""
        return [self._issue()]

    def set_page_size(self, page_size: int) -> List[FetchCommand]:
        if not self.pagination.set_page_size(page_size):
            return []
        return [self._issue()]

    def go_to_page(self, page_number: int) -> List[FetchCommand]:
        if not self.pagination.go_to_page(page_number):
            return []
        return [self._issue()]

    def change_page(self, offset: int, page_size: int) -> List[FetchCommand]:
        """Paginator event carrying a new (offset, rows) pair."""
        if not self.pagination.request_page_change(offset, page_size):
            return []
        return [self._issue()]

    def next_page(self) -> List[FetchCommand]:
        return self.go_to_page(self.current_page + 1)

    def prev_page(self) -> List[FetchCommand]:
        return self.go_to_page(self.current_page - 1)

    def toggle_row(self, rid: int) -> bool:
        return self.selection.toggle(rid)

    def toggle_all_on_current_page(self) -> None:
        self.selection.toggle_all_on_page(self.records)

    def clear_selection(self) -> None:
        self.selection.clear()

    def select_next(self, n: int) -> List[FetchCommand]:
        """Select the next `n` unselected records, crossing pages as needed.

        The page already on screen is used right away unless a fetch is in
        flight, in which case selection starts when that fetch lands.
        """
        if not self.selector.start(n):
            return []
        if self.page is None or self._pending is not None:
            return []
        return self._after_page(self.page)

    # ---------- Fetch results ----------

    def on_fetch_result(self, seq: int, result: FetchResult) -> List[FetchCommand]:
        """Apply a fetch result; stale results are dropped."""
        if seq != self._seq:
            self.log.debug("Discarding stale result seq=%s (latest=%s)", seq, self._seq)
            return []

        self._pending = None

        if isinstance(result, FetchFailure):
            self.last_error = result
            self.log.warning(
                "Page %s (limit=%s) failed: %s", result.page_number, result.page_size, result.reason
            )
            return []

        self.page = result
        self.last_error = None
        self.pagination.apply_page(result)
        return self._after_page(result)

    def is_stale(self, seq: int) -> bool:
        return seq != self._seq

    # ---------- Internals ----------

    def _after_page(self, page: Page) -> List[FetchCommand]:
        if not self.selector.on_page_arrived(page, self.current_page):
            return []
        self.pagination.advance_page()
        return [self._issue()]

    def _issue(self) -> FetchCommand:
        self._seq += 1
        self._pending = self._seq
        cmd = FetchCommand(seq=self._seq, page_number=self.current_page, page_size=self.pagination.page_size)
        self.log.debug("Issuing fetch seq=%s page=%s limit=%s", cmd.seq, cmd.page_number, cmd.page_size)
        return cmd
