"""Pagination math and bounds checking.

The paginator speaks in zero-based record offsets while the data source speaks
in 1-based page numbers. Keep the conversion here so callers don't re-implement
it differently.
"""

from __future__ import annotations

from typing import Tuple

from crosspage_selector.core.models import (
    DEFAULT_PAGE_SIZE,
    PAGE_SIZE_OPTIONS,
    Page,
    ViewState,
    ceil_div,
)
from crosspage_selector.utils.logging import get_logger


def to_page(offset: int, page_size: int) -> int:
    """Convert a zero-based offset to a 1-based page number."""
    if offset < 0:
        raise ValueError("offset must be >= 0")
    if page_size <= 0:
        raise ValueError("page_size must be > 0")
    return offset // page_size + 1


def total_pages_for(total_records: int, page_size: int) -> int:
    if page_size <= 0:
        raise ValueError("page_size must be > 0")
    return ceil_div(max(0, total_records), page_size)


class PaginationController:
    """Owns the view state (offset, page size) and the last known record total."""

    def __init__(
        self,
        page_size: int = DEFAULT_PAGE_SIZE,
        page_size_options: Tuple[int, ...] = PAGE_SIZE_OPTIONS,
    ):
        if page_size not in page_size_options:
            raise ValueError(f"page_size must be one of {page_size_options}")
        self.page_size_options = tuple(page_size_options)
        self.view = ViewState(offset=0, page_size=page_size)
        self.total_records = 0
        self.log = get_logger("pagination")

    @property
    def offset(self) -> int:
        return self.view.offset

    @property
    def page_size(self) -> int:
        return self.view.page_size

    @property
    def current_page(self) -> int:
        return self.view.page_number

    @property
    def total_pages(self) -> int:
        return total_pages_for(self.total_records, self.page_size)

    def apply_page(self, page: Page) -> None:
        """Take the record total from a freshly applied page."""
        self.total_records = page.total_records

    def request_page_change(self, new_offset: int, new_page_size: int) -> bool:
        """Move to (new_offset, new_page_size) if the resulting page is in range.

        Out-of-range requests and unlisted page sizes are ignored: nothing
        changes and False is returned.
        """
        if new_offset < 0 or new_page_size not in self.page_size_options:
            self.log.debug("Rejected page change: offset=%s page_size=%s", new_offset, new_page_size)
            return False

        new_page = to_page(new_offset, new_page_size)
        if not 1 <= new_page <= self.total_pages:
            self.log.debug(
                "Rejected page change: page %s outside [1, %s]", new_page, self.total_pages
            )
            return False

        self.view = ViewState(offset=new_offset, page_size=new_page_size)
        return True

    def go_to_page(self, page_number: int) -> bool:
        """Jump to a 1-based page at the current page size."""
        if page_number < 1:
            self.log.debug("Rejected page change: page %s", page_number)
            return False
        return self.request_page_change((page_number - 1) * self.page_size, self.page_size)

    def set_page_size(self, page_size: int) -> bool:
        """Switch rows per page and go back to the first record."""
        if page_size not in self.page_size_options:
            self.log.debug("Rejected page size %s (options=%s)", page_size, self.page_size_options)
            return False
        self.view = ViewState(offset=0, page_size=page_size)
        return True

    def advance_page(self) -> int:
        """Step forward one page. Not bounds-checked; callers check first."""
        self.view = ViewState(offset=self.offset + self.page_size, page_size=self.page_size)
        return self.offset

    def has_next_page(self) -> bool:
        return self.current_page < self.total_pages
