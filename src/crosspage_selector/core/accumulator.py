from __future__ import annotations

from crosspage_selector.core.models import IDLE, Accumulating, AccumulatorState, Page
from crosspage_selector.core.selection import SelectionSet
from crosspage_selector.utils.logging import get_logger


class CrossPageSelector:
    """
    "Select the next N records" accumulator.

    Driven by one event, a page arriving. Each arrival selects unselected
    records from the page in source order until the target is met, then either
    finishes, asks the caller to advance to the next page, or stops quietly
    because the collection has run out.
    """

    def __init__(self, selection: SelectionSet):
        self.selection = selection
        self.state: AccumulatorState = IDLE
        self.log = get_logger("accumulator")

    @property
    def active(self) -> bool:
        return self.state.active

    @property
    def remaining(self) -> int:
        return self.state.remaining if isinstance(self.state, Accumulating) else 0

    def start(self, n: int) -> bool:
        """Begin accumulating `n` records. A new target replaces any running one."""
        if n <= 0:
            self.log.debug("Ignoring select-next request for n=%s", n)
            return False
        if self.active:
            self.log.info("Superseding select-next: remaining %s -> %s", self.remaining, n)
        self.state = Accumulating(n)
        return True

    def cancel(self) -> None:
        self.state = IDLE

    def on_page_arrived(self, page: Page, current_page: int) -> bool:
        """
        Select from `page` and decide what happens next.

        Args:
            page: The page that was just applied.
            current_page: The paginator's 1-based page number.

        Returns:
            True when the caller should advance to the next page and fetch it.
        """
        if not isinstance(self.state, Accumulating):
            return False

        remaining = self.state.remaining
        just_selected = 0
        for record in page.items:
            if just_selected >= remaining:
                break
            if self.selection.add(record.id):
                just_selected += 1

        remaining -= just_selected
        self.log.info(
            "Select-next on page %s: selected=%s remaining=%s", page.page_number, just_selected, max(0, remaining)
        )

        if remaining <= 0:
            self.state = IDLE
            return False

        if current_page < page.total_pages:
            self.state = Accumulating(remaining)
            return True

        # Collection exhausted; the request ends partially satisfied.
        self.log.info("Select-next stopped at last page %s with %s unselected", current_page, remaining)
        self.state = IDLE
        return False
