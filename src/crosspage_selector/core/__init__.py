from crosspage_selector.core.accumulator import CrossPageSelector
from crosspage_selector.core.pagination import PaginationController, to_page
from crosspage_selector.core.selection import SelectionSet
from crosspage_selector.core.session import BrowseSession

__all__ = [
    "BrowseSession",
    "CrossPageSelector",
    "PaginationController",
    "SelectionSet",
    "to_page",
]
