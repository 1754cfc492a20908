from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple, Union

PAGE_SIZE_OPTIONS: Tuple[int, ...] = (5, 10, 20)
DEFAULT_PAGE_SIZE = 10
DEFAULT_TOTAL_RECORDS = 100
UNKNOWN_LABEL = "Unknown"


def ceil_div(total: int, size: int) -> int:
    """Integer ceiling of total / size."""
    return -(-total // size)


@dataclass(frozen=True)
class RequestSpec:
    """Specification for an HTTP request."""

    url: str
    method: str = "GET"
    headers: Dict[str, str] = field(default_factory=dict)
    params: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Record:
    """One item of the browsable collection."""

    id: int
    title: str
    secondary_label: Optional[str] = None

    @property
    def display_label(self) -> str:
        return self.secondary_label if self.secondary_label else UNKNOWN_LABEL


@dataclass(frozen=True)
class Page:
    """One fetched slice of the collection plus its pagination metadata."""

    items: Tuple[Record, ...]
    page_number: int
    page_size: int
    total_records: int

    @property
    def total_pages(self) -> int:
        return ceil_div(self.total_records, self.page_size)

    @property
    def ids(self) -> Tuple[int, ...]:
        return tuple(r.id for r in self.items)


@dataclass(frozen=True)
class FetchFailure:
    """A transport or decode failure for one page request."""

    page_number: int
    page_size: int
    reason: str
    error_type: str = "FetchError"


FetchResult = Union[Page, FetchFailure]


@dataclass(frozen=True)
class FetchCommand:
    """A fetch the session wants issued, tagged with its sequence number."""

    seq: int
    page_number: int
    page_size: int


@dataclass(frozen=True)
class ViewState:
    """Paginator position: zero-based record offset and rows per page."""

    offset: int = 0
    page_size: int = DEFAULT_PAGE_SIZE

    @property
    def page_number(self) -> int:
        return self.offset // self.page_size + 1


@dataclass(frozen=True)
class Idle:
    """Accumulator is not collecting."""

    @property
    def active(self) -> bool:
        return False


@dataclass(frozen=True)
class Accumulating:
    """Accumulator still needs `remaining` records selected."""

    remaining: int

    @property
    def active(self) -> bool:
        return True


AccumulatorState = Union[Idle, Accumulating]
IDLE = Idle()


@dataclass
class RunnerReport:
    """Summary of the fetches a runner has executed."""

    fetches_issued: int = 0
    pages_applied: int = 0
    stale_discarded: int = 0
    failures: Dict[str, int] = field(default_factory=dict)

    def bump_failure(self, key: str) -> None:
        """Increment the count for a specific failure type."""
        self.failures[key] = self.failures.get(key, 0) + 1
