from __future__ import annotations

from collections import deque
from typing import Deque, Iterable, List, Optional

from crosspage_selector.core.models import FetchCommand, FetchFailure, RunnerReport
from crosspage_selector.core.session import BrowseSession
from crosspage_selector.fetch.fetcher import PageSource
from crosspage_selector.http.policies import RateLimiter
from crosspage_selector.utils.logging import get_logger


class SessionRunner:
    """
    Executes the fetch commands a BrowseSession hands out and feeds the
    results back, following any commands those results produce (a select-next
    walking forward page by page).
    """

    def __init__(
        self,
        session: BrowseSession,
        source: PageSource,
        delay_ms: int = 0,
        max_fetches: Optional[int] = None,
    ):
        """
        Args:
            session: The session to drive.
            source: Where pages come from.
            delay_ms: Pause between chained fetches within one dispatch.
            max_fetches: Upper bound on fetches per dispatch call; None for no bound.
        """
        self.session = session
        self.source = source
        self.limiter = RateLimiter(delay_ms)
        self.max_fetches = max_fetches
        self.report = RunnerReport()
        self.deferred: List[FetchCommand] = []
        self.log = get_logger("runner")

    def dispatch(self, commands: Iterable[FetchCommand]) -> List[FetchCommand]:
        """Run deferred commands, then `commands`, and their follow-ups in issue order.

        Commands left over once max_fetches is reached are kept in `deferred`
        and resumed by the next dispatch. Returns those leftovers.
        """
        pending = self.deferred + [c for c in commands if c not in self.deferred]
        queue: Deque[FetchCommand] = deque(c for c in pending if not self.session.is_stale(c.seq))
        self.deferred = []
        fetched = 0

        while queue:
            if self.max_fetches is not None and fetched >= self.max_fetches:
                self.deferred = list(queue)
                self.log.warning("Fetch limit %s reached; %s command(s) deferred", self.max_fetches, len(queue))
                return list(self.deferred)

            cmd = queue.popleft()
            if fetched:
                self.limiter.sleep()
            queue.extend(self.execute(cmd))
            fetched += 1

        return []

    def execute(self, cmd: FetchCommand) -> List[FetchCommand]:
        """Fetch one command's page and hand the result to the session."""
        result = self.source.fetch(cmd.page_number, cmd.page_size)
        self.report.fetches_issued += 1

        if self.session.is_stale(cmd.seq):
            self.report.stale_discarded += 1
        elif isinstance(result, FetchFailure):
            self.report.bump_failure(result.error_type)
        else:
            self.report.pages_applied += 1

        return self.session.on_fetch_result(cmd.seq, result)

    # ---------- Convenience wrappers for the UI layer ----------

    def open(self) -> None:
        self.dispatch(self.session.open())

    def reload(self) -> None:
        self.dispatch(self.session.reload())

    def set_page_size(self, page_size: int) -> bool:
        cmds = self.session.set_page_size(page_size)
        self.dispatch(cmds)
        return bool(cmds)

    def go_to_page(self, page_number: int) -> bool:
        cmds = self.session.go_to_page(page_number)
        self.dispatch(cmds)
        return bool(cmds)

    def select_next(self, n: int) -> None:
        self.dispatch(self.session.select_next(n))
