from __future__ import annotations

from typing import Any, Dict, Protocol

import requests

from crosspage_selector.core.models import FetchFailure, FetchResult, RequestSpec
from crosspage_selector.http.client import HttpClient
from crosspage_selector.parse.parsers import JsonPageParser, PageDecodeError
from crosspage_selector.utils.logging import get_logger


class PageSource(Protocol):
    """Protocol for anything that can fetch one page of the collection."""

    def fetch(self, page_number: int, page_size: int) -> FetchResult: ...


class PageFetcher:
    """Issues one paged query against a JSON API and decodes the result.

    Stateless apart from its collaborators: every call re-queries the source.
    Failures come back as FetchFailure values instead of exceptions.
    """

    def __init__(
        self,
        client: HttpClient,
        base_url: str,
        parser: JsonPageParser | None = None,
        headers: Dict[str, str] | None = None,
        params: Dict[str, Any] | None = None,
        page_param: str = "page",
        limit_param: str = "limit",
    ):
        self.client = client
        self.base_url = base_url
        self.parser = parser or JsonPageParser()
        self.headers = dict(headers or {})
        self.params = dict(params or {})
        self.page_param = page_param
        self.limit_param = limit_param
        self.log = get_logger("fetch")

    def build_request(self, page_number: int, page_size: int) -> RequestSpec:
        params = {**self.params, self.page_param: page_number, self.limit_param: page_size}
        return RequestSpec(url=self.base_url, headers=self.headers, params=params)

    def fetch(self, page_number: int, page_size: int) -> FetchResult:
        """Fetch page `page_number` (1-based) with `page_size` rows."""
        if page_number < 1:
            raise ValueError("page_number must be >= 1")
        if page_size <= 0:
            raise ValueError("page_size must be > 0")

        req = self.build_request(page_number, page_size)
        self.log.debug("Fetching page=%s limit=%s from %s", page_number, page_size, req.url)

        try:
            resp = self.client.send(req)
        except requests.RequestException as e:
            return self._failure(page_number, page_size, str(e) or type(e).__name__, type(e).__name__)

        if not resp.ok:
            return self._failure(page_number, page_size, f"HTTP {resp.status_code}", "HttpStatusError")
        if resp.json is None:
            return self._failure(page_number, page_size, "response body is not JSON", "PageDecodeError")

        try:
            page = self.parser.parse_page(resp.json, page_number, page_size)
        except PageDecodeError as e:
            return self._failure(page_number, page_size, str(e), "PageDecodeError")

        self.log.info(
            "Fetched page %s/%s (limit=%s, items=%s, total=%s)",
            page.page_number,
            page.total_pages,
            page.page_size,
            len(page.items),
            page.total_records,
        )
        return page

    def _failure(self, page_number: int, page_size: int, reason: str, error_type: str) -> FetchFailure:
        self.log.warning("Fetch failed for page=%s limit=%s: %s (%s)", page_number, page_size, reason, error_type)
        return FetchFailure(page_number=page_number, page_size=page_size, reason=reason, error_type=error_type)
