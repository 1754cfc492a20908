from __future__ import annotations

from dataclasses import dataclass

from crosspage_selector.config_models import DEFAULT_HEADERS, BrowserConfig
from crosspage_selector.core.runner import SessionRunner
from crosspage_selector.core.session import BrowseSession
from crosspage_selector.fetch.fetcher import PageFetcher
from crosspage_selector.http.client import HttpClient, RequestsHttpClient
from crosspage_selector.http.policies import RetryPolicy
from crosspage_selector.parse.parsers import FieldMapping, JsonPageParser


@dataclass(frozen=True)
class BuiltComponents:
    client: HttpClient
    fetcher: PageFetcher
    session: BrowseSession
    runner: SessionRunner


class ComponentFactory:
    """
    Factory responsible for wiring dependencies.
    Keeps main.py clean and lets tests swap the HTTP client.
    """

    def __init__(self, config: BrowserConfig, client: HttpClient | None = None):
        self.config = config
        self._client = client

    def build(self) -> BuiltComponents:
        """Build the client, fetcher, session and runner for one browse session."""
        client = self._http_client()
        fetcher = self._fetcher(client)
        session = self._session()
        runner = self._runner(session, fetcher)
        return BuiltComponents(client=client, fetcher=fetcher, session=session, runner=runner)

    # ---------- Builders (private) ----------

    def _http_client(self) -> HttpClient:
        if self._client is not None:
            return self._client
        retry = self.config.source.retry
        return RequestsHttpClient(
            timeout_s=self.config.source.timeout_s,
            retry=RetryPolicy(
                max_attempts=retry.max_attempts,
                base_delay_s=retry.base_delay_s,
                jitter_s=retry.jitter_s,
                retry_statuses=tuple(retry.retry_statuses),
            ),
        )

    def _parser(self) -> JsonPageParser:
        src = self.config.source
        return JsonPageParser(
            fields=FieldMapping(**src.fields.model_dump()),
            default_total=src.default_total,
        )

    def _fetcher(self, client: HttpClient) -> PageFetcher:
        src = self.config.source
        return PageFetcher(
            client=client,
            base_url=src.base_url,
            parser=self._parser(),
            headers={**DEFAULT_HEADERS, **src.headers},
            params=src.params,
            page_param=src.page_param,
            limit_param=src.limit_param,
        )

    def _session(self) -> BrowseSession:
        view = self.config.view
        return BrowseSession(page_size=view.page_size, page_size_options=tuple(view.page_size_options))

    def _runner(self, session: BrowseSession, fetcher: PageFetcher) -> SessionRunner:
        view = self.config.view
        return SessionRunner(session, fetcher, delay_ms=view.delay_ms, max_fetches=view.max_fetches)
