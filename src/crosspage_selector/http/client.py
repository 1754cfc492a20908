from __future__ import annotations

from typing import Protocol

import requests

from crosspage_selector.core.models import RequestSpec
from crosspage_selector.http.policies import RetryPolicy, backoff_sleep
from crosspage_selector.http.response import HttpResponse
from crosspage_selector.utils.logging import get_logger


class HttpClient(Protocol):
    """Protocol for HTTP clients."""

    def send(self, req: RequestSpec) -> HttpResponse: ...


class RequestsHttpClient:
    """HTTP client using the requests library."""

    def __init__(
        self,
        timeout_s: float = 30,
        retry: RetryPolicy | None = None,
        session: requests.Session | None = None,
    ):
        self.session = session or requests.Session()
        self.timeout_s = timeout_s
        self.retry = retry or RetryPolicy()
        self.log = get_logger("http")

    def send(self, req: RequestSpec) -> HttpResponse:
        """Send an HTTP request, retrying as the policy allows.

        Transport exceptions from the final attempt propagate to the caller.
        """
        for attempt in range(self.retry.max_attempts):
            try:
                r = self.session.request(
                    method=req.method,
                    url=req.url,
                    headers=req.headers,
                    params=req.params,
                    timeout=self.timeout_s,
                )
                ct = r.headers.get("Content-Type", "")

                js = None
                if "json" in ct.lower():
                    try:
                        js = r.json()
                    except ValueError:
                        js = None

                resp = HttpResponse(status_code=r.status_code, headers=dict(r.headers), text=r.text, json=js)

                if resp.status_code in self.retry.retry_statuses and self.retry.should_retry(attempt):
                    self.log.warning("Retrying %s (status=%s, attempt=%s)", req.url, resp.status_code, attempt + 1)
                    backoff_sleep(self.retry, attempt)
                    continue

                return resp

            except requests.RequestException as e:
                if self.retry.should_retry(attempt):
                    self.log.warning("Retrying %s (exception=%s, attempt=%s)", req.url, type(e).__name__, attempt + 1)
                    backoff_sleep(self.retry, attempt)
                    continue
                raise

        # unreachable: RetryPolicy guarantees max_attempts >= 1
        raise AssertionError("retry loop exited without a response")
