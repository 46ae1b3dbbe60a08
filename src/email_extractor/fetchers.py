"""HTTP page fetching and the retry/error recovery policy."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

from bs4 import BeautifulSoup
from requests import Session
from requests.adapters import HTTPAdapter
from requests.exceptions import ConnectionError as RequestsConnectionError
from requests.exceptions import (
    ChunkedEncodingError,
    ContentDecodingError,
    HTTPError,
    InvalidSchema,
    InvalidURL,
    MissingSchema,
    SSLError,
    Timeout,
    TooManyRedirects,
)
from urllib3.util.retry import Retry

from .config import DEFAULT_MAX_RETRIES, DEFAULT_RETRY_DELAY
from .models import DocumentFetcher

THROTTLED_STATUS = 429

# Failures that make one page unreachable without aborting the crawl.
RECOVERABLE_FETCH_ERRORS = (
    SSLError,
    RequestsConnectionError,
    Timeout,
    HTTPError,
    InvalidURL,
    MissingSchema,
    InvalidSchema,
    ContentDecodingError,
    ChunkedEncodingError,
    ConnectionError,
    TimeoutError,
    FileNotFoundError,
    UnicodeDecodeError,
)
FETCH_ERRORS = RECOVERABLE_FETCH_ERRORS + (TooManyRedirects,)


def make_retry_session(user_agent: str) -> Session:
    """Create requests session with transport-level retry defaults.

    429 is neither in the status list nor honoured through Retry-After:
    throttling is handled by PageFetcher alone.
    """
    session = Session()
    session.headers.update({"User-Agent": user_agent})
    retry = Retry(
        total=2,
        backoff_factor=0.6,
        status_forcelist=[500, 502, 503, 504],
        allowed_methods=frozenset({"GET"}),
        raise_on_status=False,
        respect_retry_after_header=False,
    )
    adapter = HTTPAdapter(max_retries=retry)
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    return session


def status_code_of(exc: BaseException) -> int | None:
    """Return the HTTP status attached to a requests error, if any."""
    response = getattr(exc, "response", None)
    if response is None:
        return None
    return getattr(response, "status_code", None)


class RequestsDocumentFetcher:
    """Fetch a URL with requests, following redirects, and parse it with BeautifulSoup."""

    def __init__(self, *, session: Session, timeout: float) -> None:
        self._session = session
        self._timeout = timeout

    def open(self, url: str | None) -> BeautifulSoup | None:
        if not url:
            return None
        response = self._session.get(url, timeout=self._timeout, allow_redirects=True)
        response.raise_for_status()
        return BeautifulSoup(response.content, "html.parser")


class PageFetcher:
    """Apply the silent/strict error policy and bounded 429 retries to a DocumentFetcher.

    ``retries`` counts consecutive throttled attempts for the URL being
    fetched. It returns to zero after a success or after giving up, so one
    page's throttling never eats into the budget of the next.
    """

    def __init__(
        self,
        *,
        document_fetcher: DocumentFetcher,
        silent_mode: bool,
        logger: logging.Logger,
        debug: bool = False,
        retry_delay: float = DEFAULT_RETRY_DELAY,
        max_retries: int = DEFAULT_MAX_RETRIES,
        sleep_fn: Callable[[float], None] = time.sleep,
    ) -> None:
        self._document_fetcher = document_fetcher
        self._silent_mode = silent_mode
        self._logger = logger
        self._debug = debug
        self._retry_delay = retry_delay
        self._max_retries = max_retries
        self._sleep = sleep_fn
        self.retries = 0

    def open_with_retry(self, url: str | None) -> BeautifulSoup | None:
        while True:
            try:
                self._trace("Opening page: %s", url)
                page = self._document_fetcher.open(url)
            except TooManyRedirects as exc:
                if not (self._silent_mode or "redirect" in str(exc).lower()):
                    raise
                self._trace("Error: %s", exc)
                self.retries = 0
                return None
            except RECOVERABLE_FETCH_ERRORS as exc:
                if not self._silent_mode:
                    raise
                self._trace("Error: %s", exc)
                if status_code_of(exc) == THROTTLED_STATUS:
                    self.retries += 1
                    if self.retries < self._max_retries:
                        self._sleep(self._retry_delay)
                        continue
                    self._trace("Giving up on %s after %d throttled attempts", url, self.retries)
                self.retries = 0
                return None
            self.retries = 0
            return page

    def _trace(self, message: str, *args: object) -> None:
        if self._debug:
            self._logger.debug(message, *args)
