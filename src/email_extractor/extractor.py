"""Public entry point: find a contact email for one website."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, Literal

from .config import ExtractorConfig
from .fetchers import PageFetcher, RequestsDocumentFetcher, make_retry_session
from .logging_utils import get_logger
from .models import DocumentFetcher, FoundEmail
from .pipeline import SearchPipeline


class EmailExtractor:
    """Find contact email addresses on a website starting from ``url``.

    ``find_email()`` returns the joined addresses or ``False``. In silent
    mode (the default) unreachable pages are skipped; with
    ``silent_mode=False`` the requests errors of a failing fetch propagate.
    """

    def __init__(
        self,
        url: str,
        first_only: bool = False,
        silent_mode: bool = True,
        debug: bool = False,
        result_separator: str = ",",
        *,
        document_fetcher: DocumentFetcher | None = None,
        sleep_fn: Callable[[float], None] | None = None,
        logger: logging.Logger | None = None,
        **options: Any,
    ) -> None:
        self.config = ExtractorConfig(
            url=url,
            first_only=first_only,
            silent_mode=silent_mode,
            debug=debug,
            result_separator=result_separator,
            **options,
        )
        self._logger = logger or get_logger()
        self._document_fetcher = document_fetcher or RequestsDocumentFetcher(
            session=make_retry_session(self.config.user_agent),
            timeout=self.config.request_timeout,
        )
        self._sleep_fn = sleep_fn

    def extract(self) -> FoundEmail | None:
        """Run one search and return the emails with their location labels."""
        page_fetcher = self._build_page_fetcher()
        page = page_fetcher.open_with_retry(self.config.url)
        if page is None:
            self._trace("Could not open %s", self.config.url)
            return None
        pipeline = SearchPipeline(
            page_fetcher=page_fetcher, config=self.config, logger=self._logger
        )
        return pipeline.run(page)

    def find_email(self) -> str | Literal[False]:
        """Return the found email address(es) as one string, or False."""
        found = self.extract()
        if found is None:
            return False
        return found.emails

    def _build_page_fetcher(self) -> PageFetcher:
        kwargs: dict[str, Any] = {}
        if self._sleep_fn is not None:
            kwargs["sleep_fn"] = self._sleep_fn
        return PageFetcher(
            document_fetcher=self._document_fetcher,
            silent_mode=self.config.silent_mode,
            logger=self._logger,
            debug=self.config.debug,
            retry_delay=self.config.retry_delay,
            max_retries=self.config.max_retries,
            **kwargs,
        )

    def _trace(self, message: str, *args: object) -> None:
        if self.config.debug:
            self._logger.debug(message, *args)


def find_email(url: str, **kwargs: Any) -> str | Literal[False]:
    """Shortcut for ``EmailExtractor(url, **kwargs).find_email()``."""
    return EmailExtractor(url, **kwargs).find_email()
