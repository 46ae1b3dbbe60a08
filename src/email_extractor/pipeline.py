"""Prioritized contact-email search over a site's root page and its sub-pages."""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import Enum

from bs4 import BeautifulSoup

from .config import ExtractorConfig
from .extraction import (
    dedupe_preserve_order,
    emails_from_mailto_anchors,
    extract_from_mailto_links,
    extract_from_page_text,
    find_contact_anchor,
)
from .links import contact_link_labels, is_fragment_link, resolve_absolute, should_ignore
from .models import FoundEmail, PageOpener, ResultAccumulator

MAILTO_LOCATION = "mailto links"
PAGE_TEXT_LOCATION = "whole page text"

Heuristic = Callable[[BeautifulSoup], FoundEmail | None]


class SearchState(Enum):
    NOT_STARTED = "not_started"
    SEARCHING = "searching"
    FOUND = "found"
    EXHAUSTED = "exhausted"


class SearchPipeline:
    """Run the search heuristics in priority order for one extraction run.

    Heuristics return a ``FoundEmail`` only to stop the whole search, which
    happens in first-match mode. Otherwise findings land in ``result`` and
    the first heuristic that records anything is the last one run, unless
    ``run_all_heuristics`` is configured.

    A pipeline instance holds per-run state and must not be reused.
    """

    def __init__(
        self,
        *,
        page_fetcher: PageOpener,
        config: ExtractorConfig,
        logger: logging.Logger,
    ) -> None:
        self._page_fetcher = page_fetcher
        self._config = config
        self._logger = logger
        self._visited: set[str] = set()
        self.result = ResultAccumulator()
        self.state = SearchState.NOT_STARTED

    def run(self, page: BeautifulSoup) -> FoundEmail | None:
        """Search the root page and return the final signal, or None when exhausted."""
        self.state = SearchState.SEARCHING
        heuristics: tuple[Heuristic, ...] = (
            self.search_mailto_links,
            self.search_page_text,
            self.search_menu_for_contact_link,
            self.scan_all_links,
        )
        for heuristic in heuristics:
            recorded_before = len(self.result)
            signal = heuristic(page)
            if signal is not None:
                return self._finish(signal)
            if len(self.result) > recorded_before and not self._config.run_all_heuristics:
                break

        if not self.result:
            self.state = SearchState.EXHAUSTED
            self._trace("Email not found anywhere")
            return None
        return self._finish(
            FoundEmail(
                emails=self._config.joiner.join(dedupe_preserve_order(self.result.emails)),
                location=", ".join(dedupe_preserve_order(self.result.locations)),
            )
        )

    def search_mailto_links(
        self, page: BeautifulSoup, location: str = MAILTO_LOCATION
    ) -> FoundEmail | None:
        self._trace("Searching for mailto links in %s", location)
        emails = extract_from_mailto_links(page, self._config.result_separator)
        return self._record(emails, location)

    def search_page_text(
        self, page: BeautifulSoup, location: str = PAGE_TEXT_LOCATION
    ) -> FoundEmail | None:
        self._trace("Searching for emails in %s", location)
        emails = extract_from_page_text(page, self._config.result_separator)
        return self._record(emails, location)

    def search_menu_for_contact_link(self, page: BeautifulSoup) -> FoundEmail | None:
        """Follow the first anchor labelled with each contact word, one level deep."""
        self._trace("Searching menu for contact link")
        for label in contact_link_labels():
            anchor = find_contact_anchor(page, label)
            if anchor is None:
                continue
            url = str(anchor.get("href") or "")
            if not url or is_fragment_link(url):
                continue
            signal = self._switch_page_and_search(url)
            if signal is not None:
                return signal
        return None

    def scan_all_links(self, page: BeautifulSoup) -> FoundEmail | None:
        """Visit every non-ignored link of the root page."""
        self._trace("Crawling all links")
        for anchor in page.find_all("a"):
            url = anchor.get("href")
            if should_ignore(url):
                continue
            url = str(url)
            if "mailto:" in url.lower():
                emails = emails_from_mailto_anchors([anchor])
                signal = self._record(self._config.joiner.join(emails), MAILTO_LOCATION)
            else:
                signal = self._switch_page_and_search(url)
            if signal is not None:
                return signal
        return None

    def _switch_page_and_search(self, url: str) -> FoundEmail | None:
        absolute = resolve_absolute(url, self._config.url)
        if absolute in self._visited:
            return None
        self._visited.add(absolute)
        self._trace("Switching page to: %s", absolute)
        page = self._page_fetcher.open_with_retry(absolute)
        if page is None:
            return None
        signal = self.search_mailto_links(page, f"{MAILTO_LOCATION} on {absolute}")
        if signal is not None:
            return signal
        return self.search_page_text(page, f"{PAGE_TEXT_LOCATION} on {absolute}")

    def _record(self, emails: str, location: str) -> FoundEmail | None:
        if not emails:
            return None
        self.result.record(emails, location)
        self._trace("Recorded %s from %s", emails, location)
        if self._config.first_only:
            return FoundEmail(emails=emails, location=location)
        return None

    def _finish(self, signal: FoundEmail) -> FoundEmail:
        self.state = SearchState.FOUND
        self._trace("Found email in: %s", signal.location)
        return signal

    def _trace(self, message: str, *args: object) -> None:
        if self._config.debug:
            self._logger.debug(message, *args)
