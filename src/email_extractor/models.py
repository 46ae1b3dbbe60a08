"""Protocols and lightweight model types."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

from bs4 import BeautifulSoup


class DocumentFetcher(Protocol):
    """Contract for fetch-and-parse collaborators."""

    def open(self, url: str | None) -> BeautifulSoup | None:
        """Return the parsed page, None for an empty URL, or raise a fetch error."""


class PageOpener(Protocol):
    """Contract for fetchers applying the retry/error policy."""

    def open_with_retry(self, url: str | None) -> BeautifulSoup | None:
        """Return the parsed page or None when it could not be reached."""


@dataclass(frozen=True)
class FoundEmail:
    """Signal that ends a search: the joined emails and where they were found."""

    emails: str
    location: str

    def __post_init__(self) -> None:
        if not self.emails:
            raise ValueError("FoundEmail requires at least one email.")


@dataclass
class ResultAccumulator:
    """Index-correlated findings of one run: ``emails[i]`` came from ``locations[i]``."""

    emails: list[str] = field(default_factory=list)
    locations: list[str] = field(default_factory=list)

    def record(self, emails: str, location: str) -> None:
        self.emails.append(emails)
        self.locations.append(location)

    def __len__(self) -> int:
        return len(self.emails)
