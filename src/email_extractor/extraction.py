"""Pure email extraction helpers working on parsed pages."""

from __future__ import annotations

import re
from collections.abc import Iterable

from bs4 import BeautifulSoup
from bs4.element import Tag

EMAIL_REGEX = re.compile(r"[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,6}")

# Image assets that look like addresses, e.g. "ajax-loader@2x.gif".
FALSE_POSITIVE_PATTERNS = [
    re.compile(r"ajax-loader@2x\.gif", re.IGNORECASE),
    re.compile(r"@\d+x\.(?:png|jpe?g|gif|svg|webp)$", re.IGNORECASE),
]

MAILTO_SELECTOR = 'a[href^="mailto:"]'


def dedupe_preserve_order(items: Iterable[str]) -> list[str]:
    """Dedupe values while preserving first-seen order."""
    output: list[str] = []
    seen: set[str] = set()
    for item in items:
        if item in seen:
            continue
        seen.add(item)
        output.append(item)
    return output


def is_false_positive(candidate: str) -> bool:
    return any(pattern.search(candidate) for pattern in FALSE_POSITIVE_PATTERNS)


def emails_from_mailto_anchors(anchors: Iterable[Tag]) -> list[str]:
    """Return one address per mailto anchor, preferring its visible text."""
    emails: list[str] = []
    for anchor in anchors:
        match = EMAIL_REGEX.search(anchor.get_text() or "")
        if match is None:
            match = EMAIL_REGEX.search(str(anchor.get("href") or ""))
        if match is not None:
            emails.append(match.group(0).lower())
    return dedupe_preserve_order(emails)


def extract_from_mailto_links(page: BeautifulSoup, separator: str = ",") -> str:
    """Join the addresses of every ``mailto:`` link on the page."""
    emails = emails_from_mailto_anchors(page.select(MAILTO_SELECTOR))
    return f"{separator} ".join(emails)


def extract_from_page_text(page: BeautifulSoup, separator: str = ",") -> str:
    """Scan the serialized page markup for address-shaped strings."""
    markup = str(page).encode("utf-8", errors="replace").decode("utf-8", errors="replace")
    emails = [
        match.group(0).lower()
        for match in EMAIL_REGEX.finditer(markup)
        if not is_false_positive(match.group(0))
    ]
    return f"{separator} ".join(dedupe_preserve_order(emails))


def find_contact_anchor(page: BeautifulSoup, label: str) -> Tag | None:
    """Return the first anchor whose own text contains ``label``."""
    for anchor in page.find_all("a"):
        if any(label in text for text in anchor.find_all(string=True, recursive=False)):
            return anchor
    return None
