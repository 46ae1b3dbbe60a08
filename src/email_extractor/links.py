"""Link filtering and URL normalization rules."""

from __future__ import annotations

import re
from functools import lru_cache

CONTACT_LINK_TRANSLATIONS = (
    "contacts",
    "contact",
    "contact us",
    "get in touch",
    "contatti",
    "kontaktai",
    "kontakt",
    "kontakter",
    "contacto",
    "kontakti",
)

# Social and media sites, blog sections, script links and anything pointing off-site.
IGNORE_LINK_PATTERNS = [
    r"#",
    r"facebook",
    r"linkedin",
    r"google",
    r"twitter",
    r"youtube",
    r"flickr",
    r"/blog",
    r"javascript",
    r"http",
    r"www/",
]
ABSOLUTE_URL_PATTERN = re.compile(r"http|https|www")
REPEATED_SLASHES = re.compile(r"(?<=.{7})//+")

_IGNORE_LINKS = re.compile("|".join(IGNORE_LINK_PATTERNS))


def should_ignore(url: str | None) -> bool:
    """Return True for links not worth fetching while looking for contacts."""
    if not url:
        return True
    return bool(_IGNORE_LINKS.search(url))


def is_fragment_link(url: str) -> bool:
    """Return True for in-page anchors such as ``#contact``."""
    return "#" in url


def resolve_absolute(url: str, site_root: str) -> str:
    """Prefix relative links with the site root and repair doubled slashes.

    Slash runs inside the first seven characters are left alone so the
    ``://`` of the scheme survives.
    """
    if not ABSOLUTE_URL_PATTERN.search(url):
        url = f"{site_root}/{url}"
    return REPEATED_SLASHES.sub("/", url)


@lru_cache(maxsize=None)
def contact_link_labels(words: tuple[str, ...] = CONTACT_LINK_TRANSLATIONS) -> tuple[str, ...]:
    """Expand contact words with upper-case and capitalized variants."""
    labels: list[str] = []
    for word in words:
        for variant in (word, word.upper(), word.capitalize()):
            if variant not in labels:
                labels.append(variant)
    return tuple(labels)
