"""Validation and runtime guardrails."""

from __future__ import annotations

import socket
from pathlib import Path

import dns.resolver

from .errors import ConfigError


def load_lines_from_file(path: str) -> list[str]:
    """Load non-empty lines from a UTF-8 text file."""
    content = Path(path).read_text(encoding="utf-8")
    return [line.strip() for line in content.splitlines() if line.strip()]


def dedupe_urls(urls: list[str]) -> list[str]:
    """Strip and dedupe starting URLs while preserving input order."""
    output: list[str] = []
    seen: set[str] = set()
    for raw in urls:
        value = raw.strip()
        key = value.rstrip("/")
        if not value or key in seen:
            continue
        seen.add(key)
        output.append(value)
    return output


def validate_runtime_constraints(
    *,
    url: str,
    result_separator: str,
    request_timeout: float,
    retry_delay: float,
    max_retries: int,
) -> None:
    """Validate extractor configuration and raise ConfigError on invalid values."""
    if not isinstance(url, str) or not url.strip():
        raise ConfigError("A non-empty starting URL is required.")
    if not result_separator:
        raise ConfigError("--separator cannot be empty.")
    if request_timeout <= 0:
        raise ConfigError("--timeout must be > 0.")
    if retry_delay < 0:
        raise ConfigError("--retry-delay must be >= 0.")
    if max_retries < 1:
        raise ConfigError("max_retries must be >= 1.")


def validate_workers(workers: int) -> None:
    """Reject batch worker counts below one."""
    if workers < 1:
        raise ConfigError("--workers must be >= 1.")


def mx_check(email: str) -> bool:
    """Return True when target domain has MX or A record."""
    try:
        domain = email.split("@", maxsplit=1)[1]
    except IndexError:
        return False
    try:
        answers = dns.resolver.resolve(domain, "MX", lifetime=8)
        return bool(answers)
    except (dns.resolver.NoAnswer, dns.resolver.NXDOMAIN, dns.resolver.NoNameservers):
        try:
            socket.gethostbyname(domain)
            return True
        except OSError:
            return False
    except dns.exception.DNSException:
        return False
