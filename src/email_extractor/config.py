"""Runtime configuration model."""

from __future__ import annotations

from dataclasses import dataclass

from .validation import validate_runtime_constraints

DEFAULT_USER_AGENT = "EmailExtractor/1.0 (+contact-discovery)"
DEFAULT_REQUEST_TIMEOUT = 15.0
DEFAULT_RESULT_SEPARATOR = ","
DEFAULT_RETRY_DELAY = 2.0
DEFAULT_MAX_RETRIES = 3
DEFAULT_WORKERS = 4


@dataclass(frozen=True)
class ExtractorConfig:
    """Validated settings for one extraction run."""

    url: str
    first_only: bool = False
    silent_mode: bool = True
    debug: bool = False
    result_separator: str = DEFAULT_RESULT_SEPARATOR
    run_all_heuristics: bool = False
    user_agent: str = DEFAULT_USER_AGENT
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    retry_delay: float = DEFAULT_RETRY_DELAY
    max_retries: int = DEFAULT_MAX_RETRIES

    def __post_init__(self) -> None:
        validate_runtime_constraints(
            url=self.url,
            result_separator=self.result_separator,
            request_timeout=self.request_timeout,
            retry_delay=self.retry_delay,
            max_retries=self.max_retries,
        )

    @property
    def joiner(self) -> str:
        """String placed between email groups, e.g. ``", "``."""
        return f"{self.result_separator} "
