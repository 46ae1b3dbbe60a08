"""CLI entrypoint for email-extractor."""

from __future__ import annotations

import argparse
import logging
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor, as_completed

from tqdm import tqdm

from .config import (
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_RESULT_SEPARATOR,
    DEFAULT_RETRY_DELAY,
    DEFAULT_WORKERS,
)
from .errors import ConfigError
from .extractor import EmailExtractor
from .fetchers import FETCH_ERRORS
from .io_csv import write_rows
from .logging_utils import configure_logging, get_logger
from .validation import dedupe_urls, load_lines_from_file, mx_check, validate_workers

MxCheckFn = Callable[[str], bool]


def build_parser() -> argparse.ArgumentParser:
    """Build CLI parser."""
    parser = argparse.ArgumentParser(
        description="Email Extractor - find a website's contact email with prioritized heuristics."
    )
    parser.add_argument("urls", nargs="*", help="Starting URL(s) of the site(s) to search.")
    parser.add_argument("--urls-file", help="Path to a file with one starting URL per line.")
    parser.add_argument(
        "--first-only", action="store_true", help="Stop at the very first email found."
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Disable silent mode: fetch errors abort the search for that site.",
    )
    parser.add_argument(
        "--separator",
        default=DEFAULT_RESULT_SEPARATOR,
        help="Separator placed between multiple emails.",
    )
    parser.add_argument(
        "--all-heuristics",
        action="store_true",
        help="Keep running later heuristics after one has found emails.",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_REQUEST_TIMEOUT,
        help="Per-request timeout in seconds.",
    )
    parser.add_argument(
        "--retry-delay",
        type=float,
        default=DEFAULT_RETRY_DELAY,
        help="Seconds to wait before retrying a throttled (429) page.",
    )
    parser.add_argument(
        "--workers", type=int, default=DEFAULT_WORKERS, help="Sites searched in parallel."
    )
    parser.add_argument("--output", help="Write a CSV report to this path.")
    parser.add_argument(
        "--check-mx", action="store_true", help="Check MX records of the found email domains."
    )
    parser.add_argument("--no-progress", action="store_true", help="Disable tqdm progress bars.")
    parser.add_argument("--debug", action="store_true", help="Enable debug trace logging.")
    return parser


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse and pre-validate CLI input."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if not (args.urls or args.urls_file):
        parser.error("Provide at least one URL or --urls-file.")
    return args


def _materialize_urls(args: argparse.Namespace) -> list[str]:
    urls = list(args.urls)
    if args.urls_file:
        urls.extend(load_lines_from_file(args.urls_file))
    return dedupe_urls(urls)


def namespace_to_extractors(args: argparse.Namespace) -> list[EmailExtractor]:
    """Convert CLI args to one validated extractor per starting URL."""
    validate_workers(args.workers)
    urls = _materialize_urls(args)
    if not urls:
        raise ConfigError("No starting URLs were provided.")
    return [
        EmailExtractor(
            url,
            first_only=args.first_only,
            silent_mode=not args.strict,
            debug=args.debug,
            result_separator=args.separator,
            run_all_heuristics=args.all_heuristics,
            request_timeout=args.timeout,
            retry_delay=args.retry_delay,
        )
        for url in urls
    ]


def extract_row(
    extractor: EmailExtractor, *, check_mx: bool, mx_checker: MxCheckFn = mx_check
) -> dict[str, str]:
    """Run one extractor and shape its outcome as a report row."""
    found = extractor.extract()
    row = {"url": extractor.config.url, "emails": "", "locations": "", "mx_ok": ""}
    if found is None:
        return row
    row["emails"] = found.emails
    row["locations"] = found.location
    if check_mx:
        first_email = found.emails.split(extractor.config.result_separator)[0].strip()
        row["mx_ok"] = "yes" if mx_checker(first_email) else "no"
    return row


def run_extractions(
    extractors: list[EmailExtractor],
    *,
    workers: int,
    check_mx: bool,
    show_progress: bool,
    logger: logging.Logger,
    mx_checker: MxCheckFn = mx_check,
) -> tuple[list[dict[str, str]], int]:
    """Search every site, returning rows in input order and the number of failed sites."""
    rows: dict[int, dict[str, str]] = {}
    failures = 0
    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures = {
            executor.submit(
                extract_row, extractor, check_mx=check_mx, mx_checker=mx_checker
            ): index
            for index, extractor in enumerate(extractors)
        }
        iterator = as_completed(futures)
        if show_progress and len(futures) > 1:
            iterator = tqdm(iterator, total=len(futures), desc="searching sites")
        for future in iterator:
            index = futures[future]
            url = extractors[index].config.url
            try:
                rows[index] = future.result()
            except FETCH_ERRORS as exc:
                failures += 1
                logger.error("Fetching %s failed: %s", url, exc)
                rows[index] = {"url": url, "emails": "", "locations": "", "mx_ok": ""}
    return [rows[index] for index in sorted(rows)], failures


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entrypoint."""
    args = parse_args(argv)
    configure_logging(args.debug)
    logger = get_logger()
    try:
        extractors = namespace_to_extractors(args)
    except ConfigError as exc:
        logger.error("Invalid configuration: %s", exc)
        return 2

    rows, failures = run_extractions(
        extractors,
        workers=args.workers,
        check_mx=args.check_mx,
        show_progress=not args.no_progress,
        logger=logger,
    )
    for row in rows:
        if row["emails"]:
            logger.info("%s -> %s (%s)", row["url"], row["emails"], row["locations"])
        else:
            logger.info("%s -> no email found", row["url"])
    if args.output:
        write_rows(args.output, rows)
        logger.info("Wrote results to %s", args.output)
    return 1 if failures else 0


if __name__ == "__main__":
    raise SystemExit(main())
