from pathlib import Path

import pytest
import requests
from bs4 import BeautifulSoup

from email_extractor import cli
from email_extractor.extractor import EmailExtractor


class DummyDocumentFetcher:
    def __init__(self, pages: dict[str, str]) -> None:
        self.pages = pages

    def open(self, url: str | None) -> BeautifulSoup | None:
        if not url or url not in self.pages:
            return None
        return BeautifulSoup(self.pages[url], "html.parser")


def test_parse_args_with_urls() -> None:
    args = cli.parse_args(["https://example.com", "--first-only", "--separator", ";"])
    assert args.urls == ["https://example.com"]
    assert args.first_only is True
    assert args.separator == ";"


def test_parse_args_with_urls_file_only() -> None:
    args = cli.parse_args(["--urls-file", "sites.txt"])
    assert args.urls_file == "sites.txt"


def test_parse_args_requires_source() -> None:
    with pytest.raises(SystemExit):
        cli.parse_args([])


def test_namespace_to_extractors_maps_flags(tmp_path: Path) -> None:
    sites = tmp_path / "sites.txt"
    sites.write_text("https://b.example\nhttps://a.example/\n", encoding="utf-8")
    args = cli.parse_args(
        ["https://a.example", "--urls-file", str(sites), "--strict", "--all-heuristics"]
    )
    extractors = cli.namespace_to_extractors(args)
    assert [item.config.url for item in extractors] == ["https://a.example", "https://b.example"]
    assert extractors[0].config.silent_mode is False
    assert extractors[0].config.run_all_heuristics is True


def test_extract_row_with_mx_check() -> None:
    extractor = EmailExtractor(
        "http://example.com",
        document_fetcher=DummyDocumentFetcher(
            {"http://example.com": "<p>one@example.com two@example.org</p>"}
        ),
    )
    checked: list[str] = []

    def fake_mx(email: str) -> bool:
        checked.append(email)
        return True

    row = cli.extract_row(extractor, check_mx=True, mx_checker=fake_mx)
    assert row == {
        "url": "http://example.com",
        "emails": "one@example.com, two@example.org",
        "locations": "whole page text",
        "mx_ok": "yes",
    }
    assert checked == ["one@example.com"]


def test_extract_row_without_result() -> None:
    extractor = EmailExtractor("http://example.com", document_fetcher=DummyDocumentFetcher({}))
    row = cli.extract_row(extractor, check_mx=True)
    assert row["emails"] == ""
    assert row["mx_ok"] == ""


def test_main_returns_zero_and_writes_csv(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    def fake_extract_row(extractor, *, check_mx, mx_checker):
        _ = (check_mx, mx_checker)
        return {
            "url": extractor.config.url,
            "emails": "info@example.com",
            "locations": "mailto links",
            "mx_ok": "",
        }

    monkeypatch.setattr(cli, "extract_row", fake_extract_row)
    output = tmp_path / "out.csv"
    assert cli.main(["https://example.com", "--output", str(output), "--no-progress"]) == 0
    assert "info@example.com" in output.read_text(encoding="utf-8")


def test_main_returns_one_on_strict_fetch_failure(monkeypatch: pytest.MonkeyPatch) -> None:
    def failing_extract_row(extractor, *, check_mx, mx_checker):
        raise requests.ConnectionError("connection refused")

    monkeypatch.setattr(cli, "extract_row", failing_extract_row)
    assert cli.main(["https://example.com", "--strict", "--no-progress"]) == 1


def test_main_returns_two_on_invalid_config() -> None:
    assert cli.main(["https://example.com", "--workers", "0"]) == 2
    assert cli.main(["https://example.com", "--timeout", "0"]) == 2
