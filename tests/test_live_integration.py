import os

import pytest

from email_extractor.cli import main
from email_extractor.extractor import EmailExtractor

requires_live = pytest.mark.skipif(
    os.getenv("RUN_LIVE_INTEGRATION") != "1",
    reason="Set RUN_LIVE_INTEGRATION=1 to execute live integration tests.",
)


@requires_live
def test_live_help_command_smoke() -> None:
    with pytest.raises(SystemExit) as exc_info:
        main(["--help"])
    assert exc_info.value.code == 0


@requires_live
def test_live_unreachable_site_returns_false() -> None:
    extractor = EmailExtractor("http://nonexistent.invalid", request_timeout=5.0)
    assert extractor.find_email() is False
