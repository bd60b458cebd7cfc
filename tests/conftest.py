import json
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))
TESTS = Path(__file__).resolve().parent
if str(TESTS) not in sys.path:
    sys.path.insert(0, str(TESTS))

from _fakes import DOMAIN, FEED_BASE, SHEET_ID  # noqa: E402
from lib.py.contacts_config import FeedConfig, SheetTarget  # noqa: E402


@pytest.fixture
def feed_cfg():
    return FeedConfig(domain=DOMAIN, token="tok-abc", feed_base=FEED_BASE)


@pytest.fixture
def target():
    return SheetTarget(sheet_id=SHEET_ID, tab="list")


@pytest.fixture
def read_logs(capsys):
    """Return the JSON log records printed so far."""
    def _read():
        out = capsys.readouterr().out
        return [json.loads(line) for line in out.splitlines() if line.startswith("{")]
    return _read
