"""Delete directory entries whose sheet rows are flagged for deletion."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence

import requests

from lib.py.contacts_config import FeedConfig, SheetTarget
from lib.py.contacts_feed import delete_entry
from lib.py.errors import ConfigError, FetchError
from lib.py.jsonlog import log
from lib.py.sheets import read_rows, tab_exists

FLAG_ALIASES = ("삭제", "delete")
DELETE_MARKS = ("y", "yes")
EDIT_COLUMN = "editlink"


@dataclass
class DeleteSummary:
    """Row counts from one delete pass."""

    scanned: int = 0
    flagged: int = 0
    deleted: int = 0
    failed: int = 0


def normalize(value: object) -> str:
    """Trim and lowercase a cell or header value; None becomes an empty string."""
    return ("" if value is None else str(value)).strip().lower()


def header_index(header: Sequence[object]) -> Dict[str, int]:
    """Map normalized header names to column positions (first occurrence wins)."""
    idx: Dict[str, int] = {}
    for i, h in enumerate(header):
        idx.setdefault(normalize(h), i)
    return idx


def flag_column(idx: Dict[str, int]) -> int:
    """Return the position of the delete-flag column; raise ConfigError when no alias is present."""
    for alias in FLAG_ALIASES:
        if alias in idx:
            return idx[alias]
    raise ConfigError("'삭제' or 'delete' column not found")


def _cell(row: Sequence[object], i: int) -> str:
    return str(row[i]) if i < len(row) and row[i] is not None else ""


def is_flagged(mark: object) -> bool:
    """Return True when a flag cell reads y or yes, ignoring case and surrounding spaces."""
    return normalize(mark) in DELETE_MARKS


def delete_flagged_rows(
    rows: List[List[object]],
    cfg: FeedConfig,
    session: Optional[requests.Session] = None,
    dry_run: bool = False,
) -> DeleteSummary:
    """Issue one DELETE per flagged data row, in row order, isolating per-row failures.

    ``rows`` is the full tab content, header first. Raises ConfigError before any
    request when the header lacks the flag or edit-link column.
    """
    if not rows:
        raise ConfigError("sheet has no header row")
    idx = header_index(rows[0])
    log("INFO", "headers for delete", headers=",".join(idx))
    flag_i = flag_column(idx)
    if EDIT_COLUMN not in idx:
        raise ConfigError("'EditLink' column not found")
    edit_i = idx[EDIT_COLUMN]

    summary = DeleteSummary()
    for n, r in enumerate(rows[1:], start=2):
        summary.scanned += 1
        mark = normalize(_cell(r, flag_i))
        log("INFO", "delete mark", row=n, mark=mark)
        if not is_flagged(mark):
            continue
        summary.flagged += 1
        edit = _cell(r, edit_i).strip()
        if not edit:
            summary.failed += 1
            log("ERROR", "flagged row has no edit link", row=n)
            continue
        log("INFO", "deleting row", row=n, edit_link=edit, dry_run=dry_run)
        if dry_run:
            continue
        try:
            resp = delete_entry(edit, cfg, session)
        except FetchError as e:
            summary.failed += 1
            log("ERROR", "DELETE failed", row=n, status=e.status, body=e.snippet)
        except Exception as e:
            summary.failed += 1
            log("ERROR", "DELETE exception", row=n, err=f"{e.__class__.__name__}: {e}")
        else:
            summary.deleted += 1
            log("INFO", "DELETE ok", row=n, status=resp.status_code, body=resp.text or "")
    return summary


def delete_from_sheet(
    svc,
    target: SheetTarget,
    cfg: FeedConfig,
    session: Optional[requests.Session] = None,
    dry_run: bool = False,
) -> DeleteSummary:
    """Read the destination tab and delete every flagged directory entry."""
    if not tab_exists(svc, target.sheet_id, target.tab):
        raise ConfigError(f"Sheet not found: {target.tab}")
    summary = delete_flagged_rows(read_rows(svc, target.sheet_id, target.tab), cfg, session, dry_run)
    log(
        "INFO",
        "delete from sheet completed",
        scanned=summary.scanned,
        flagged=summary.flagged,
        deleted=summary.deleted,
        failed=summary.failed,
        dry_run=dry_run,
    )
    return summary


__all__: Iterable[str] = (
    "DeleteSummary",
    "normalize",
    "header_index",
    "flag_column",
    "is_flagged",
    "delete_flagged_rows",
    "delete_from_sheet",
)
