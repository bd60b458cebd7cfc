"""Google Sheets helpers for deterministic tab rewrites and reads."""

from __future__ import annotations

from typing import Any, Iterable, List, Sequence

from google.auth import default as google_auth_default
from google.auth.transport.requests import Request as GARequest
from googleapiclient.discovery import build

SHEETS_SCOPE = "https://www.googleapis.com/auth/spreadsheets"


def google_credentials(scopes: Sequence[str]):
    """Return refreshed Application Default Credentials for the given scopes."""
    creds, _ = google_auth_default(scopes=list(scopes))
    if not creds.valid:
        creds.refresh(GARequest())
    return creds


def sheets_service(creds=None):
    """Build a Sheets v4 service, using ADC with the spreadsheets scope when no credentials are given."""
    if creds is None:
        creds = google_credentials([SHEETS_SCOPE])
    return build("sheets", "v4", credentials=creds, cache_discovery=False)


def col_letters(n: int) -> str:
    """1->A, 26->Z, 27->AA..."""
    s = ""
    while n > 0:
        n, r = divmod(n - 1, 26)
        s = chr(65 + r) + s
    return s


def a1_range(tab: str, cells: str = "") -> str:
    """Quote a tab title for A1 notation (embedded quotes doubled), optionally followed by a cell range."""
    quoted = "'" + tab.replace("'", "''") + "'"
    return f"{quoted}!{cells}" if cells else quoted


def tab_exists(svc, sheet_id: str, tab: str) -> bool:
    """Return True when the spreadsheet has a tab with the given title."""
    meta = svc.spreadsheets().get(spreadsheetId=sheet_id).execute()
    return any(s["properties"]["title"] == tab for s in meta.get("sheets", []))


def ensure_tab(svc, sheet_id: str, tab: str) -> bool:
    """Create the tab when missing; return True when it was created."""
    if tab_exists(svc, sheet_id, tab):
        return False
    svc.spreadsheets().batchUpdate(
        spreadsheetId=sheet_id,
        body={"requests": [{"addSheet": {"properties": {"title": tab}}}]},
    ).execute()
    return True


def clear_tab(svc, sheet_id: str, tab: str) -> None:
    """Erase every value in the tab, header included."""
    svc.spreadsheets().values().clear(spreadsheetId=sheet_id, range=a1_range(tab), body={}).execute()


def ensure_header(svc, sheet_id: str, tab: str, header: Sequence[str]) -> None:
    """Write the header into row 1 of the tab."""
    svc.spreadsheets().values().update(
        spreadsheetId=sheet_id,
        range=a1_range(tab, f"A1:{col_letters(len(header))}1"),
        valueInputOption="RAW",
        body={"values": [list(header)]},
    ).execute()


def append_rows(svc, sheet_id: str, tab: str, matrix: Sequence[Sequence[Any]]) -> None:
    """Append rows after the last written row of the tab."""
    if not matrix:
        return
    svc.spreadsheets().values().append(
        spreadsheetId=sheet_id,
        range=a1_range(tab, "A2"),
        valueInputOption="RAW",
        insertDataOption="INSERT_ROWS",
        body={"values": [list(r) for r in matrix]},
    ).execute()


def replace_rows(svc, sheet_id: str, tab: str, header: Sequence[str], matrix: Sequence[Sequence[Any]]) -> None:
    """Create the tab if needed, erase it, then write header and rows in order."""
    ensure_tab(svc, sheet_id, tab)
    clear_tab(svc, sheet_id, tab)
    ensure_header(svc, sheet_id, tab, header)
    append_rows(svc, sheet_id, tab, matrix)


def read_rows(svc, sheet_id: str, tab: str) -> List[List[str]]:
    """Return all values of the tab as rows of formatted strings (trailing empty cells omitted)."""
    res = svc.spreadsheets().values().get(spreadsheetId=sheet_id, range=a1_range(tab)).execute()
    return res.get("values", [])


__all__: Iterable[str] = (
    "google_credentials",
    "sheets_service",
    "col_letters",
    "a1_range",
    "tab_exists",
    "ensure_tab",
    "clear_tab",
    "ensure_header",
    "append_rows",
    "replace_rows",
    "read_rows",
)
