from __future__ import annotations
import sys
from dataclasses import asdict, replace
from typing import Optional

import requests
from google.auth.exceptions import GoogleAuthError
from googleapiclient.errors import HttpError

from lib.py.contact_delete import DeleteSummary, delete_from_sheet
from lib.py.contact_store import write_contacts
from lib.py.contacts_config import SyncConfig, load_config
from lib.py.contacts_feed import fetch_contacts
from lib.py.errors import SNIPPET_LEN, ConfigError, ContactsSyncError
from lib.py.jsonlog import log
from lib.py.sheets import SHEETS_SCOPE, google_credentials, sheets_service

JOB = "a01_shared_contacts_sheet"
CONTACTS_SCOPE = "https://www.google.com/m8/feeds"


def fetch_and_store(cfg: SyncConfig, svc, session: Optional[requests.Session] = None) -> int:
    """Fetch every shared contact, then rewrite the sheet tab. Nothing is written if the fetch fails."""
    contacts = fetch_contacts(cfg.feed, session)
    return write_contacts(svc, cfg.sheet, contacts)


def update_from_sheet(cfg: SyncConfig, svc, session: Optional[requests.Session] = None) -> None:
    # sheet -> directory field updates are not implemented; only the entry point exists
    log("INFO", "update from sheet started", job=JOB, sheet_tab=cfg.sheet.tab)
    log("WARN", "update from sheet is not implemented; no changes made", job=JOB)
    log("INFO", "update from sheet completed", job=JOB)


def delete_marked(cfg: SyncConfig, svc, session: Optional[requests.Session] = None) -> DeleteSummary:
    return delete_from_sheet(svc, cfg.sheet, cfg.feed, session, dry_run=cfg.dry_run)


# failures that abort a run with exit code 1 after an ERROR record
RUNTIME_ERRORS = (ContactsSyncError, requests.RequestException, HttpError, GoogleAuthError)

OPERATIONS = {
    "fetch": fetch_and_store,
    "update": update_from_sheet,
    "delete": delete_marked,
}


def main():
    try:
        cfg = load_config()
    except ConfigError as e:
        log("ERROR", str(e), job=JOB); sys.exit(2)

    log("INFO", "start", job=JOB, mode=cfg.mode, domain=cfg.feed.domain, sheet_tab=cfg.sheet.tab, dry_run=cfg.dry_run)
    try:
        creds = google_credentials([SHEETS_SCOPE, CONTACTS_SCOPE])
        cfg = replace(cfg, feed=replace(cfg.feed, token=creds.token))
        svc = sheets_service(creds)
        with requests.Session() as session:
            result = OPERATIONS[cfg.mode](cfg, svc, session)
    except ConfigError as e:
        log("ERROR", str(e), job=JOB, mode=cfg.mode); sys.exit(2)
    except RUNTIME_ERRORS as e:
        log("ERROR", str(e).strip()[:SNIPPET_LEN], job=JOB, mode=cfg.mode, err=e.__class__.__name__); sys.exit(1)

    if isinstance(result, DeleteSummary):
        result = asdict(result)
    log("INFO", "done", job=JOB, mode=cfg.mode, result=result)

if __name__ == "__main__":
    main()
