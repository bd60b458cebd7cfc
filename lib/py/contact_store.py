"""Rewrite the destination tab with the current contact list."""

from __future__ import annotations

from typing import Iterable, List, Sequence

from lib.py.contact_entry import Contact
from lib.py.contacts_config import SheetTarget
from lib.py.jsonlog import log
from lib.py.sheets import replace_rows

HEADER = (
    "ID", "EditLink", "Title",
    "Full Name", "Given Name", "Family Name",
    "Emails", "Phones", "Organizations",
    "Addresses", "Birthday", "Websites", "Note", "삭제",
)

MULTI_SEP = "; "


def contact_row(c: Contact) -> List[str]:
    """Return the sheet row for a contact, in HEADER order."""
    return [
        c.id, c.edit_reference, c.title,
        c.full_name, c.given_name, c.family_name,
        MULTI_SEP.join(c.emails),
        MULTI_SEP.join(c.phones),
        MULTI_SEP.join(c.organizations),
        MULTI_SEP.join(c.addresses),
        c.birthday,
        MULTI_SEP.join(c.websites),
        c.note,
        c.delete_flag,
    ]


def write_contacts(svc, target: SheetTarget, contacts: Sequence[Contact]) -> int:
    """Replace the tab contents with header plus one row per contact; return the number of rows written.

    A failure partway through leaves the tab partially rewritten; there is no rollback.
    """
    matrix = [contact_row(c) for c in contacts]
    replace_rows(svc, target.sheet_id, target.tab, HEADER, matrix)
    log("INFO", f"Wrote {len(matrix)} contacts", sheet_tab=target.tab, rows=len(matrix))
    return len(matrix)


__all__: Iterable[str] = ("HEADER", "contact_row", "write_contacts")
