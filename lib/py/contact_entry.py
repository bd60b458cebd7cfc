"""Contact schema and the Atom entry → Contact mapping."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from typing import Iterable, Tuple

from lib.py.errors import MalformedEntryError
from lib.py.gdata_xml import ATOM, GCONTACT, GD, attr, child, child_text, children, link_href

ADDRESS_PARTS = ("street", "city", "region", "postalCode", "country")


@dataclass(frozen=True)
class Contact:
    """One shared-directory contact as written to a sheet row."""

    id: str
    edit_reference: str
    title: str = ""
    full_name: str = ""
    given_name: str = ""
    family_name: str = ""
    emails: Tuple[str, ...] = field(default_factory=tuple)
    phones: Tuple[str, ...] = field(default_factory=tuple)
    organizations: Tuple[str, ...] = field(default_factory=tuple)
    addresses: Tuple[str, ...] = field(default_factory=tuple)
    birthday: str = ""
    websites: Tuple[str, ...] = field(default_factory=tuple)
    note: str = ""
    delete_flag: str = ""

    def __post_init__(self) -> None:
        if not self.id:
            raise MalformedEntryError("id", self.id)
        if not self.edit_reference:
            raise MalformedEntryError("edit link", self.id)


def compose_organization(company: str, title: str) -> str:
    """Return "company (title)" or just "company" when the title is empty."""
    return f"{company} ({title})" if title else company


def compose_address(formatted: str, parts: Iterable[str]) -> str:
    """Prefer the formatted address; otherwise join the non-empty parts with ", "."""
    if formatted:
        return formatted
    return ", ".join(p for p in parts if p)


def _organizations(entry: ET.Element) -> Tuple[str, ...]:
    return tuple(
        compose_organization(child_text(o, GD, "orgName"), child_text(o, GD, "orgTitle"))
        for o in children(entry, GD, "organization")
    )


def _addresses(entry: ET.Element) -> Tuple[str, ...]:
    out = []
    for a in children(entry, GD, "structuredPostalAddress"):
        parts = [child_text(a, GD, p) for p in ADDRESS_PARTS]
        out.append(compose_address(child_text(a, GD, "formattedAddress"), parts))
    return tuple(out)


def parse_entry(entry: ET.Element) -> Contact:
    """Map one atom:entry element to a Contact; raise MalformedEntryError when required fields are missing."""
    entry_id = child_text(entry, ATOM, "id")
    edit = link_href(entry, "edit")
    if not edit:
        raise MalformedEntryError("edit link", entry_id)

    name = child(entry, GD, "name")
    emails = tuple(e.get("address") for e in children(entry, GD, "email") if e.get("address"))
    # phone numbers keep their raw text, including formatting
    phones = tuple(p.text or "" for p in children(entry, GD, "phoneNumber"))
    websites = tuple(w.get("href") for w in children(entry, GCONTACT, "website") if w.get("href"))

    return Contact(
        id=entry_id,
        edit_reference=edit,
        title=child_text(entry, ATOM, "title"),
        full_name=child_text(name, GD, "fullName"),
        given_name=child_text(name, GD, "givenName"),
        family_name=child_text(name, GD, "familyName"),
        emails=emails,
        phones=phones,
        organizations=_organizations(entry),
        addresses=_addresses(entry),
        birthday=attr(child(entry, GCONTACT, "birthday"), "when"),
        websites=websites,
        note=child_text(entry, ATOM, "content"),
    )


__all__: Iterable[str] = ("Contact", "compose_organization", "compose_address", "parse_entry")
