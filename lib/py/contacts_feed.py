"""Paginated access to the GData shared contacts feed."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from typing import Iterable, Iterator, List, Optional, Tuple

import requests

from lib.py.contact_entry import Contact, parse_entry
from lib.py.contacts_config import FeedConfig
from lib.py.errors import SNIPPET_LEN, FetchError
from lib.py.gdata_xml import ATOM, children, link_href, parse_document
from lib.py.jsonlog import log


def _ok(status: int) -> bool:
    return 200 <= status < 300


def fetch_page(url: str, cfg: FeedConfig, session: Optional[requests.Session] = None) -> Tuple[List[ET.Element], Optional[str]]:
    """GET one feed page and return (entries, next_url); raise FetchError on a non-success response."""
    http = session or requests
    log("INFO", "fetching feed page", url=url)
    try:
        r = http.get(url, headers=cfg.headers(), timeout=cfg.timeout)
    except requests.RequestException as e:
        log("ERROR", "feed fetch exception", url=url, err=f"{e.__class__.__name__}: {e}")
        raise
    body = r.text or ""
    log("INFO", "feed page response", url=url, status=r.status_code, body=body[:SNIPPET_LEN])
    if not _ok(r.status_code):
        raise FetchError(r.status_code, body, url=url)
    try:
        feed = parse_document(r.content)
    except ET.ParseError as e:
        raise FetchError(r.status_code, body, url=url, reason=f"unparseable feed: {e}") from e
    return children(feed, ATOM, "entry"), link_href(feed, "next") or None


def iter_entries(cfg: FeedConfig, session: Optional[requests.Session] = None) -> Iterator[ET.Element]:
    """Yield raw atom:entry elements across all pages, following rel="next" links until exhausted."""
    url: Optional[str] = cfg.collection_url
    while url:
        entries, url = fetch_page(url, cfg, session)
        yield from entries


def fetch_contacts(cfg: FeedConfig, session: Optional[requests.Session] = None) -> List[Contact]:
    """Fetch and parse every directory entry in feed order."""
    return [parse_entry(e) for e in iter_entries(cfg, session)]


def delete_entry(edit_reference: str, cfg: FeedConfig, session: Optional[requests.Session] = None) -> requests.Response:
    """DELETE one directory entry by its edit link; raise FetchError on a non-success response."""
    http = session or requests
    r = http.delete(edit_reference, headers=cfg.headers(), timeout=cfg.timeout)
    if not _ok(r.status_code):
        raise FetchError(r.status_code, r.text or "", url=edit_reference)
    return r


__all__: Iterable[str] = ("fetch_page", "iter_entries", "fetch_contacts", "delete_entry")
