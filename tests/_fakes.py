"""Fakes for the Sheets v4 resource chain, the feed HTTP session, and Atom fixtures."""

import re
from xml.sax.saxutils import quoteattr


FEED_BASE = "https://contacts.test/m8/feeds/contacts"
DOMAIN = "example.com"
SHEET_ID = "sheet-123"


# ---------- Atom fixtures ----------

FEED_OPEN = (
    '<feed xmlns="http://www.w3.org/2005/Atom" '
    'xmlns:gd="http://schemas.google.com/g/2005" '
    'xmlns:gContact="http://schemas.google.com/contact/2008">'
)


def entry_xml(n, edit=True, body=""):
    """A minimal entry with id/title and optional edit link plus extra child markup."""
    edit_link = (
        f'<link rel="edit" type="application/atom+xml" href="{FEED_BASE}/{DOMAIN}/full/c{n}/1"/>'
        if edit else ""
    )
    return (
        "<entry>"
        f"<id>http://www.google.com/m8/feeds/contacts/{DOMAIN}/base/c{n}</id>"
        f"<title>Contact {n}</title>"
        f'<link rel="self" type="application/atom+xml" href="{FEED_BASE}/{DOMAIN}/full/c{n}"/>'
        f"{edit_link}{body}"
        "</entry>"
    )


def feed_xml(entries, next_url=None):
    nxt = f'<link rel="next" type="application/atom+xml" href={quoteattr(next_url)}/>' if next_url else ""
    return f"{FEED_OPEN}<title>Shared contacts</title>{nxt}{''.join(entries)}</feed>"


# ---------- HTTP fake ----------

class FakeResponse:
    def __init__(self, status_code=200, text="", content=None):
        self.status_code = status_code
        self.text = text
        self.content = text.encode("utf-8") if content is None else content


class FakeSession:
    """Stands in for requests.Session; routes by URL and records every call."""

    def __init__(self, pages=None, deletes=None):
        self.pages = pages or {}
        self.deletes = deletes or {}
        self.calls = []

    def get(self, url, headers=None, timeout=None):
        self.calls.append(("GET", url, headers))
        page = self.pages[url]
        if isinstance(page, FakeResponse):
            return page
        status, body = page
        return FakeResponse(status, body)

    def delete(self, url, headers=None, timeout=None):
        self.calls.append(("DELETE", url, headers))
        outcome = self.deletes.get(url, (200, ""))
        if isinstance(outcome, Exception):
            raise outcome
        return FakeResponse(*outcome)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def deleted_urls(self):
        return [url for method, url, _ in self.calls if method == "DELETE"]


# ---------- Sheets v4 fake ----------

def _split_a1(a1):
    """Return (tab, cells) for a quoted or bare A1 range; quoted titles must double embedded quotes."""
    if a1.startswith("'"):
        m = re.fullmatch(r"'((?:[^']|'')*)'(?:!(.*))?", a1)
        if not m:
            raise RuntimeError(f"Unable to parse range: {a1}")
        return m.group(1).replace("''", "'"), m.group(2) or ""
    tab, _, cells = a1.partition("!")
    return tab, cells


def _tab_of(a1):
    return _split_a1(a1)[0]


def _start_row(a1):
    m = re.match(r"[A-Z]*(\d+)", _split_a1(a1)[1])
    return int(m.group(1)) if m else 1


class _Call:
    def __init__(self, fn):
        self._fn = fn

    def execute(self):
        return self._fn()


class _Values:
    def __init__(self, book):
        self.book = book

    def _grid(self, a1):
        tab = _tab_of(a1)
        if tab not in self.book.tabs:
            raise RuntimeError(f"Unable to parse range: {a1}")
        return self.book.tabs[tab]

    def get(self, spreadsheetId, range):
        def run():
            rows = [list(r) for r in self._grid(range)]
            while rows and not any(rows[-1]):
                rows.pop()
            trimmed = []
            for r in rows:
                while r and r[-1] == "":
                    r.pop()
                trimmed.append(r)
            return {"values": trimmed} if trimmed else {}
        return _Call(run)

    def clear(self, spreadsheetId, range, body):
        def run():
            self.book.log.append(("clear", _tab_of(range)))
            self._grid(range).clear()
            return {}
        return _Call(run)

    def update(self, spreadsheetId, range, valueInputOption, body):
        def run():
            self.book.log.append(("update", _tab_of(range)))
            grid = self._grid(range)
            start = _start_row(range) - 1
            for i, row in enumerate(body["values"]):
                while len(grid) <= start + i:
                    grid.append([])
                grid[start + i] = list(row)
            return {}
        return _Call(run)

    def append(self, spreadsheetId, range, valueInputOption, insertDataOption, body):
        def run():
            self.book.log.append(("append", _tab_of(range)))
            if isinstance(self.book.fail_on_append, Exception):
                raise self.book.fail_on_append
            if self.book.fail_on_append:
                raise RuntimeError("append failed")
            grid = self._grid(range)
            while grid and not any(grid[-1]):
                grid.pop()
            grid.extend(list(r) for r in body["values"])
            return {}
        return _Call(run)


class FakeSheets:
    """In-memory spreadsheet exposing the spreadsheets()/values() call chain used by lib.py.sheets."""

    def __init__(self, tabs=None):
        self.tabs = {name: [list(r) for r in rows] for name, rows in (tabs or {}).items()}
        self.log = []
        self.fail_on_append = False

    def spreadsheets(self):
        return self

    def values(self):
        return _Values(self)

    def get(self, spreadsheetId):
        return _Call(lambda: {"sheets": [{"properties": {"title": t}} for t in self.tabs]})

    def batchUpdate(self, spreadsheetId, body):
        def run():
            for req in body["requests"]:
                title = req["addSheet"]["properties"]["title"]
                self.log.append(("addSheet", title))
                self.tabs.setdefault(title, [])
            return {}
        return _Call(run)
