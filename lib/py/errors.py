"""Error taxonomy for the shared contacts sync pipeline."""

from __future__ import annotations

from typing import Iterable, Optional

SNIPPET_LEN = 500


class ContactsSyncError(Exception):
    """Base class for every sync failure surfaced to the operator."""


class FetchError(ContactsSyncError):
    """Non-success HTTP response (or unreadable feed body) from the directory."""

    def __init__(self, status: int, body: str = "", url: str = "", reason: Optional[str] = None):
        self.status = status
        self.snippet = (body or "")[:SNIPPET_LEN]
        self.url = url
        self.reason = reason or f"HTTP {status}"
        super().__init__(f"Fetch error: {self.reason} url={url} body={self.snippet!r}")


class MalformedEntryError(ContactsSyncError):
    """Directory entry that cannot satisfy the required Contact fields."""

    def __init__(self, field: str, entry_id: str = ""):
        self.field = field
        self.entry_id = entry_id
        super().__init__(f"entry {entry_id or '<no id>'} missing required {field}")


class ConfigError(ContactsSyncError):
    """Missing destination tab, required column, or required setting."""


__all__: Iterable[str] = ("ContactsSyncError", "FetchError", "MalformedEntryError", "ConfigError")
