"""Explicit configuration for the shared contacts sync, read from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Iterable, Mapping, Optional

from lib.py.errors import ConfigError

DEFAULT_FEED_BASE = "https://www.google.com/m8/feeds/contacts"
DEFAULT_TAB = "list"
MODES = ("fetch", "update", "delete")


def env(name: str, default: str = "", environ: Optional[Mapping[str, str]] = None) -> str:
    """Return a stripped environment value, or default when unset."""
    source = os.environ if environ is None else environ
    return source.get(name, default).strip()


@dataclass(frozen=True)
class FeedConfig:
    """Where and how to talk to the shared contacts feed."""

    domain: str
    token: str = ""
    feed_base: str = DEFAULT_FEED_BASE
    gdata_version: str = "3.0"
    page_size: int = 1000
    timeout: Optional[float] = None

    @property
    def collection_url(self) -> str:
        return f"{self.feed_base.rstrip('/')}/{self.domain}/full?max-results={self.page_size}"

    def headers(self) -> dict:
        return {"Authorization": f"Bearer {self.token}", "GData-Version": self.gdata_version}


@dataclass(frozen=True)
class SheetTarget:
    """Destination spreadsheet and tab."""

    sheet_id: str
    tab: str = DEFAULT_TAB


@dataclass(frozen=True)
class SyncConfig:
    """Feed and destination settings for one run, plus the operation to perform."""

    feed: FeedConfig
    sheet: SheetTarget
    mode: str = "fetch"
    dry_run: bool = False


def domain_from_email(email: str) -> str:
    """Return the domain part of user@domain, or an empty string."""
    _, sep, domain = email.partition("@")
    return domain.strip() if sep else ""


def _number(name: str, raw: str, cast):
    try:
        return cast(raw)
    except ValueError:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from None


def load_config(environ: Optional[Mapping[str, str]] = None) -> SyncConfig:
    """Build a SyncConfig from the environment; raise ConfigError on missing or invalid settings."""
    mode = env("MODE", "fetch", environ).lower()
    if mode not in MODES:
        raise ConfigError(f"MODE must be one of {', '.join(MODES)}, got {mode!r}")

    sheet_id = env("SHEET_ID", "", environ)
    if not sheet_id:
        raise ConfigError("SHEET_ID missing")

    domain = env("CONTACTS_DOMAIN", "", environ) or domain_from_email(env("OPERATOR_EMAIL", "", environ))
    if not domain and mode == "fetch":
        raise ConfigError("CONTACTS_DOMAIN or OPERATOR_EMAIL required for fetch")

    timeout = env("HTTP_TIMEOUT", "", environ)
    feed = FeedConfig(
        domain=domain,
        feed_base=env("CONTACTS_FEED_BASE", DEFAULT_FEED_BASE, environ),
        gdata_version=env("GDATA_VERSION", "3.0", environ),
        page_size=_number("PAGE_SIZE", env("PAGE_SIZE", "1000", environ), int),
        timeout=_number("HTTP_TIMEOUT", timeout, float) if timeout else None,
    )
    return SyncConfig(
        feed=feed,
        sheet=SheetTarget(sheet_id=sheet_id, tab=env("SHEET_TAB", DEFAULT_TAB, environ) or DEFAULT_TAB),
        mode=mode,
        dry_run=env("DRY_RUN", "", environ).lower() == "true",
    )


__all__: Iterable[str] = (
    "env",
    "FeedConfig",
    "SheetTarget",
    "SyncConfig",
    "domain_from_email",
    "load_config",
)
