from __future__ import annotations

import re
from typing import Dict, List, Optional, Pattern

from ...models.entity import Entity

KINDS = ("heroes", "artifacts")

# Anchored at the start of an href path, e.g. "/heroes/ml-tene-pyllis?tab=skills"
_HREF_PATTERNS: Dict[str, Pattern[str]] = {
    kind: re.compile(rf"^/{kind}/([a-z0-9-]+)") for kind in KINDS
}
# Anchored at the end of an absolute URL, e.g. "https://epic7db.com/heroes/sez"
_URL_FILTERS: Dict[str, Pattern[str]] = {
    kind: re.compile(rf"/{kind}/[a-z0-9-]+$", re.IGNORECASE) for kind in KINDS
}
_URL_PATTERNS: Dict[str, Pattern[str]] = {
    kind: re.compile(rf"/{kind}/([a-z0-9-]+)$") for kind in KINDS
}

_WS_RE = re.compile(r"\s+")


class CatalogError(Exception):
    """Base class for scraper failures."""


def check_kind(kind: str) -> str:
    if kind not in KINDS:
        raise ValueError(f"Unknown kind {kind!r}; expected one of {', '.join(KINDS)}")
    return kind


def collapse_whitespace(text: Optional[str]) -> str:
    return _WS_RE.sub(" ", text or "").strip()


def slug_from_href(href: str, kind: str) -> Optional[str]:
    m = _HREF_PATTERNS[check_kind(kind)].match(href or "")
    return m.group(1) if m else None


def url_matches_kind(url: str, kind: str) -> bool:
    return _URL_FILTERS[check_kind(kind)].search(url or "") is not None


def slug_from_url(url: str, kind: str) -> Optional[str]:
    m = _URL_PATTERNS[check_kind(kind)].search(url or "")
    return m.group(1) if m else None


def humanize_slug(slug: str) -> str:
    """'ml-tene-pyllis' -> 'Ml Tene Pyllis'.

    Only the first character of each token is touched; the rest keeps its case.
    """
    return " ".join(tok[:1].upper() + tok[1:] for tok in slug.split("-"))


class Spider:
    """Minimal spider contract.

    Subclasses implement fetch(kind) and return provisional entities in source
    order. Deduplication happens downstream in the pipeline.
    """

    name: str = "base"

    def fetch(self, kind: str) -> List[Entity]:
        raise NotImplementedError
