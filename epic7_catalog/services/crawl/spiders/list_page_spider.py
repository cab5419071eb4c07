from __future__ import annotations

import logging
from typing import List

from selectolax.parser import HTMLParser

from ....config import CatalogConfig
from ....models.entity import Entity
from ..base import Spider, check_kind, collapse_whitespace, slug_from_href
from ..fetcher import ResilientFetcher

logger = logging.getLogger(__name__)


class ListPageSpider(Spider):
    """Index-page spider: names come from the visible text of entity links.

    For each kind it fetches {base}/{kind} and keeps every anchor whose href
    starts with /{kind}/ and has non-empty text. Image-only links are dropped.
    """

    name = "list"

    def __init__(self, fetcher: ResilientFetcher, config: CatalogConfig) -> None:
        self.fetcher = fetcher
        self.config = config

    # --- Public API ---
    def fetch(self, kind: str) -> List[Entity]:
        url = self.config.index_url(check_kind(kind))
        logger.info("Fetching %s index page %s", kind, url)
        html = self.fetcher.fetch(url)
        return self.parse_html(html, kind)

    def parse_html(self, html: str, kind: str) -> List[Entity]:
        check_kind(kind)
        doc = HTMLParser(html)
        out: List[Entity] = []
        for a in doc.css(f'a[href^="/{kind}/"]'):
            href = a.attributes.get("href") or ""
            text = collapse_whitespace(a.text(deep=True))
            if not text:
                continue
            slug = slug_from_href(href, kind)
            if not slug:
                continue
            out.append(Entity.build(kind, slug, text, self.config.base_url))
        logger.debug("Parsed %d %s links", len(out), kind)
        return out
