"""Sitemap spider.

Discovers entity pages from {base}/sitemap.xml instead of the index pages.
The root may be a <urlset> or a <sitemapindex>; nested sitemaps referenced by an
index are fetched and read when they are urlsets. Only one level of nesting is
followed.

Names are synthesized from the slug ("ml-tene-pyllis" -> "Ml Tene Pyllis") and
can differ from the display name the list-page spider reads off the site.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from typing import List, Optional

from ....config import CatalogConfig
from ....models.entity import Entity
from ..base import Spider, check_kind, humanize_slug, slug_from_url, url_matches_kind
from ..fetcher import ResilientFetcher

logger = logging.getLogger(__name__)


def _local_name(tag: str) -> str:
    # "{http://www.sitemaps.org/schemas/sitemap/0.9}urlset" -> "urlset"
    return tag.rsplit("}", 1)[-1]


def _child_locs(root: ET.Element, entry_tag: str) -> List[str]:
    locs: List[str] = []
    for entry in root:
        if _local_name(entry.tag) != entry_tag:
            continue
        for child in entry:
            if _local_name(child.tag) == "loc" and child.text and child.text.strip():
                locs.append(child.text.strip())
    return locs


class SitemapSpider(Spider):
    name = "sitemap"

    def __init__(self, fetcher: ResilientFetcher, config: CatalogConfig) -> None:
        self.fetcher = fetcher
        self.config = config
        self._urls: Optional[List[str]] = None

    # --- Public API ---
    def fetch(self, kind: str) -> List[Entity]:
        check_kind(kind)
        if self._urls is None:
            self._urls = self.collect_urls(self.config.sitemap_url)
        return self.entities_from_urls(self._urls, kind)

    def collect_urls(self, sitemap_url: str) -> List[str]:
        """Return every page URL listed by the sitemap tree, in document order."""
        logger.info("Fetching sitemap %s", sitemap_url)
        root = ET.fromstring(self.fetcher.fetch(sitemap_url))
        kind = _local_name(root.tag)
        if kind == "urlset":
            return _child_locs(root, "url")
        if kind != "sitemapindex":
            logger.warning("Unexpected sitemap root <%s> at %s", kind, sitemap_url)
            return []

        urls: List[str] = []
        for nested_url in _child_locs(root, "sitemap"):
            logger.info("Fetching nested sitemap %s", nested_url)
            nested = ET.fromstring(self.fetcher.fetch(nested_url))
            if _local_name(nested.tag) != "urlset":
                logger.debug("Skipping nested <%s> at %s", _local_name(nested.tag), nested_url)
                continue
            urls.extend(_child_locs(nested, "url"))
        return urls

    def entities_from_urls(self, urls: List[str], kind: str) -> List[Entity]:
        out: List[Entity] = []
        for url in urls:
            if not url_matches_kind(url, kind):
                continue
            slug = slug_from_url(url, kind)
            if not slug:
                continue
            out.append(Entity.build(kind, slug, humanize_slug(slug), self.config.base_url))
        logger.debug("Matched %d %s URLs out of %d", len(out), kind, len(urls))
        return out
