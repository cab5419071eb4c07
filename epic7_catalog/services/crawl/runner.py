from __future__ import annotations

import argparse
import logging
import sys
from typing import Dict, List, Optional

from ...config import CatalogConfig
from ...models.entity import Entity
from .base import KINDS, Spider
from .fetcher import FallbackPolicy, ResilientFetcher
from .pipeline import dedupe_by_slug, write_catalog
from .spiders.list_page_spider import ListPageSpider
from .spiders.sitemap_spider import SitemapSpider

logger = logging.getLogger(__name__)

STRATEGIES = {
    ListPageSpider.name: ListPageSpider,
    SitemapSpider.name: SitemapSpider,
}


def build_spider(strategy: str, fetcher: ResilientFetcher, config: CatalogConfig) -> Spider:
    try:
        spider_cls = STRATEGIES[strategy]
    except KeyError:
        raise ValueError(f"Unknown strategy {strategy!r}; expected one of {', '.join(STRATEGIES)}") from None
    return spider_cls(fetcher, config)


def check_counts(catalog: Dict[str, List[Entity]], config: CatalogConfig) -> List[str]:
    """Return (and log) advisory warnings for implausibly small results."""
    warnings: List[str] = []
    for kind, entities in catalog.items():
        floor = config.low_water_mark(kind)
        if len(entities) < floor:
            msg = f"Only {len(entities)} {kind} scraped (expected at least {floor}); the source layout may have changed"
            logger.warning(msg)
            warnings.append(msg)
    return warnings


def scrape_catalog(spider: Spider) -> Dict[str, List[Entity]]:
    catalog: Dict[str, List[Entity]] = {}
    for kind in KINDS:
        catalog[kind] = dedupe_by_slug(spider.fetch(kind), kind)
    return catalog


def run_catalog(config: CatalogConfig, spider: Spider) -> Dict[str, str]:
    """Scrape both kinds, report, sanity-check and write the JSON files.

    Nothing is written unless both kinds were scraped successfully.
    """
    catalog = scrape_catalog(spider)
    print(f"Heroes scraped: {len(catalog['heroes'])}")
    print(f"Artifacts scraped: {len(catalog['artifacts'])}")
    check_counts(catalog, config)
    return write_catalog(catalog, config.out_dir)


def main(argv: Optional[list] = None) -> int:
    parser = argparse.ArgumentParser(description="Scrape the Epic Seven hero and artifact catalog to JSON")
    parser.add_argument("--strategy", choices=sorted(STRATEGIES), default=ListPageSpider.name,
                        help="Discovery source: index pages (list) or sitemap.xml (sitemap)")
    parser.add_argument("--out-dir", help="Output directory for heroes.json / artifacts.json (default: data)")
    parser.add_argument("--base-url", help="Origin to scrape (default: https://epic7db.com)")
    parser.add_argument("--proxy-prefix", help="Read-proxy prefix used when the origin fails")
    parser.add_argument("--no-proxy", action="store_true", help="Disable the read-proxy fallback")
    parser.add_argument("--min-heroes", type=int, help="Warn when fewer heroes are scraped")
    parser.add_argument("--min-artifacts", type=int, help="Warn when fewer artifacts are scraped")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        config = CatalogConfig.from_env().with_overrides(
            base_url=args.base_url,
            proxy_prefix="" if args.no_proxy else args.proxy_prefix,
            min_heroes=args.min_heroes,
            min_artifacts=args.min_artifacts,
            out_dir=args.out_dir,
        )
        policy = FallbackPolicy.direct_then_proxy(config.proxy_prefix)
        with ResilientFetcher(user_agent=config.user_agent, policy=policy) as fetcher:
            spider = build_spider(args.strategy, fetcher, config)
            run_catalog(config, spider)
    except Exception as exc:
        logger.error("Catalog scrape failed: %s", exc, exc_info=args.verbose)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
