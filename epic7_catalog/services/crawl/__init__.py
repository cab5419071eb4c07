"""Catalog crawling subsystem.

Structure:
- base.py: kinds, slug patterns, name humanization, spider contract
- fetcher.py: fetch-with-fallback (direct origin, then read-proxy)
- spiders/: list-page and sitemap discovery strategies
- pipeline.py: slug dedupe + JSON catalog writer
- runner.py: CLI entrypoint

Uses httpx for transport, selectolax for HTML and xml.etree for sitemaps.
"""
