"""Run configuration for the catalog scraper.

Defaults target the public epic7db.com site with the r.jina.ai read-proxy as
fallback transport. Every value can be overridden through environment
variables (or a .env file at the project root):

- EPIC7_BASE_URL (default: https://epic7db.com)
- EPIC7_PROXY_PREFIX (default: https://r.jina.ai/http://; empty disables the proxy)
- EPIC7_USER_AGENT
- EPIC7_MIN_HEROES / EPIC7_MIN_ARTIFACTS (low-water marks for the sanity warning)
- EPIC7_OUT_DIR (default: data, relative to the working directory)
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from typing import Dict, Optional

logger = logging.getLogger(__name__)

ENV_FILE = os.path.join(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")), ".env")

DEFAULT_BASE_URL = "https://epic7db.com"
DEFAULT_PROXY_PREFIX = "https://r.jina.ai/http://"
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0 Safari/537.36"
)


@dataclass(frozen=True)
class CatalogConfig:
    base_url: str = DEFAULT_BASE_URL
    proxy_prefix: Optional[str] = DEFAULT_PROXY_PREFIX
    user_agent: str = DEFAULT_USER_AGENT
    min_heroes: int = 200
    min_artifacts: int = 150
    out_dir: str = "data"

    def __post_init__(self) -> None:
        # URL templates are built as f"{base_url}/{kind}/..."
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))
        if not self.proxy_prefix:
            object.__setattr__(self, "proxy_prefix", None)

    @property
    def sitemap_url(self) -> str:
        return f"{self.base_url}/sitemap.xml"

    def index_url(self, kind: str) -> str:
        return f"{self.base_url}/{kind}"

    def low_water_mark(self, kind: str) -> int:
        return {"heroes": self.min_heroes, "artifacts": self.min_artifacts}[kind]

    def with_overrides(self, **changes) -> "CatalogConfig":
        """Return a copy with every non-None keyword applied."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})

    @classmethod
    def from_env(cls, environ: Optional[Dict[str, str]] = None) -> "CatalogConfig":
        if environ is None:
            _load_env_from_file()
            environ = dict(os.environ)
        defaults = cls()
        proxy = environ.get("EPIC7_PROXY_PREFIX")
        return cls(
            base_url=environ.get("EPIC7_BASE_URL") or defaults.base_url,
            proxy_prefix=defaults.proxy_prefix if proxy is None else proxy,
            user_agent=environ.get("EPIC7_USER_AGENT") or defaults.user_agent,
            min_heroes=_int_env(environ, "EPIC7_MIN_HEROES", defaults.min_heroes),
            min_artifacts=_int_env(environ, "EPIC7_MIN_ARTIFACTS", defaults.min_artifacts),
            out_dir=environ.get("EPIC7_OUT_DIR") or defaults.out_dir,
        )


def _int_env(environ: Dict[str, str], key: str, default: int) -> int:
    raw = (environ.get(key) or "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{key} must be an integer, got {raw!r}") from None


def _load_env_from_file() -> None:
    """Load variables from a .env file at the project root if present.

    Only sets variables that aren't already present in the process environment.
    """
    env_path = ENV_FILE
    if not os.path.isfile(env_path):
        return
    with open(env_path, "r", encoding="utf-8") as f:
        for line in f:
            s = line.strip()
            if not s or s.startswith("#") or "=" not in s:
                continue
            key, val = s.split("=", 1)
            key = key.strip()
            val = val.strip().strip('"').strip("'")
            if key and not os.environ.get(key):
                os.environ[key] = val
    logger.debug("Loaded environment overrides from %s", env_path)
