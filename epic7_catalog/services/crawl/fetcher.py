"""Fetch-with-fallback over httpx.

A FallbackPolicy is an ordered list of URL transforms. ResilientFetcher tries
each rewritten URL in turn: the first successful response wins and the failure
of the last attempt is raised. The default policy is the direct origin URL
followed by a read-only mirroring proxy:

    https://epic7db.com/heroes -> https://r.jina.ai/http://epic7db.com/heroes
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Tuple

import httpx

from .base import CatalogError

logger = logging.getLogger(__name__)

_SCHEME_RE = re.compile(r"^(?:https?:)?//")

UrlTransform = Callable[[str], str]


class FetchError(CatalogError):
    """Non-success response (or request failure, status=None) for a URL."""

    def __init__(self, url: str, status: Optional[int] = None, reason: Optional[str] = None) -> None:
        self.url = url
        self.status = status
        self.reason = reason
        if status is not None:
            msg = f"HTTP {status} for {url}"
        else:
            msg = f"Request failed for {url}: {reason or 'transport error'}"
        super().__init__(msg)


def direct(url: str) -> str:
    return url


def proxy_rewrite(prefix: str) -> UrlTransform:
    """Build a transform that routes a URL through a read-proxy prefix.

    A leading http://, https:// or // is stripped before prefixing.
    """

    def _rewrite(url: str) -> str:
        return prefix + _SCHEME_RE.sub("", url, count=1)

    _rewrite.__name__ = f"proxy({prefix})"
    return _rewrite


@dataclass
class FallbackPolicy:
    transforms: List[UrlTransform] = field(default_factory=lambda: [direct])

    @classmethod
    def direct_then_proxy(cls, proxy_prefix: Optional[str]) -> "FallbackPolicy":
        transforms: List[UrlTransform] = [direct]
        if proxy_prefix:
            transforms.append(proxy_rewrite(proxy_prefix))
        return cls(transforms=transforms)

    def candidates(self, url: str) -> List[Tuple[str, str]]:
        """Return (transform name, rewritten url) pairs in attempt order."""
        return [(getattr(t, "__name__", repr(t)), t(url)) for t in self.transforms]


class ResilientFetcher:
    """fetch(url) -> text, falling back through the policy's URL transforms.

    An httpx.Client may be injected (tests pass one built on httpx.MockTransport);
    otherwise one is created with the configured user agent and closed by close().
    """

    def __init__(
        self,
        *,
        user_agent: str,
        policy: Optional[FallbackPolicy] = None,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self.policy = policy or FallbackPolicy()
        if not self.policy.transforms:
            raise ValueError("FallbackPolicy needs at least one URL transform")
        self.headers = {"User-Agent": user_agent}
        self._owns_client = client is None
        self._client = client or httpx.Client(headers=self.headers, follow_redirects=True)

    def fetch(self, url: str) -> str:
        attempts = self.policy.candidates(url)
        for i, (_, target) in enumerate(attempts):
            try:
                return self._get(target)
            except FetchError as exc:
                if i + 1 == len(attempts):
                    raise
                logger.warning("%s; retrying via %s", exc, attempts[i + 1][0])
        raise ValueError("FallbackPolicy needs at least one URL transform")

    def _get(self, url: str) -> str:
        logger.debug("GET %s", url)
        try:
            r = self._client.get(url, headers=self.headers)
        except httpx.RequestError as exc:
            raise FetchError(url, reason=str(exc) or type(exc).__name__) from exc
        if not r.is_success:
            raise FetchError(url, status=r.status_code)
        return r.text

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "ResilientFetcher":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
