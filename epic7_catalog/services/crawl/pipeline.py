from __future__ import annotations

import json
import logging
import os
from typing import Dict, Iterable, List

from ...models.entity import Entity, KindCatalog
from .base import check_kind

logger = logging.getLogger(__name__)


def ensure_dir(path: str) -> None:
    os.makedirs(path, exist_ok=True)


def _record_dedupe_key(kind: str, rec: Entity) -> str:
    # Kind-qualified so heroes and artifacts never collide if lists are merged
    return f"{kind}-{rec.slug}"


def dedupe_by_slug(records: Iterable[Entity], kind: str) -> List[Entity]:
    """Keep the first record per slug, preserving first-seen order."""
    check_kind(kind)
    seen: set = set()
    out: List[Entity] = []
    for rec in records:
        key = _record_dedupe_key(kind, rec)
        if key in seen:
            continue
        seen.add(key)
        out.append(rec)
    return out


def render_catalog(kind: str, entities: Iterable[Entity]) -> str:
    doc = KindCatalog(kind=kind, entities=list(entities)).to_document()
    return json.dumps(doc, ensure_ascii=False, indent=2)


def write_catalog(catalog: Dict[str, List[Entity]], out_dir: str) -> Dict[str, str]:
    """Write one {kind}.json per kind into out_dir, overwriting prior files.

    Every file is rendered and staged as a temporary sibling before any of them
    is moved into place, so a failure while rendering leaves old files intact.
    Returns {kind: path}.
    """
    ensure_dir(out_dir)
    staged: Dict[str, str] = {}
    paths: Dict[str, str] = {}
    try:
        for kind, entities in catalog.items():
            path = os.path.join(out_dir, f"{check_kind(kind)}.json")
            tmp = path + ".tmp"
            with open(tmp, "w", encoding="utf-8") as f:
                f.write(render_catalog(kind, entities))
            staged[kind] = tmp
            paths[kind] = path
    except BaseException:
        for tmp in staged.values():
            if os.path.exists(tmp):
                os.remove(tmp)
        raise

    for kind, tmp in staged.items():
        os.replace(tmp, paths[kind])
        logger.info("Wrote %d %s to %s", len(catalog[kind]), kind, paths[kind])
    return paths
