from __future__ import annotations

from typing import Any, Dict, List, Literal

from pydantic import BaseModel, Field

Kind = Literal["heroes", "artifacts"]


class Entity(BaseModel):
    """A hero or artifact as written to the catalog files.

    Field order is the serialized order: name, slug, link, img.
    """

    name: str = Field(..., description="Display name (link text or humanized slug)")
    slug: str = Field(..., pattern=r"^[a-z0-9-]+$", description="Natural key within a kind")
    link: str = Field(..., description="Absolute page URL: {base}/{kind}/{slug}")
    img: str = Field(..., description="Absolute image URL: {base}/images/{kind}/{slug}.webp")

    @classmethod
    def build(cls, kind: str, slug: str, name: str, base_url: str) -> "Entity":
        base = base_url.rstrip("/")
        return cls(
            name=name,
            slug=slug,
            link=f"{base}/{kind}/{slug}",
            img=f"{base}/images/{kind}/{slug}.webp",
        )


class KindCatalog(BaseModel):
    """One output file: the ordered entity list for a single kind."""

    kind: Kind
    entities: List[Entity] = Field(default_factory=list)

    def to_document(self) -> Dict[str, Any]:
        return {self.kind: [e.model_dump() for e in self.entities]}
