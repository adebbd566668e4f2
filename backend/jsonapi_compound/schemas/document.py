"""Document Schemas — Pydantic models for JSON:API compound documents.

Invariants:
    - Relationship `data` is an identifier, a list of identifiers, or null (never absent)
    - Resource ids are strings on the wire
    - Optional members (links, meta, relationships) omitted when unset, via
      response_model_exclude_unset on the routes

Design Decisions:
    - Loose dict[str, Any] for attributes/links/meta: attribute rendering belongs to
      each resource, not to the envelope (ADR: responsibility separation)
"""

from typing import Any

from pydantic import BaseModel


class ResourceIdentifier(BaseModel):
    """type + id pair used in relationship linkage."""
    type: str
    id: str


class RelationshipObject(BaseModel):
    """Linkage for one relationship of a resource object."""
    data: ResourceIdentifier | list[ResourceIdentifier] | None
    links: dict[str, Any] | None = None
    meta: dict[str, Any] | None = None


class ResourceObject(BaseModel):
    """A fully rendered resource, in `data` or `included`."""
    id: str
    type: str
    attributes: dict[str, Any] = {}
    relationships: dict[str, RelationshipObject] | None = None
    links: dict[str, Any] | None = None
    meta: dict[str, Any] | None = None


class JsonApiInfo(BaseModel):
    version: str = "1.0"


class CompoundDocument(BaseModel):
    """Top-level document: primary data plus flattened includes."""
    jsonapi: JsonApiInfo = JsonApiInfo()
    data: ResourceObject | list[ResourceObject] | None
    included: list[ResourceObject] = []
