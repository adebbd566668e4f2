"""Relationship Linkage — identifier objects for a resource's own `relationships` block.

Invariants:
    - Wire shape is {"data": {"type", "id"}} | {"data": [...]} | {"data": null}
    - Attributes never appear in linkage
    - `links` / `meta` keys are emitted only when a callback populated them
    - Callbacks run in registration order, synchronously; exceptions propagate

Design Decisions:
    - RelationshipLink as mutable dataclass: callbacks are builder-style hooks that
      attach links/meta in place (ADR: narrow extension surface)
    - apply_link_callbacks isolated so a swallow-and-log policy can replace it
      without touching the resolver
"""

from dataclasses import dataclass, field
from typing import Any, Callable

from jsonapi_compound.core.domain_types import ResourceType, ResourceId


@dataclass(frozen=True)
class ResourceIdentifier:
    """Minimal type+id reference to a resource."""
    type: ResourceType
    id: ResourceId

    def to_dict(self) -> dict:
        return {"type": self.type, "id": self.id}


@dataclass
class RelationshipLink:
    """Linkage for one relationship, mutable until serialized."""
    data: ResourceIdentifier | list[ResourceIdentifier] | None
    links: dict[str, Any] = field(default_factory=dict)
    meta: dict[str, Any] = field(default_factory=dict)

    @property
    def is_to_many(self) -> bool:
        return isinstance(self.data, list)

    def to_dict(self) -> dict:
        if self.data is None:
            data = None
        elif isinstance(self.data, list):
            data = [identifier.to_dict() for identifier in self.data]
        else:
            data = self.data.to_dict()
        result: dict[str, Any] = {"data": data}
        if self.links:
            result["links"] = self.links
        if self.meta:
            result["meta"] = self.meta
        return result


LinkCallback = Callable[[RelationshipLink], None]


def apply_link_callbacks(
    link: RelationshipLink, callbacks: list[LinkCallback],
) -> RelationshipLink:
    """Run every callback against the link, in order. Failures are not caught."""
    for callback in callbacks:
        callback(link)
    return link
