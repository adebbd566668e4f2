"""JSON:API Resources — relationship resolution, include flattening and linkage.

Invariants:
    - requested_relationships() is computed once per instance: the include selector,
      to_relationships() and every deferred value run at most once, later calls return
      the identical mapping
    - Output order is declared order filtered by the requested names, never request order
    - with_include_prefix() returns a fresh view; the receiver's prefix is never mutated,
      so sibling branches cannot corrupt each other
    - included() is depth-first per relationship, flattened, present-only, unique by type+id
    - MISSING relationships vanish from both included() and the linkage map

Design Decisions:
    - Resolved values classified into the closed RelationshipKind variant and matched
      exhaustively (ADR: no open-ended isinstance checks in consumers)
    - Unknown values follow unknown_relationship_policy: RAISE fails fast with
      UnknownRelationshipError, WRAP degrades to an inert UnknownRelationship
    - No locking: a resource instance belongs to one request; build fresh per request
"""

import copy
import logging
from types import MappingProxyType
from typing import Any, Callable, Iterable, Iterator, Mapping

from jsonapi_compound.core.domain_types import (
    IncludePrefix, ResourceId, ResourceType, RelationshipKind,
    UnknownRelationshipPolicy, ROOT_PREFIX, PATH_SEPARATOR,
)
from jsonapi_compound.core.errors import UnknownRelationshipError
from jsonapi_compound.core.flatten import flatten_included
from jsonapi_compound.core.includes import IncludeSelector, IncludeRequest, includes
from jsonapi_compound.core.linkage import (
    LinkCallback, RelationshipLink, ResourceIdentifier, apply_link_callbacks,
)
from jsonapi_compound.core.relationship_value import MISSING, UnknownRelationship

logger = logging.getLogger(__name__)

Deferred = Callable[[], Any]


class JsonApiResource:
    """Wraps one underlying value. Subclasses override the to_* hooks."""

    resource_type: str = ""
    unknown_relationship_policy: UnknownRelationshipPolicy = UnknownRelationshipPolicy.RAISE
    include_selector: IncludeSelector = includes

    def __init__(self, resource: Any):
        self.resource = resource
        self.include_prefix: IncludePrefix = ROOT_PREFIX
        self._requested_relationships: Mapping[str, Any] | None = None
        self._link_callbacks: list[LinkCallback] = []

    @classmethod
    def collection(cls, resources: Iterable[Any]) -> "JsonApiResourceCollection":
        return JsonApiResourceCollection(resources, cls)

    # --- Hooks -----------------------------------------------------------------

    def to_id(self) -> ResourceId:
        return ResourceId(str(self.resource.id))

    def to_type(self) -> ResourceType:
        if self.resource_type:
            return ResourceType(self.resource_type)
        return ResourceType(f"{type(self.resource).__name__.lower()}s")

    def to_attributes(self, request: IncludeRequest) -> dict:
        return {}

    def to_relationships(self, request: IncludeRequest) -> dict[str, Deferred]:
        return {}

    def to_links(self, request: IncludeRequest) -> dict:
        return {}

    def to_meta(self, request: IncludeRequest) -> dict:
        return {}

    # --- Presence --------------------------------------------------------------

    def is_missing(self) -> bool:
        return self.resource is MISSING

    def should_be_present_in_includes(self) -> bool:
        return self.resource is not None

    def to_resource_identifier(self) -> ResourceIdentifier:
        return ResourceIdentifier(self.to_type(), self.to_id())

    def to_unique_resource_identifier(self) -> str:
        return f"{self.to_type()}:{self.to_id()}"

    # --- Traversal -------------------------------------------------------------

    def with_include_prefix(self, prefix: str) -> "JsonApiResource":
        """Fresh view one level deeper. Call once per traversal step.

        The resolver passes the full dotted path ("comments.author"), so a fresh
        child at the root prefix ends up at "comments.author.".
        """
        view = copy.copy(self)
        view.include_prefix = IncludePrefix(
            f"{self.include_prefix}{prefix}{PATH_SEPARATOR}",
        )
        view._requested_relationships = None
        view._link_callbacks = list(self._link_callbacks)
        return view

    def with_relationship_link(self, callback: LinkCallback) -> "JsonApiResource":
        """Register a callback that may mutate this resource's linkage object."""
        self._link_callbacks.append(callback)
        return self

    def requested_relationships(self, request: IncludeRequest) -> Mapping[str, Any]:
        """Declared relationships that were requested at this prefix, resolved once."""
        if self._requested_relationships is None:
            self._requested_relationships = MappingProxyType(
                self._resolve_requested_relationships(request),
            )
        return self._requested_relationships

    def includable(self) -> list["JsonApiResource"]:
        return [self]

    def included(self, request: IncludeRequest) -> list["JsonApiResource"]:
        """Every resource reachable through requested relationships, deduplicated."""
        entities: list[Any] = []
        for relationship in self.requested_relationships(request).values():
            entities.append(relationship.includable())
            entities.append(relationship.included(request))
        return flatten_included(entities)

    def requested_relationships_as_identifiers(self, request: IncludeRequest) -> dict:
        """Linkage for each requested relationship, keyed by relationship name."""
        return {
            name: relationship.to_resource_link(request).to_dict()
            for name, relationship in self.requested_relationships(request).items()
            if not isinstance(relationship, UnknownRelationship)
        }

    def to_resource_link(self, request: IncludeRequest) -> RelationshipLink:
        data = None if self.resource is None else self.to_resource_identifier()
        return apply_link_callbacks(RelationshipLink(data), self._link_callbacks)

    # --- Resolution ------------------------------------------------------------

    def _resolve_requested_relationships(self, request: IncludeRequest) -> dict[str, Any]:
        requested = self.include_selector.parse(request, self.include_prefix)
        if not requested:
            return {}

        resolved: dict[str, Any] = {}
        for name, deferred in self.to_relationships(request).items():
            if name not in requested:
                continue
            value = self._resolve_relationship(name, deferred())
            if value is not None:
                resolved[name] = value

        logger.debug(
            f"Resolved {len(resolved)} of {len(requested)} requested relationships",
            extra={"include_prefix": self.include_prefix or "<root>"},
        )
        return resolved

    def _resolve_relationship(self, name: str, value: Any) -> Any | None:
        match classify_relationship(value):
            case RelationshipKind.MISSING:
                return None
            case RelationshipKind.RESOURCE | RelationshipKind.COLLECTION:
                return value.with_include_prefix(f"{self.include_prefix}{name}")
            case RelationshipKind.UNKNOWN:
                return self._unknown_relationship(name, value)

    def _unknown_relationship(self, name: str, value: Any) -> UnknownRelationship:
        value_type = type(value).__name__
        if self.unknown_relationship_policy is UnknownRelationshipPolicy.RAISE:
            raise UnknownRelationshipError(name, self.include_prefix, value_type)
        logger.warning(
            f"Relationship '{self.include_prefix}{name}' resolved to {value_type}; ignoring",
            extra={"relationship": name, "value_type": value_type},
        )
        return UnknownRelationship(value)

    def __repr__(self) -> str:
        if self.resource is None or self.resource is MISSING:
            return f"{type(self).__name__}({self.resource!r})"
        return f"{type(self).__name__}({self.to_unique_resource_identifier()})"


class JsonApiResourceCollection:
    """Ordered resources behind one relationship name; fans out on inclusion."""

    def __init__(
        self,
        resources: Iterable[Any],
        resource_class: type[JsonApiResource] = JsonApiResource,
    ):
        self._missing = resources is MISSING
        self.resources: list[JsonApiResource] = [] if self._missing else [
            item if isinstance(item, JsonApiResource) else resource_class(item)
            for item in resources
        ]
        self.include_prefix: IncludePrefix = ROOT_PREFIX
        self._link_callbacks: list[LinkCallback] = []

    def __iter__(self) -> Iterator[JsonApiResource]:
        return iter(self.resources)

    def __len__(self) -> int:
        return len(self.resources)

    def is_missing(self) -> bool:
        return self._missing

    def with_include_prefix(self, prefix: str) -> "JsonApiResourceCollection":
        view = copy.copy(self)
        view.include_prefix = IncludePrefix(
            f"{self.include_prefix}{prefix}{PATH_SEPARATOR}",
        )
        view.resources = [resource.with_include_prefix(prefix) for resource in self.resources]
        view._link_callbacks = list(self._link_callbacks)
        return view

    def with_relationship_link(self, callback: LinkCallback) -> "JsonApiResourceCollection":
        self._link_callbacks.append(callback)
        return self

    def includable(self) -> list[JsonApiResource]:
        return list(self.resources)

    def included(self, request: IncludeRequest) -> list[JsonApiResource]:
        return flatten_included(resource.included(request) for resource in self.resources)

    def to_resource_link(self, request: IncludeRequest) -> RelationshipLink:
        data = [
            resource.to_resource_identifier()
            for resource in self.resources
            if resource.should_be_present_in_includes()
        ]
        return apply_link_callbacks(RelationshipLink(data), self._link_callbacks)

    def __repr__(self) -> str:
        return f"JsonApiResourceCollection({self.resources!r})"


def classify_relationship(value: Any) -> RelationshipKind:
    """Map a resolved deferred value onto the closed RelationshipKind variant."""
    if value is MISSING:
        return RelationshipKind.MISSING
    if isinstance(value, JsonApiResource):
        return RelationshipKind.MISSING if value.is_missing() else RelationshipKind.RESOURCE
    if isinstance(value, JsonApiResourceCollection):
        return RelationshipKind.MISSING if value.is_missing() else RelationshipKind.COLLECTION
    return RelationshipKind.UNKNOWN
