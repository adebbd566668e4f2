"""Compound Document — renders primary data plus the flattened `included` section.

Invariants:
    - `included` never repeats a resource, and never repeats the primary data itself
    - Resource objects carry `relationships` only for requested relationships
    - Empty `links` / `meta` / `relationships` are omitted from resource objects
    - Pure: no IO, deterministic for a given resource graph and request

Design Decisions:
    - Thin envelope on top of JsonApiResource.included() and
      requested_relationships_as_identifiers(): the resolver owns traversal, this
      module only shapes dicts (ADR: responsibility separation)
"""

from typing import Any

from jsonapi_compound.core.flatten import unique_resources
from jsonapi_compound.core.includes import IncludeRequest
from jsonapi_compound.core.resource import JsonApiResource, JsonApiResourceCollection

JSONAPI_VERSION = "1.0"


def resource_object(resource: JsonApiResource, request: IncludeRequest) -> dict:
    """Full resource object: identifier, attributes and requested linkage."""
    obj: dict[str, Any] = {
        "id": resource.to_id(),
        "type": resource.to_type(),
        "attributes": resource.to_attributes(request),
    }
    relationships = resource.requested_relationships_as_identifiers(request)
    if relationships:
        obj["relationships"] = relationships
    links = resource.to_links(request)
    if links:
        obj["links"] = links
    meta = resource.to_meta(request)
    if meta:
        obj["meta"] = meta
    return obj


def build_compound_document(
    data: JsonApiResource | JsonApiResourceCollection | None,
    request: IncludeRequest,
) -> dict:
    """Top-level {"jsonapi", "data", "included"} document for a resource or collection."""
    if data is None or (isinstance(data, JsonApiResource) and data.resource is None):
        return {"jsonapi": {"version": JSONAPI_VERSION}, "data": None, "included": []}

    primary = [
        resource for resource in data.includable()
        if resource.should_be_present_in_includes()
    ]
    primary_keys = {resource.to_unique_resource_identifier() for resource in primary}
    included = [
        resource for resource in unique_resources(data.included(request))
        if resource.to_unique_resource_identifier() not in primary_keys
    ]

    if isinstance(data, JsonApiResourceCollection):
        rendered_data: Any = [resource_object(resource, request) for resource in primary]
    else:
        rendered_data = resource_object(data, request)

    return {
        "jsonapi": {"version": JSONAPI_VERSION},
        "data": rendered_data,
        "included": [resource_object(resource, request) for resource in included],
    }
