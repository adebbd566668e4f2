"""Compound-Document Flattening — merge nested include results into one ordered list.

Invariants:
    - Output never contains lists: nested sequences are flattened recursively
    - Entities whose should_be_present_in_includes() is False are dropped
    - Deduplication by unique identifier ("type:id"); first occurrence wins
    - Input order is preserved for every surviving entity

Design Decisions:
    - Pure functions over the resource protocol, no knowledge of JsonApiResource itself
      (ADR: functional core, resource.py stays the only place that knows the classes)
"""

from typing import Any, Iterable, Iterator, Protocol


class Includable(Protocol):
    def should_be_present_in_includes(self) -> bool: ...
    def to_unique_resource_identifier(self) -> str: ...


def flatten(items: Iterable[Any]) -> Iterator[Any]:
    """Yield leaf entities from arbitrarily nested lists/tuples."""
    for item in items:
        if isinstance(item, (list, tuple)):
            yield from flatten(item)
        else:
            yield item


def present_only(items: Iterable[Any]) -> Iterator[Includable]:
    for item in items:
        if item.should_be_present_in_includes():
            yield item


def unique_resources(items: Iterable[Includable]) -> list[Includable]:
    """Drop later duplicates of the same type+id, keeping first-seen order."""
    seen: set[str] = set()
    unique = []
    for item in items:
        key = item.to_unique_resource_identifier()
        if key in seen:
            continue
        seen.add(key)
        unique.append(item)
    return unique


def flatten_included(items: Iterable[Any]) -> list[Includable]:
    """flatten → present_only → unique_resources, in that order."""
    return unique_resources(present_only(flatten(items)))
