"""Relationship Values — the MISSING marker, conditional helpers and the unknown wrapper.

Invariants:
    - MISSING is a singleton; identity comparison (`is MISSING`) is the only check
    - when_loaded() never triggers a lazy load: unloaded ORM attributes become MISSING
    - UnknownRelationship contributes nothing to `included` and never links

Design Decisions:
    - Missing ("not part of this response") is distinct from None ("related value is
      empty"): None still links as {"data": null}, MISSING disappears entirely
    - SQLAlchemy's inspection API decides load state, so declarations can be written
      against ORM instances without touching the session
"""

from typing import Any, Callable

from sqlalchemy import inspect as sa_inspect


class MissingValue:
    """Marker for a relationship that is not part of this response."""

    _instance: "MissingValue | None" = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def is_missing(self) -> bool:
        return True

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISSING"


MISSING = MissingValue()


def when(condition: bool, value: Any) -> Any:
    """Return value (calling it if callable) when condition holds, MISSING otherwise."""
    if not condition:
        return MISSING
    return value() if callable(value) else value


def when_loaded(instance: Any, attribute: str, wrap: Callable[[Any], Any]) -> Any:
    """Wrap an already-loaded ORM relationship, or return MISSING if it was never loaded."""
    state = sa_inspect(instance, raiseerr=False)
    if state is not None:
        if attribute in state.unloaded:
            return MISSING
    elif not hasattr(instance, attribute):
        return MISSING
    return wrap(getattr(instance, attribute))


class UnknownRelationship:
    """Inert wrapper around a value that is not a recognized resource shape."""

    def __init__(self, value: Any):
        self.value = value

    @property
    def value_type(self) -> str:
        return type(self.value).__name__

    def includable(self) -> list:
        return []

    def included(self, request: Any) -> list:
        return []

    def is_missing(self) -> bool:
        return False

    def should_be_present_in_includes(self) -> bool:
        return False

    def __repr__(self) -> str:
        return f"UnknownRelationship({self.value_type})"
