"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - ResourceType, ResourceId are strings on the wire (JSON:API requires string ids)
    - IncludePrefix is either "" (root) or a dotted path ending in "."
    - All valid states encoded as Enums — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: policy values come straight from environment variables
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

ResourceType = NewType("ResourceType", str)
ResourceId = NewType("ResourceId", str)


# ─── Path Types ──────────────────────────────────────────────────

IncludePath = NewType("IncludePath", str)       # "comments.author"
IncludePrefix = NewType("IncludePrefix", str)   # "" or "comments."

ROOT_PREFIX = IncludePrefix("")
PATH_SEPARATOR = "."


# ─── Enums ───────────────────────────────────────────────────────

class RelationshipKind(str, Enum):
    """The four shapes a resolved relationship value can take."""
    RESOURCE = "resource"
    COLLECTION = "collection"
    UNKNOWN = "unknown"
    MISSING = "missing"


class UnknownRelationshipPolicy(str, Enum):
    """What the resolver does with a value it cannot render."""
    RAISE = "raise"
    WRAP = "wrap"
