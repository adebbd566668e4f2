"""ORM Models — sample blog domain served by the API.

Invariants:
    - Instances are transient (never attached to a session); no engine is configured
    - Relationships left unassigned stay unloaded and render as MISSING

Design Decisions:
    - One-directional relationships (no back_populates): assigning one side never
      silently loads the other, so load state stays explicit
"""
