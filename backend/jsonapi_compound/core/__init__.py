"""Core Layer — pure compound-document logic, no IO, no async, no web framework.

Invariants:
    - No module in core/ imports from api/, infrastructure/, models/ or config
    - Resolution is synchronous; deferred values run inline on first access

Design Decisions:
    - Functional core separated from imperative shell (ADR: impureim sandwich)
"""
