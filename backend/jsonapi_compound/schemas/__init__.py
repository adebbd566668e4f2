"""Pydantic Schemas — response validation for the JSON:API endpoints.

Invariants:
    - Schemas validate at system boundary (API responses)
    - Core builds plain dicts; schemas only check and document their shape
"""
