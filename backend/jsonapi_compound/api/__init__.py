"""API Layer — FastAPI routes, error handlers and the sample blog resources.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints return structured JSON responses

Design Decisions:
    - Thin routes delegate to core/document.py (ADR: impureim sandwich)
"""
