"""JSON:API Compound Documents — include resolution and flattening for FastAPI services.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)

Design Decisions:
    - Empty __init__.py: explicit imports only, no star exports
"""
