"""API Layer — FastAPI routes, dependencies and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Routes map one request to one core operation and return its result verbatim

Design Decisions:
    - Thin routes delegate to core/; no lifecycle rule is decided here
"""
