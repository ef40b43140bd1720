"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas check JSON types only; lifecycle preconditions are enforced by core/
    - Wire names are camelCase; Python attributes are snake_case
"""
