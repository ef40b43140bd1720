"""Core Layer — session lifecycle state machine, no IO, no FastAPI.

Invariants:
    - No module in core/ imports from api/, schemas/ or infrastructure/
    - Wall-clock time enters only through an injected Clock
    - Every mutation of shared state happens inside SessionStore.locked()
"""
