"""Identifier Generator — opaque ids and rendezvous codes.

Invariants:
    - new_id() values carry no structure; callers must not parse them
    - generate_code() always returns exactly 6 digits, never a leading zero
"""

import secrets
import uuid


def new_id() -> str:
    """Random UUID4 string for sessions and messages."""
    return str(uuid.uuid4())


def generate_code() -> str:
    """6-digit rendezvous code in 100000..999999."""
    return str(100_000 + secrets.randbelow(900_000))
