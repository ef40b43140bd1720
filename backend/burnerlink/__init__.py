"""Burner Link Relay — ephemeral pairwise message relay.

Invariants:
    - Package root contains no executable code beyond the version constant
"""

__version__ = "1.0.0"
