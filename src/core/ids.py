"""Opaque identifiers for sessions and players"""

import secrets

ID_PREFIX = "CHESS_"


def generate_id(prefix: str = ID_PREFIX) -> str:
    """No format contract beyond uniqueness, the prefix only makes ids easy to spot in logs."""
    return f"{prefix}{secrets.token_hex(6)}"
