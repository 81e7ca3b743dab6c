"""
Token hashing

One-way, deterministic digests used to look sessions up by equality.
Raw tokens are never stored or logged.
"""

import hashlib


def hash_token(token: str) -> str:
    """SHA-256 hex digest of a token string"""
    return hashlib.sha256(token.encode()).hexdigest()


def token_fingerprint(token: str) -> str:
    """Short, log-safe identifier for a token"""
    return hash_token(token)[:12]


def short_id(session_id: str) -> str:
    return f"{session_id[:8]}..."
