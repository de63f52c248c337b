"""Hashing utilities."""

import hashlib


def generate_article_key(candidate_id: str, url: str) -> str:
    """Generate a stable record key from the candidate ID and article URL."""
    return hashlib.sha256(f"{candidate_id}:{url}".encode()).hexdigest()[:16]
