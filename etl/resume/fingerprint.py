"""
Content fingerprinting for uploaded documents.
"""
import hashlib


def generate_file_fingerprint(content: bytes) -> str:
    """Return the SHA-256 hex digest of raw file bytes.

    The digest depends on the bytes only: file name, upload time and any
    client metadata never participate, so identical uploads always map to
    the same storage keys.
    """
    return hashlib.sha256(content).hexdigest()


def short_fingerprint(fingerprint: str, length: int = 8) -> str:
    """Leading hex characters used as a collision-avoiding key suffix."""
    return fingerprint[:length]
