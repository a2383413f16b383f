"""
Object key derivation for raw and parsed resume artifacts.

Layout:
    <hash>.pdf                      raw document, keyed purely by content
    parsed/<slug>-<hash8>.txt       YAML body of the validated profile
    pending/<hash>.json             short-lived ingestion claim
"""
import re
from typing import Optional

from etl.resume.fingerprint import short_fingerprint

UNKNOWN_SLUG = "unknown"
HASH_SUFFIX_LENGTH = 8

_DISALLOWED_RE = re.compile(r"[^\w.\- ]", re.UNICODE)
_SEPARATOR_RE = re.compile(r"[\s._]+", re.UNICODE)
_HASH_SUFFIX_RE = re.compile(r"-[0-9a-f]{%d}$" % HASH_SUFFIX_LENGTH)


def slugify_name(name: Optional[str], max_length: int = 64) -> str:
    """Normalize a candidate name into a filesystem-safe slug.

    "Jane Q. Doe" -> "jane_q_doe". Dots, underscores and whitespace act as
    word separators; hyphens are kept. Empty results fall back to "unknown".
    """
    if not name:
        return UNKNOWN_SLUG

    cleaned = _DISALLOWED_RE.sub("", name)
    words = [word for word in _SEPARATOR_RE.split(cleaned) if word]
    slug = "_".join(words).strip("_-").lower()
    slug = slug[:max_length].strip("_-")

    return slug or UNKNOWN_SLUG


def raw_key(fingerprint: str, suffix: str = ".pdf") -> str:
    return f"{fingerprint}{suffix}"


def parsed_key(
    name: Optional[str],
    fingerprint: str,
    prefix: str = "parsed/",
    suffix: str = ".txt",
    max_length: int = 64,
) -> str:
    """Key for the parsed artifact; the hash suffix keeps same-named candidates apart."""
    slug = slugify_name(name, max_length=max_length)
    return f"{prefix}{slug}-{short_fingerprint(fingerprint, HASH_SUFFIX_LENGTH)}{suffix}"


def claim_key(fingerprint: str, prefix: str = "pending/") -> str:
    return f"{prefix}{fingerprint}.json"


def display_name_from_key(key: str, prefix: str = "parsed/", suffix: str = ".txt") -> str:
    """Recover the slug from a parsed key: strip namespace, suffix and hash segment.

    The result is a display label only, never an identity.
    """
    base = key[len(prefix):] if key.startswith(prefix) else key
    if suffix and base.endswith(suffix):
        base = base[:-len(suffix)]
    return _HASH_SUFFIX_RE.sub("", base)
