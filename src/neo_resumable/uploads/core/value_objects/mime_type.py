"""MIME type matching against allow-lists.

Rules are either exact types (``image/jpeg``) or family wildcards
(``image/*``) admitting every type whose prefix is ``image/``. Comparison
ignores case and any ``;`` parameters; the declared type itself is stored
and echoed back unchanged.
"""

from typing import Iterable


def normalize_mime_type(mime_type: str) -> str:
    """Lower-case the type and drop parameters such as ``; charset=utf-8``."""
    return mime_type.split(";", 1)[0].strip().lower()


def mime_type_matches(mime_type: str, rule: str) -> bool:
    """Check one MIME type against one allow-list rule."""
    mime_type = normalize_mime_type(mime_type)
    rule = normalize_mime_type(rule)
    if rule == "*/*":
        return True
    if rule.endswith("/*"):
        return mime_type.startswith(rule[:-1])
    return mime_type == rule


def is_mime_type_allowed(mime_type: str, allowed: Iterable[str]) -> bool:
    """Check a MIME type against an allow-list; an empty list admits everything."""
    rules = list(allowed)
    if not rules:
        return True
    return any(mime_type_matches(mime_type, rule) for rule in rules)
