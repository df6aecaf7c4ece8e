"""Slug helpers for article URLs."""

import re

_DISALLOWED = re.compile(r"[^a-z0-9\s-]")
_SEPARATORS = re.compile(r"[\s_-]+")
_EDGE_HYPHENS = re.compile(r"^-+|-+$")

FALLBACK_SLUG = "article"


def slugify(text: str) -> str:
    """Turn a title into a lowercase ASCII slug.

    "Hello World!" -> "hello-world"
    "Tutorial Next.js & Prisma" -> "tutorial-nextjs-prisma"
    "_Ini-Percobaan-" -> "ini-percobaan"
    """
    value = str(text).lower().strip()
    value = _DISALLOWED.sub("", value)
    value = _SEPARATORS.sub("-", value)
    return _EDGE_HYPHENS.sub("", value)


__all__ = ["slugify", "FALLBACK_SLUG"]
