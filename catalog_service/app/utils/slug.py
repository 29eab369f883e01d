import re
import unicodedata

_NON_ALPHANUMERIC = re.compile(r"[^a-z0-9]+")


def generate_slug(name: str) -> str:
    """Build a URL-safe slug: "Crèmes & Soins" -> "cremes-soins"."""
    decomposed = unicodedata.normalize("NFD", name.lower())
    ascii_only = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return _NON_ALPHANUMERIC.sub("-", ascii_only).strip("-")
