"""URL-safe identifiers derived from display names."""

import re
import unicodedata

_NON_SLUG_CHARS = re.compile(r"[^a-z0-9]+")

# Lowercase Cyrillic and Greek letters spelled in Latin. Scripts without an
# entry (CJK, Arabic, ...) are dropped.
_TRANSLITERATION = str.maketrans(
    {
        # Cyrillic
        "а": "a", "б": "b", "в": "v", "г": "g", "ґ": "g", "д": "d",
        "е": "e", "ё": "yo", "є": "ye", "ж": "zh", "з": "z", "и": "i",
        "і": "i", "ї": "yi", "й": "y", "к": "k", "л": "l", "м": "m",
        "н": "n", "о": "o", "п": "p", "р": "r", "с": "s", "т": "t",
        "у": "u", "ў": "u", "ф": "f", "х": "kh", "ц": "ts", "ч": "ch",
        "ш": "sh", "щ": "shch", "ъ": "", "ы": "y", "ь": "", "э": "e",
        "ю": "yu", "я": "ya",
        # Greek
        "α": "a", "ά": "a", "β": "b", "γ": "g", "δ": "d", "ε": "e",
        "έ": "e", "ζ": "z", "η": "i", "ή": "i", "θ": "th", "ι": "i",
        "ί": "i", "ϊ": "i", "ΐ": "i", "κ": "k", "λ": "l", "μ": "m",
        "ν": "n", "ξ": "x", "ο": "o", "ό": "o", "π": "p", "ρ": "r",
        "σ": "s", "ς": "s", "τ": "t", "υ": "y", "ύ": "y", "ϋ": "y",
        "ΰ": "y", "φ": "f", "χ": "ch", "ψ": "ps", "ω": "o", "ώ": "o",
    }
)


def slugify(text: str | None) -> str:
    """Convert a display name to a lowercase, URL-safe slug.

    Cyrillic and Greek letters are transliterated, accented Latin letters
    are reduced to their ASCII base letter, and everything else outside
    ``[a-z0-9]`` collapses into single hyphens.

    Args:
        text: Human-readable name

    Returns:
        Slug, or an empty string when nothing URL-safe remains
    """
    if not text:
        return ""

    latin_text = text.lower().translate(_TRANSLITERATION)
    ascii_text = (
        unicodedata.normalize("NFKD", latin_text)
        .encode("ascii", "ignore")
        .decode("ascii")
    )
    slug = _NON_SLUG_CHARS.sub("-", ascii_text)
    return slug.strip("-")
