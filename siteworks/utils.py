"""
Siteworks - Utilities
"""

import re
import unicodedata

# Letters and digits of any script; "_" counts as a separator
_WORD_RE = re.compile(r"[^\W_]+")


def _strip_accents(text: str) -> str:
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def generate_internal_id(title: str | None) -> str:
    """
    Derive an internal id from a title.

    Accents are stripped, every run of letters or digits is capitalized and
    the runs are joined: "My Site - Ölands" -> "MySiteOlands". Letters of
    other scripts are kept ("Главная" -> "Главная"). The result holds no
    separators or punctuation and is safe as a cache-key fragment.

    Args:
        title: Title to derive from

    Returns:
        The internal id, or "" if the title has no letters or digits
    """
    if not title:
        return ""

    words = _WORD_RE.findall(_strip_accents(title))
    return "".join(word[0].upper() + word[1:] for word in words)
