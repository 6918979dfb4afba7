"""
Unicode normalization applied to the whole corpus before tokenizing.

Without it, "ção" typed as c + U+0327 + a + U+0303 + o and the
precomposed "ção" would be counted as two different words, and the
accent table (which maps precomposed characters) would not see them.
"""

from __future__ import annotations

import unicodedata

COMPOSED_FORMS = ("NFC", "NFKC")


def normalize(raw_text: str, form: str = "NFC") -> str:
    """
    Apply a composed Unicode normalization form to text.

    Args:
        raw_text: Any string.
        form: "NFC" (canonical composition) or "NFKC" (compatibility
            composition, also folds ligatures such as "ﬁ" into "fi").

    Returns:
        Normalized text.

    Raises:
        ValueError: If form is not a composed form.

    Example:
        >>> normalize("c\\u0327a\\u0303o") == "ção"
        True
    """
    if form not in COMPOSED_FORMS:
        raise ValueError(f"form must be one of {COMPOSED_FORMS}, got {form!r}")
    return unicodedata.normalize(form, raw_text)
