from __future__ import annotations

import re
import unicodedata
from typing import Any

"""Header key canonicalization.

Source files spell the same column many ways ("Debit Note", "DEBIT-NOTE ",
"Débit note"). Every header is reduced to a comparison token: NFKD decomposed,
combining marks removed, lower-cased, and stripped of anything that is not
[a-z0-9].
"""

__all__ = [
    "normalize_key",
]

_NON_ALNUM = re.compile(r"[^a-z0-9]")


def normalize_key(value: Any) -> str:
    """Return the canonical token for a header label (never raises).

    >>> normalize_key("Débit-Note ")
    'debitnote'
    >>> normalize_key(None)
    ''
    """
    if value is None:
        return ""
    text = str(value)
    decomposed = unicodedata.normalize("NFKD", text)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return _NON_ALNUM.sub("", stripped.lower())
