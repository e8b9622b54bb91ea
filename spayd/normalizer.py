# spayd/normalizer.py
"""Escaping of free-text values (RN, MSG, X-URL) for the ``*``-delimited format.

Два шага:

1. *optional* transliteration – upper-case, NFD, drop combining accents
   (``"Dvořák"`` → ``"DVORAK"``);
2. escaping – always applied, never rejects input.
"""
from __future__ import annotations

import re
import unicodedata
from urllib.parse import quote

# Combining Diacritical Marks block
_COMBINING_MARKS_RE = re.compile("[\u0300-\u036f]")

# ASCII characters that would break the format or make decoding ambiguous
_ESCAPES = {
    "*": "%2A",  # field delimiter
    "+": "%2B",  # ACC/BIC separator, URI-encoded space
    "%": "%25",  # the escape character itself
}


def transliterate(text: str) -> str:
    """Upper-case *text* and strip accents, leaving base Latin letters."""
    decomposed = unicodedata.normalize("NFD", text.upper())
    return _COMBINING_MARKS_RE.sub("", decomposed)


def encode_chars(text: str, normalize: bool = False) -> str:
    """Escape *text* so it is safe inside a SPAYD attribute value.

    Parameters
    ----------
    text
        Raw user text.
    normalize
        Transliterate before escaping (see :func:`transliterate`).

    Non-ASCII code points are percent-encoded as UTF-8 (URI-component style),
    ``*``, ``+`` and ``%`` are escaped, every other ASCII character passes
    through unchanged.
    """
    if normalize:
        text = transliterate(text)

    parts: list[str] = []
    for char in text:
        if ord(char) > 127:
            parts.append(quote(char, safe="", errors="surrogatepass"))
        else:
            parts.append(_ESCAPES.get(char, char))
    return "".join(parts)


__all__ = ["encode_chars", "transliterate"]
