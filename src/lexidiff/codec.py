from __future__ import annotations

from urllib.parse import quote, unquote

# Characters JavaScript's encodeURI leaves alone besides letters, digits and "_.-~".
_URI_SAFE = ";/,?:@&=+$!*'()#"


def encode_uri(text: str) -> str:
    """Percent-encode ``text`` the way JavaScript's ``encodeURI`` does."""
    if not text:
        return text or ""
    return quote(text, safe=_URI_SAFE, encoding="utf-8", errors="strict")


def decode_uri(text: str) -> str:
    """
    Reverse :func:`encode_uri`; a literal ``+`` stays a plus sign.

    Malformed escapes such as ``%`` or ``%GG`` are kept as-is, and byte runs
    that are not valid UTF-8 decode to U+FFFD.
    """
    if not text:
        return text or ""
    return unquote(text, encoding="utf-8", errors="replace")
