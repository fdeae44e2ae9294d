"""
Reversible mapping between raw bytes and printable unicode characters.

Merge tables are stored as text, so every byte value needs a character that
survives JSON and never collides with whitespace or control characters.
Printable ASCII and two printable Latin-1 ranges map to themselves; the
remaining 68 byte values are shifted to code points 256 and up.
"""

from functools import lru_cache


@lru_cache(maxsize=None)
def bytes_to_unicode() -> dict[int, str]:
    """Return the 256-entry byte -> surrogate character mapping."""
    bs = (
        list(range(ord("!"), ord("~") + 1))
        + list(range(ord("¡"), ord("¬") + 1))
        + list(range(ord("®"), ord("ÿ") + 1))
    )
    cs = bs[:]
    n = 0
    # bytes 0-32, 127-160 and 173 in ascending order
    for b in range(256):
        if b not in bs:
            bs.append(b)
            cs.append(256 + n)
            n += 1
    return {b: chr(c) for b, c in zip(bs, cs)}


@lru_cache(maxsize=None)
def unicode_to_bytes() -> dict[str, int]:
    """Return the inverse of :func:`bytes_to_unicode`."""
    return {ch: b for b, ch in bytes_to_unicode().items()}


def bytes_to_chars(data: bytes) -> str:
    """Map each byte to its surrogate character (one char per byte)."""
    enc = bytes_to_unicode()
    return "".join(enc[b] for b in data)


def chars_to_bytes(text: str) -> bytes:
    """
    Map surrogate characters back to bytes.

    Characters outside the mapping are dropped rather than raising.
    """
    dec = unicode_to_bytes()
    return bytes(dec[c] for c in text if c in dec)


def text_to_bytes(text: str) -> bytes:
    """
    UTF-8 encode ``text``.

    Lone UTF-16 surrogates cannot be encoded; each one is replaced by U+FFFD
    so that the character count of ``text`` is preserved.
    """
    try:
        return text.encode("utf-8")
    except UnicodeEncodeError:
        cleaned = "".join(
            "\ufffd" if 0xD800 <= ord(c) <= 0xDFFF else c for c in text
        )
        return cleaned.encode("utf-8")


def text_to_chars(text: str) -> str:
    """UTF-8 encode ``text`` and map the bytes to surrogate characters."""
    return bytes_to_chars(text_to_bytes(text))
