"""
Byte-level codec: text <-> UTF-8 bytes <-> canonical byte tokens.

Every byte has exactly one canonical token. Printable ASCII bytes (32-126)
render as the character itself, all other bytes render as ``<0xHH>``
with lowercase, zero padded hex digits. Merged tokens are plain
concatenations of these renderings, so :func:`token_to_bytes` recovers
the bytes of any token by scanning it left to right.
"""

from typing import Final

import regex as re

from .errors import DecodeError
from .types import Token

BYTE_VOCAB_SIZE: Final[int] = 256
PRINTABLE_MIN: Final[int] = 32
PRINTABLE_MAX: Final[int] = 126
ENCODING: Final[str] = "utf-8"

# exactly 6 chars: "<0x" + 2 hex digits + ">"
_ESCAPE_RE: Final = re.compile(r"<0x([0-9a-fA-F]{2})>")


def text_to_bytes(text: str) -> bytes:
    """Encode text as UTF-8 bytes."""
    return text.encode(ENCODING)


def bytes_to_text(data: bytes, errors: str = "strict") -> str:
    """
    Decode UTF-8 bytes back into text.

    :param data: Byte sequence to decode.
    :param errors: ``"strict"`` raises on invalid UTF-8, ``"replace"``
                   substitutes U+FFFD for every invalid sequence.
    :raises DecodeError: If ``data`` is not valid UTF-8 under the strict policy.
    """
    try:
        return bytes(data).decode(ENCODING, errors=errors)
    except UnicodeDecodeError as e:
        raise DecodeError("invalid utf-8 byte sequence", data=bytes(data)) from e


def byte_to_token(byte: int) -> Token:
    """Render a single byte value as its canonical token."""
    if PRINTABLE_MIN <= byte <= PRINTABLE_MAX:
        return chr(byte)
    return f"<0x{byte:02x}>"


def byte_tokens() -> list[Token]:
    """Return all 256 canonical byte tokens ordered by byte value."""
    return [byte_to_token(b) for b in range(BYTE_VOCAB_SIZE)]


def text_to_byte_tokens(text: str) -> list[Token]:
    """Split text into one canonical token per UTF-8 byte."""
    return [byte_to_token(b) for b in text_to_bytes(text)]


def token_to_bytes(token: Token) -> bytes:
    """
    Expand a (possibly merged) token back into raw bytes.

    Handles merged tokens that may contain multiple escaped bytes
    (``"<0xe4><0xbd>"``), mixed content (``"e<0x0a>"``) or pure ASCII
    (``"low"``).

    :raises DecodeError: If the token holds a literal character outside the
                         byte range.
    """
    out = bytearray()
    i = 0
    n = len(token)

    while i < n:
        # escaped byte takes priority over the literal "<"
        m = _ESCAPE_RE.match(token, i)
        if m is not None:
            out.append(int(m.group(1), 16))
            i = m.end()
            continue

        code = ord(token[i])
        if code >= BYTE_VOCAB_SIZE:
            raise DecodeError("token character outside byte range", data=token)
        out.append(code)
        i += 1

    return bytes(out)


__all__ = [
    "BYTE_VOCAB_SIZE",
    "text_to_bytes",
    "bytes_to_text",
    "byte_to_token",
    "byte_tokens",
    "text_to_byte_tokens",
    "token_to_bytes",
]
