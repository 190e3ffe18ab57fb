"""Encode text to token ids and decode ids back to text."""

from dataclasses import dataclass

from .bpe import merge_pair
from .codec import bytes_to_text, text_to_byte_tokens, token_to_bytes
from .errors import IdNotFoundError, TokenNotFoundError
from .types import MergeTable, Token, TokenId
from .vocab import Vocabulary


@dataclass(frozen=True)
class EncodingDetails:
    """Token ids alongside the final token segmentation."""

    ids: list[TokenId]
    tokens: list[Token]


def _apply_merges(text: str, merges: MergeTable) -> list[Token]:
    """Replay every merge rule in training order, one full pass per rule."""
    tokens = text_to_byte_tokens(text)
    for left, right, merged in merges:
        # nothing left to merge
        if len(tokens) < 2:
            break
        tokens = merge_pair(tokens, left, right, merged)
    return tokens


def _lookup_ids(tokens: list[Token], vocab: Vocabulary) -> list[TokenId]:
    ids: list[TokenId] = []
    for pos, tok in enumerate(tokens):
        tok_id = vocab.get_id(tok)
        if tok_id is None:
            raise TokenNotFoundError(
                "token not found in vocabulary", token=tok, position=pos
            )
        ids.append(tok_id)
    return ids


def encode_with_details(
    text: str, vocab: Vocabulary, merges: MergeTable
) -> EncodingDetails:
    """
    Encode text and keep the token strings the ids were derived from.

    :raises TokenNotFoundError: If a resulting token is not in ``vocab``.
    """
    tokens = _apply_merges(text, merges)
    return EncodingDetails(ids=_lookup_ids(tokens, vocab), tokens=tokens)


def encode(text: str, vocab: Vocabulary, merges: MergeTable) -> list[TokenId]:
    """
    Encode text into token ids.

    :raises TokenNotFoundError: If a resulting token is not in ``vocab``.
    """
    return encode_with_details(text, vocab, merges).ids


def decode(ids: list[TokenId], vocab: Vocabulary, errors: str = "strict") -> str:
    """
    Decode token ids back into text.

    :param errors: How to handle invalid UTF-8, ``"strict"`` or ``"replace"``.
    :raises IdNotFoundError: If any id is not registered in ``vocab``.
    :raises DecodeError: If the bytes are not valid UTF-8 under ``"strict"``.
    """
    buf = bytearray()
    for tok_id in ids:
        tok = vocab.get_token(tok_id)
        if tok is None:
            raise IdNotFoundError(
                "id not found in vocabulary", token_id=tok_id, vocab_size=vocab.size
            )
        buf += token_to_bytes(tok)
    # token stream -> byte stream -> python string
    return bytes_to_text(bytes(buf), errors=errors)


__all__ = ["EncodingDetails", "encode", "encode_with_details", "decode"]
