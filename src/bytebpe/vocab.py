"""Bidirectional token <-> id vocabulary."""

from collections.abc import Iterable
import logging

from .codec import byte_tokens
from .errors import VocabularyError
from .types import Token, TokenId

log = logging.getLogger(__name__)


class Vocabulary:
    """
    Insertion-ordered mapping between tokens and dense integer ids.

    Ids are handed out sequentially from 0 and are never reused. Both
    directions are kept in private dicts that only :meth:`add_token` mutates.
    """

    def __init__(self) -> None:
        self._tok_to_id: dict[Token, TokenId] = {}
        self._id_to_tok: dict[TokenId, Token] = {}

    @classmethod
    def with_byte_tokens(cls) -> "Vocabulary":
        """Create a vocabulary preloaded with the 256 canonical byte tokens."""
        vocab = cls()
        for tok in byte_tokens():
            vocab.add_token(tok)
        log.debug(f"byte vocabulary initialized with {vocab.size} tokens")
        return vocab

    @classmethod
    def from_entries(cls, entries: Iterable[tuple[Token, TokenId]]) -> "Vocabulary":
        """
        Rebuild a vocabulary from :meth:`list_entries` output.

        :raises VocabularyError: If ids are not dense and in insertion order,
                                 or a token appears twice.
        """
        vocab = cls()
        for tok, tok_id in entries:
            if tok in vocab:
                raise VocabularyError("duplicate token in entries", invalid_tok=tok)
            if tok_id != vocab.size:
                raise VocabularyError(
                    f"expected id {vocab.size} got {tok_id}", invalid_tok=tok
                )
            vocab.add_token(tok)
        return vocab

    def add_token(self, token: Token) -> TokenId:
        """Register ``token`` and return its id; existing tokens keep their id."""
        tok_id = self._tok_to_id.get(token)
        if tok_id is not None:
            return tok_id
        tok_id = len(self._tok_to_id)
        self._tok_to_id[token] = tok_id
        self._id_to_tok[tok_id] = token
        return tok_id

    def get_id(self, token: Token) -> TokenId | None:
        return self._tok_to_id.get(token)

    def get_token(self, tok_id: TokenId) -> Token | None:
        return self._id_to_tok.get(tok_id)

    @property
    def size(self) -> int:
        """Number of distinct tokens registered."""
        return len(self._tok_to_id)

    def list_entries(self) -> list[tuple[Token, TokenId]]:
        """Return all ``(token, id)`` entries in insertion order."""
        return list(self._tok_to_id.items())

    def __len__(self) -> int:
        return self.size

    def __contains__(self, token: object) -> bool:
        return token in self._tok_to_id

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vocabulary):
            return NotImplemented
        return self.list_entries() == other.list_entries()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(size={self.size})"
