"""Custom exception hierarchy for bytebpe tokenization errors."""

from .types import Token, TokenId


class ByteBPEError(Exception):
    """Base exception for all bytebpe errors."""


class DecodeError(ByteBPEError):
    """Raised when a byte sequence or token cannot be decoded."""

    def __init__(self, message: str, *, data: bytes | str | None = None) -> None:
        """Initialize with the offending data appended to the message."""
        extra = " "
        if data is not None:
            extra += f"(data: {data!r}) "
        super().__init__(message + extra)
        self.data = data


class VocabularyError(ByteBPEError):
    """Raised when vocabulary operations fail."""

    def __init__(
        self,
        message: str,
        *,
        vocab_size: int | None = None,
        invalid_tok: Token | TokenId | None = None,
    ) -> None:
        """Initialize with optional token and vocab_size that get appended to the message."""
        extra = " "
        if vocab_size is not None:
            extra += f"(vocab size: {vocab_size}) "
        if invalid_tok is not None:
            extra += f"(invalid token: {invalid_tok!r}) "
        super().__init__(message + extra)
        self.vocab_size = vocab_size
        self.invalid_tok = invalid_tok


class TokenNotFoundError(VocabularyError):
    """Raised when encoding produces a token that is not in the vocabulary."""

    def __init__(
        self, message: str, *, token: Token, position: int | None = None
    ) -> None:
        if position is not None:
            message = f"{message} (position: {position})"
        super().__init__(message, invalid_tok=token)
        self.token = token
        self.position = position


class IdNotFoundError(VocabularyError):
    """Raised when decoding is given a token id that is not in the vocabulary."""

    def __init__(
        self, message: str, *, token_id: TokenId, vocab_size: int | None = None
    ) -> None:
        super().__init__(message, vocab_size=vocab_size, invalid_tok=token_id)
        self.token_id = token_id


class TrainingError(ByteBPEError):
    """Raised when tokenizer training fails or an untrained tokenizer is used."""

    def __init__(self, message: str, *, vocab_size: object = None) -> None:
        if vocab_size is not None:
            message = f"{message} (vocab size: {vocab_size!r})"
        super().__init__(message)
        self.vocab_size = vocab_size


class ModelLoadError(ByteBPEError):
    """Raised when loading a tokenizer model fails."""

    def __init__(
        self,
        message: str,
        *,
        model_path: str | None = None,
        version_mismatch: tuple[str, str] | None = None,
        line_no: int | None = None,
    ) -> None:
        extra = " "
        if model_path:
            extra += f"(path: {model_path}) "
        if version_mismatch is not None:
            extra += f"(expected: {version_mismatch[1]}) (got {version_mismatch[0]}) "
        if line_no is not None:
            extra += f"(line: {line_no}) "
        super().__init__(message + extra)
        self.model_path = model_path
        self.version_mismatch = version_mismatch
        self.line_no = line_no
