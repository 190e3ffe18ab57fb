"""
Stateful tokenizer bundling a trained vocabulary and merge table.
"""

from concurrent.futures import ThreadPoolExecutor
from importlib.metadata import PackageNotFoundError, version
import logging
import os
from pathlib import Path
from typing import Final

from ._sanitise import render_token
from .encoder import EncodingDetails, decode, encode, encode_with_details
from .errors import ModelLoadError, TrainingError, VocabularyError
from .trainer import StepCallback, TrainingResult, train_bpe
from .types import MergeTable, Token, TokenId
from .vocab import Vocabulary

PREFIX: Final[str] = "ByteBPE"
try:
    _version = version("bytebpe")
except PackageNotFoundError:
    _version = "dev"


VERSION: Final[str] = _version
MODEL_SUFFIX: Final[str] = ".model"
VOCAB_SUFFIX: Final[str] = ".vocab"
SECTION_MARKER: Final[str] = "---"

log = logging.getLogger(__name__)


class Tokenizer:
    """
    Byte-level BPE tokenizer.

    Holds the vocabulary and ordered merge table produced by training or
    loaded from disk, and provides encode/decode and serialization methods.
    Once trained the state is only read, so one instance can serve
    concurrent encode/decode calls.
    """

    def __init__(self) -> None:
        self._vocab: Vocabulary | None = None
        self._merges: MergeTable = []

    @property
    def vocab(self) -> Vocabulary:
        return self._require_trained("access the vocabulary of")

    @property
    def merges(self) -> MergeTable:
        """Copy of the ordered merge table."""
        self._require_trained("access the merges of")
        return list(self._merges)

    @property
    def is_trained(self) -> bool:
        return self._vocab is not None

    def train(
        self,
        text: str | list[str],
        vocab_size: int,
        verbose: bool = False,
        on_step: StepCallback | None = None,
    ) -> TrainingResult:
        """
        Train the tokenizer on raw text.

        List inputs are concatenated without a separator and treated as one
        byte stream.

        :param text: Training text as a single string or list of strings.
        :param vocab_size: Target vocabulary size including the base 256 bytes.
        :param verbose: Log each learned merge when ``True``.
        :param on_step: Synchronous observer called after every merge.
        :returns: The full training result including the step history.
        """
        if isinstance(text, list):
            text = "".join(text)

        result = train_bpe(text, vocab_size, on_step=on_step, verbose=verbose)

        self._vocab = result.vocab
        self._merges = result.merges
        return result

    def encode(self, text: str) -> list[TokenId]:
        """Encode text into token ids."""
        vocab = self._require_trained("encode with")
        return encode(text, vocab, self._merges)

    def encode_with_details(self, text: str) -> EncodingDetails:
        """Encode text and return both ids and token strings."""
        vocab = self._require_trained("encode with")
        return encode_with_details(text, vocab, self._merges)

    def decode(self, ids: list[TokenId], errors: str = "strict") -> str:
        """
        Decode a sequence of token ids back into text.

        :param errors: How to handle invalid UTF-8, "strict" or "replace".
        :raises TrainingError: If the tokenizer has not been trained yet.
        :raises IdNotFoundError: If any id is not in the vocabulary.
        :raises DecodeError: If the bytes are invalid UTF-8 under "strict".
        """
        vocab = self._require_trained("decode with")
        return decode(ids, vocab, errors=errors)

    def encode_batch(
        self, texts: list[str], num_workers: int | None = None
    ) -> list[list[TokenId]]:
        """Encode multiple texts, preserving input order."""
        self._require_trained("encode with")
        if not texts:
            return []

        if num_workers is None:
            workers = os.cpu_count() or 1
        else:
            workers = max(1, num_workers)

        if workers == 1 or len(texts) == 1:
            return [self.encode(text) for text in texts]

        with ThreadPoolExecutor(max_workers=workers) as pool:
            return list(pool.map(self.encode, texts))

    def decode_batch(
        self, batch: list[list[TokenId]], errors: str = "strict"
    ) -> list[str]:
        """Decode multiple id sequences, preserving input order."""
        self._require_trained("decode with")
        return [self.decode(ids, errors=errors) for ids in batch]

    def vocab_size(self) -> int:
        """Return the number of tokens in the vocabulary."""
        return self.vocab.size

    def save(self, file_prefix: str) -> None:
        """
        Save tokenizer state to disk.

        Creates two files: a .model file with the vocabulary and merge table
        and a .vocab file with human-readable token representations.

        :param file_prefix: Path prefix for output files.
        :raises TrainingError: If the tokenizer has not been trained yet.
        """
        self._require_trained("save")
        log.info(f"saving tokenizer to {file_prefix}")
        self._save_model(file_prefix)
        self._save_vocab(file_prefix)
        log.info("tokenizer saved successfully")

    def load(self, model_filename: str) -> None:
        """
        Load tokenizer state from a .model file.

        :param model_filename: Path to the .model file.
        :raises ModelLoadError: If the file is missing, has the wrong extension,
                                a version mismatch or malformed content.
        """
        path = Path(model_filename)

        if not path.exists():
            raise ModelLoadError("model filepath does not exist", model_path=str(path))

        if path.suffix != MODEL_SUFFIX:
            raise ModelLoadError("expected .model file", model_path=str(path))

        log.info(f"loading model from {path}")

        with path.open("r", encoding="utf-8", newline="\n") as f:
            # tokens may end in a space so only the newline is stripped
            lines = [line.removesuffix("\n") for line in f]

        vocab, merges = _parse_model(lines, str(path))

        # update tokenizer state only after a successful read
        self._vocab = vocab
        self._merges = merges

        log.info(
            f"model loaded successfully: {len(merges)} merge rules, {vocab.size} total tokens"
        )

    def _require_trained(self, action: str) -> Vocabulary:
        if self._vocab is None:
            raise TrainingError(
                f"{self.__class__.__name__} must be trained before you {action} it"
            )
        return self._vocab

    def _save_model(self, file_prefix: str) -> None:
        """Persist the vocabulary and merge table to a .model file."""
        vocab = self.vocab
        model_path = Path(file_prefix).with_suffix(MODEL_SUFFIX)
        # create directory if does not exist
        model_path.parent.mkdir(parents=True, exist_ok=True)

        log.debug(
            f"saving {vocab.size} tokens and {len(self._merges)} merge rules to {model_path}"
        )

        # printable tokens never contain a tab, so it is a safe field delimiter
        with model_path.open("w", encoding="utf-8", newline="\n") as f:
            f.write(f"{PREFIX} {VERSION}\n")
            f.write(f"{SECTION_MARKER}\n")
            # body 1: vocabulary entries in id order
            f.write(f"{vocab.size}\n")
            for tok, tok_id in vocab.list_entries():
                f.write(f"{tok_id}\t{tok}\n")
            f.write(f"{SECTION_MARKER}\n")
            # body 2: merge rules in training order
            for left, right, merged in self._merges:
                f.write(f"{left}\t{right}\t{merged}\n")

    def _save_vocab(self, file_prefix: str) -> None:
        """Persist human-readable token representations to a .vocab file."""
        vocab = self.vocab
        vocab_path = Path(file_prefix).with_suffix(VOCAB_SUFFIX)
        vocab_path.parent.mkdir(parents=True, exist_ok=True)

        log.debug(f"saving vocab to {vocab_path}")

        children = {merged: (left, right) for left, right, merged in self._merges}

        with vocab_path.open("w", encoding="utf-8", newline="\n") as f:
            for tok, tok_id in vocab.list_entries():
                subword = render_token(tok)
                # token arises from merging: show derivation from child tokens
                if tok in children:
                    left, right = children[tok]
                    f.write(
                        f"[{tok_id}] [{render_token(left)}][{render_token(right)}] -> {subword}\n"
                    )
                else:
                    # one of base 256 tokens: no merging
                    f.write(f"[{tok_id}] {subword}\n")


def _parse_model(lines: list[str], model_path: str) -> tuple[Vocabulary, MergeTable]:
    """Parse .model file lines into a vocabulary and merge table."""

    def expect_line(idx: int) -> str:
        if idx >= len(lines):
            raise ModelLoadError(
                "unexpected end of model file", model_path=model_path, line_no=idx + 1
            )
        return lines[idx]

    # verify header and version
    header = expect_line(0).split(" ")
    if len(header) != 2 or header[0] != PREFIX:
        raise ModelLoadError(
            f"invalid model header: {lines[0]!r}", model_path=model_path, line_no=1
        )
    if header[1] != VERSION:
        raise ModelLoadError(
            "model version mismatch", version_mismatch=(header[1], VERSION)
        )

    if expect_line(1) != SECTION_MARKER:
        raise ModelLoadError(
            f"start sequence marker missing: (expected {SECTION_MARKER}) (got {lines[1]})",
            line_no=2,
        )

    # parse vocabulary entry count
    raw_count = expect_line(2)
    try:
        n_entries = int(raw_count)
        if n_entries < 0:
            raise ValueError()
    except ValueError:
        raise ModelLoadError(f"invalid vocabulary entry count: {raw_count}", line_no=3)

    entries: list[tuple[Token, TokenId]] = []
    for idx in range(3, 3 + n_entries):
        # split on the first tab only, tokens never contain one
        parts = expect_line(idx).split("\t", 1)
        if len(parts) != 2 or not parts[1]:
            raise ModelLoadError(
                "vocabulary entry must be '<id>\\t<token>'", line_no=idx + 1
            )
        try:
            entries.append((parts[1], int(parts[0])))
        except ValueError:
            raise ModelLoadError(f"token id is not a number: {parts[0]}", line_no=idx + 1)

    try:
        vocab = Vocabulary.from_entries(entries)
    except VocabularyError as e:
        raise ModelLoadError("inconsistent vocabulary entries", model_path=model_path) from e

    end = 3 + n_entries
    if expect_line(end) != SECTION_MARKER:
        raise ModelLoadError(
            f"end sequence marker missing: (expected {SECTION_MARKER}) (got {lines[end]})",
            line_no=end + 1,
        )

    log.debug(f"loaded {vocab.size} vocabulary entries")

    merges: MergeTable = []
    for idx in range(end + 1, len(lines)):
        parts = lines[idx].split("\t")
        if len(parts) != 3 or not all(parts):
            raise ModelLoadError(
                f"invalid merge format at line: {lines[idx]!r}", line_no=idx + 1
            )
        left, right, merged = parts
        if left + right != merged:
            raise ModelLoadError(
                f"merged token does not equal its parts: {lines[idx]!r}", line_no=idx + 1
            )
        if not (left in vocab and right in vocab and merged in vocab):
            raise ModelLoadError(
                f"merge references unknown token: {lines[idx]!r}", line_no=idx + 1
            )
        merges.append((left, right, merged))

    log.debug(f"loaded {len(merges)} merge rules")
    return vocab, merges


def from_pretrained(model_path: str) -> Tokenizer:
    """
    Load a trained tokenizer from disk.

    :param model_path: Path to the .model file.
    :return: Loaded tokenizer instance with vocabulary and merge table.
    :raises ModelLoadError: If the file cannot be read or is malformed.

    .. code-block:: python

        tokenizer = from_pretrained("path/to/model.model")
        ids = tokenizer.encode("Hello world")
    """
    tokenizer = Tokenizer()
    tokenizer.load(model_path)
    return tokenizer


__all__ = ["Tokenizer", "from_pretrained", "VERSION", "MODEL_SUFFIX", "VOCAB_SUFFIX"]
