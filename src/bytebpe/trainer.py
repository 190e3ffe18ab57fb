"""Standalone BPE training module."""

from dataclasses import dataclass, field
import logging
from typing import Callable

from ._decorators import measure_time
from .bpe import count_pairs, merge_pair, select_most_frequent_pair
from .codec import text_to_byte_tokens
from .errors import TrainingError
from .types import MergeTable, Token, TokenPair
from .vocab import Vocabulary

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class MergeStep:
    """Snapshot of one training step."""

    step: int
    pair: TokenPair
    merged: Token
    frequency: int
    vocab_size: int
    tokens: tuple[Token, ...]


@dataclass
class TrainingResult:
    """Results from one BPE training run."""

    vocab: Vocabulary
    merges: MergeTable
    steps: list[MergeStep] = field(default_factory=list)

    @property
    def n_merges_completed(self) -> int:
        return len(self.merges)


StepCallback = Callable[[MergeStep], None]


@measure_time
def train_bpe(
    text: str,
    target_vocab_size: int,
    on_step: StepCallback | None = None,
    verbose: bool = False,
) -> TrainingResult:
    """
    Learn BPE merges on ``text`` until the vocabulary reaches the target size.

    The vocabulary always starts with the 256 byte tokens, so targets at or
    below 256 learn nothing. Each step recounts all pairs over the current
    token sequence, merges the most frequent one and reports a
    :class:`MergeStep` to ``on_step``. Training stops early once no adjacent
    pair is left.

    :param text: Training text.
    :param target_vocab_size: Target vocabulary size including the base 256 bytes.
    :param on_step: Synchronous observer called after every merge.
    :param verbose: Log each learned merge at INFO level when ``True``.
    :returns: Final vocabulary, ordered merge table and step history.
    :raises TrainingError: If ``target_vocab_size`` is not a non-negative int.
    """
    # bool is an int subclass but never a meaningful size
    if (
        not isinstance(target_vocab_size, int)
        or isinstance(target_vocab_size, bool)
        or target_vocab_size < 0
    ):
        raise TrainingError(
            "vocab size must be a non-negative integer", vocab_size=target_vocab_size
        )

    vocab = Vocabulary.with_byte_tokens()
    merges: MergeTable = []
    steps: list[MergeStep] = []

    tokens = text_to_byte_tokens(text)
    n_merges = max(target_vocab_size - vocab.size, 0)
    log.debug(
        f"training on {len(tokens)} byte tokens (target vocab size: {target_vocab_size})"
    )

    while vocab.size < target_vocab_size:
        best = select_most_frequent_pair(count_pairs(tokens))
        # 1. text compressed to single token
        # 2. input too short or too varied to reach the target
        if best is None:
            log.warning(
                f"no more token pairs to merge after {len(merges)} merges "
                f"(requested {n_merges}) stopping early"
            )
            break

        left, right, freq = best
        merged = left + right
        if merged in vocab:
            # only reachable when the text literally spells an escape such as "<0x0a>"
            log.warning(f"merged token {merged!r} already in vocabulary, reusing its id")
        vocab.add_token(merged)
        merges.append((left, right, merged))
        tokens = merge_pair(tokens, left, right, merged)

        step = MergeStep(
            step=len(merges),
            pair=(left, right),
            merged=merged,
            frequency=freq,
            vocab_size=vocab.size,
            tokens=tuple(tokens),
        )
        steps.append(step)

        if verbose:
            log.info(
                "merge %d/%d: %r + %r -> %r (freq %d)",
                step.step,
                n_merges,
                left,
                right,
                merged,
                freq,
            )
        else:
            log.debug(f"merge {step.step}: {left!r} + {right!r} -> {merged!r}")

        if on_step is not None:
            on_step(step)

    log.info(f"learned {len(merges)} merge rules, final vocab size {vocab.size}")
    return TrainingResult(vocab=vocab, merges=merges, steps=steps)


__all__ = ["MergeStep", "TrainingResult", "train_bpe"]
