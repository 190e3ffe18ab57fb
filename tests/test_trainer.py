"""Unit tests for BPE training and the functional encode/decode pipeline."""

import logging

import pytest

from bytebpe import DEFAULT_TRAINING_DATA
from bytebpe.codec import byte_tokens
from bytebpe.encoder import decode, encode, encode_with_details
from bytebpe.errors import (
    DecodeError,
    IdNotFoundError,
    TokenNotFoundError,
    TrainingError,
)
from bytebpe.trainer import MergeStep, train_bpe
from bytebpe.vocab import Vocabulary


# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(scope="module")
def corpus_result():
    """Return a training result on the default corpus."""
    return train_bpe(DEFAULT_TRAINING_DATA, 320)


@pytest.fixture
def small_result():
    """Return a training result on a short repetitive text."""
    return train_bpe("hello world hello world", 300)


# Training
# ---------------------------------------------------------------------------


def test_train_small_sequence():
    """Merges, frequencies and snapshots follow the greedy algorithm."""
    result = train_bpe("abab", 300)

    assert result.merges == [("a", "b", "ab"), ("ab", "ab", "abab")]
    assert [s.frequency for s in result.steps] == [2, 1]
    assert [s.vocab_size for s in result.steps] == [257, 258]
    assert result.steps[0].tokens == ("ab", "ab")
    assert result.steps[1].tokens == ("abab",)
    assert result.vocab.size == 258
    assert result.n_merges_completed == 2


def test_train_stops_at_target():
    """Training stops as soon as the target vocabulary size is reached."""
    result = train_bpe("aaaa", 258)

    assert result.merges == [("a", "a", "aa"), ("aa", "aa", "aaaa")]
    assert result.steps[0] == MergeStep(
        step=1,
        pair=("a", "a"),
        merged="aa",
        frequency=3,
        vocab_size=257,
        tokens=("aa", "aa"),
    )
    assert result.vocab.size == 258


def test_train_single_character_terminates_immediately():
    """A text without adjacent pairs learns nothing."""
    result = train_bpe("a", 300)
    assert result.merges == []
    assert result.steps == []
    assert result.vocab.size == 256


def test_train_empty_text():
    """Empty input is a valid, if useless, training run."""
    result = train_bpe("", 300)
    assert result.merges == []
    assert result.vocab.size == 256


def test_train_small_target_learns_nothing():
    """Targets at or below 256 only contain the byte tokens."""
    result = train_bpe("hello hello", 10)
    assert result.merges == []
    assert result.vocab.size == 256


def test_byte_coverage(small_result):
    """All 256 byte tokens are present after training."""
    for b, tok in enumerate(byte_tokens()):
        assert small_result.vocab.get_id(tok) == b


def test_vocab_grows_by_one_per_step(corpus_result):
    """Each merge producing a new token adds exactly one vocabulary entry."""
    known = set(byte_tokens())
    size = len(known)
    for step in corpus_result.steps:
        if step.merged not in known:
            known.add(step.merged)
            size += 1
        assert step.vocab_size == size
    assert corpus_result.vocab.size == 320


def test_merged_tokens_are_concatenations(corpus_result):
    """Every merge rule concatenates its parts and is registered."""
    for left, right, merged in corpus_result.merges:
        assert merged == left + right
        assert corpus_result.vocab.get_id(merged) >= 256


def test_steps_match_merge_table(corpus_result):
    """The step history mirrors the merge table."""
    assert len(corpus_result.steps) == len(corpus_result.merges)
    for n, (step, rule) in enumerate(
        zip(corpus_result.steps, corpus_result.merges), start=1
    ):
        assert step.step == n
        assert (*step.pair, step.merged) == rule


def test_training_is_deterministic(corpus_result):
    """Identical inputs produce identical vocabularies, merges and steps."""
    again = train_bpe(DEFAULT_TRAINING_DATA, 320)
    assert again.merges == corpus_result.merges
    assert again.vocab == corpus_result.vocab
    assert again.steps == corpus_result.steps


def test_frequencies_do_not_increase(corpus_result):
    """The most frequent pair never becomes more frequent later on."""
    freqs = [step.frequency for step in corpus_result.steps]
    assert freqs[0] >= freqs[-1]
    assert freqs[0] > 1


def test_on_step_callback():
    """The callback sees every step in order."""
    seen: list[MergeStep] = []
    result = train_bpe("hello world hello world", 300, on_step=seen.append)
    assert seen == result.steps


def test_step_snapshot_is_immutable(small_result):
    """Step snapshots cannot be mutated by observers."""
    step = small_result.steps[0]
    assert isinstance(step.tokens, tuple)
    with pytest.raises(AttributeError):
        step.merged = "x"


@pytest.mark.parametrize("bad_size", ["300", -1, 3.5, True, None])
def test_invalid_vocab_size_raises(bad_size):
    """Non-integer or negative targets are rejected."""
    with pytest.raises(TrainingError):
        train_bpe("hello", bad_size)


def test_early_stop_logs_warning(caplog):
    """Stopping before the target is reported as a warning."""
    caplog.set_level(logging.WARNING, logger="bytebpe.trainer")
    train_bpe("ab", 300)
    assert "stopping early" in caplog.text


def test_verbose_logs_each_merge(caplog):
    """Verbose training logs every merge at INFO level."""
    caplog.set_level(logging.INFO, logger="bytebpe.trainer")
    train_bpe("abab", 300, verbose=True)
    assert "merge 1/44" in caplog.text
    assert "merge 2/44" in caplog.text


def test_escape_lookalike_reuses_byte_token(caplog):
    """Text spelling an escape merges into the existing byte token."""
    caplog.set_level(logging.WARNING, logger="bytebpe.trainer")
    result = train_bpe("<0x0a><0x0a>", 300)

    assert [s.vocab_size for s in result.steps] == [257, 258, 259, 260, 260, 261]
    assert result.merges[4] == ("<0x0a", ">", "<0x0a>")
    assert result.vocab.get_id("<0x0a>") == 10
    assert "already in vocabulary" in caplog.text


# Encode / decode
# ---------------------------------------------------------------------------


def test_roundtrip_hello_world(small_result):
    """Encode then decode returns the original text."""
    text = "Hello, world!"
    ids = encode(text, small_result.vocab, small_result.merges)
    assert decode(ids, small_result.vocab) == text


def test_roundtrip_hello_world_byte_only():
    """Round-trip also holds without any merges."""
    result = train_bpe("Hello, world!", 256)
    ids = encode("Hello, world!", result.vocab, result.merges)
    assert ids == list(b"Hello, world!")
    assert decode(ids, result.vocab) == "Hello, world!"


@pytest.mark.parametrize(
    "text",
    [
        "",
        "x",
        "   \n\t  ",
        "世界",
        "café naïve 日本語 🎉",
        "function hello() { return 42; }",
        "Привет мир",
    ],
)
def test_roundtrip_unicode(corpus_result, text):
    """Round-trip preserves arbitrary Unicode input."""
    ids = encode(text, corpus_result.vocab, corpus_result.merges)
    assert decode(ids, corpus_result.vocab) == text


def test_roundtrip_training_text(corpus_result):
    """The training corpus itself round-trips and compresses."""
    ids = encode(DEFAULT_TRAINING_DATA, corpus_result.vocab, corpus_result.merges)
    assert decode(ids, corpus_result.vocab) == DEFAULT_TRAINING_DATA
    assert len(ids) < len(DEFAULT_TRAINING_DATA.encode("utf-8"))


def test_encode_with_details(small_result):
    """Details expose the token strings behind the ids."""
    details = encode_with_details("hello", small_result.vocab, small_result.merges)
    assert details.ids == [small_result.vocab.get_id(t) for t in details.tokens]
    assert "".join(details.tokens) == "hello"
    assert len(details.tokens) < 5


def test_encode_matches_final_training_segmentation():
    """Replaying the merge table reproduces the training segmentation."""
    text = "low lower lowest low"
    result = train_bpe(text, 270)
    details = encode_with_details(text, result.vocab, result.merges)
    assert tuple(details.tokens) == result.steps[-1].tokens


def test_encode_unknown_token_raises():
    """A merge producing an unregistered token is surfaced."""
    vocab = Vocabulary.with_byte_tokens()
    with pytest.raises(TokenNotFoundError) as exc_info:
        encode("xab", vocab, [("a", "b", "ab")])
    assert exc_info.value.token == "ab"
    assert exc_info.value.position == 1


def test_decode_unknown_id_raises(small_result):
    """Ids outside the vocabulary are rejected."""
    with pytest.raises(IdNotFoundError) as exc_info:
        decode([99999], small_result.vocab)
    assert exc_info.value.token_id == 99999

    with pytest.raises(IdNotFoundError):
        decode([-1], small_result.vocab)


def test_decode_invalid_utf8(small_result):
    """A lone continuation byte fails strictly and is replaced on request."""
    ff = small_result.vocab.get_id("<0xff>")
    with pytest.raises(DecodeError):
        decode([ff], small_result.vocab)
    assert decode([ff], small_result.vocab, errors="replace") == "�"


def test_decode_empty(small_result):
    """No ids decode to the empty string."""
    assert decode([], small_result.vocab) == ""
