"""ByteBPE: byte-level Byte Pair Encoding tokenizer."""

from .bpe import count_pairs, merge_pair, select_most_frequent_pair
from .codec import (
    bytes_to_text,
    text_to_byte_tokens,
    text_to_bytes,
    token_to_bytes,
)
from .corpus import DEFAULT_TRAINING_DATA
from .encoder import EncodingDetails, decode, encode, encode_with_details
from .errors import (
    ByteBPEError,
    DecodeError,
    IdNotFoundError,
    ModelLoadError,
    TokenNotFoundError,
    TrainingError,
    VocabularyError,
)
from .tokenizer import Tokenizer, from_pretrained
from .trainer import MergeStep, TrainingResult, train_bpe
from .vocab import Vocabulary

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("bytebpe")
except PackageNotFoundError:
    __version__ = "dev"

__all__ = [
    "Vocabulary",
    "Tokenizer",
    "MergeStep",
    "TrainingResult",
    "EncodingDetails",
    "train_bpe",
    "encode",
    "encode_with_details",
    "decode",
    "from_pretrained",
    "count_pairs",
    "select_most_frequent_pair",
    "merge_pair",
    "text_to_bytes",
    "bytes_to_text",
    "text_to_byte_tokens",
    "token_to_bytes",
    "DEFAULT_TRAINING_DATA",
    "ByteBPEError",
    "DecodeError",
    "VocabularyError",
    "TokenNotFoundError",
    "IdNotFoundError",
    "TrainingError",
    "ModelLoadError",
]
