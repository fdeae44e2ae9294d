"""codetok: byte-level BPE tokenization of source code."""

from ._bytes import bytes_to_chars, bytes_to_unicode, chars_to_bytes
from ._models.base import Tokenizer, TokenSpan
from ._models.bpe import BPETokenizer
from .errors import CodeTokError, LoadError, NotLoadedError, TokenizationError
from .inputs import ClassifierInputs, prepare_inputs
from .pattern import Chunk, MatchRule, Pretokenizer
from .session import TokenizerSession
from .vocab import MergeRules, SpecialIds, VocabularyTable, load_artifact, parse_artifact

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("codetok")
except PackageNotFoundError:
    __version__ = "dev"

__all__ = [
    "Tokenizer",
    "BPETokenizer",
    "TokenSpan",
    "TokenizerSession",
    "Pretokenizer",
    "MatchRule",
    "Chunk",
    "VocabularyTable",
    "MergeRules",
    "SpecialIds",
    "parse_artifact",
    "load_artifact",
    "ClassifierInputs",
    "prepare_inputs",
    "bytes_to_unicode",
    "bytes_to_chars",
    "chars_to_bytes",
    "CodeTokError",
    "LoadError",
    "NotLoadedError",
    "TokenizationError",
]
