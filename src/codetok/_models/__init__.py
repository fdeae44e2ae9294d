"""Tokenizer implementations for byte-level text processing."""

from .base import Tokenizer, TokenSpan
from .bpe import BPETokenizer


__all__ = ["Tokenizer", "TokenSpan", "BPETokenizer"]
