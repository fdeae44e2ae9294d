"""Byte-level BPE tokenizer over a pretrained vocabulary and merge table."""

import logging
from bisect import bisect_left
from itertools import accumulate
from typing import override

from .._bpe import BPEEngine
from .._bytes import chars_to_bytes, text_to_bytes, text_to_chars
from ..pattern import DEFAULT_PRETOKENIZER, Pretokenizer
from ..types import Symbol, TokenId
from ..vocab import MergeRules, SpecialIds, VocabularyTable
from .base import Tokenizer, TokenSpan

log = logging.getLogger(__name__)


class BPETokenizer(Tokenizer):
    """
    Tokenizer that pretokenizes text, byte-encodes each chunk and applies BPE.

    Instances are immutable after construction; encode and decode are pure
    functions of the tables and their input.
    """

    def __init__(
        self,
        vocab: VocabularyTable,
        merges: MergeRules,
        pretokenizer: Pretokenizer | None = None,
    ) -> None:
        super().__init__()
        self.vocab = vocab
        self.merges = merges
        self.pretokenizer = pretokenizer or DEFAULT_PRETOKENIZER
        self.engine = BPEEngine(merges.ranks, merges.merged)

    @property
    def special_ids(self) -> SpecialIds:
        return self.vocab.special

    @override
    def vocab_size(self) -> int:
        return self.vocab.size

    @override
    def encode(self, text: str) -> list[TokenId]:
        """
        Encode text into token ids.

        Symbols missing from the vocabulary are emitted one surrogate
        character at a time, with the UNK id for characters that are missing
        as well.

        :param text: Text to encode.
        :returns: Token ids; empty for empty input.
        """
        ids: list[TokenId] = []
        for chunk in self.pretokenizer.split(text):
            ids.extend(tok_id for _, tok_id in self._tokenize_chunk(chunk.text))
        return ids

    @override
    def encode_with_spans(self, text: str) -> list[TokenSpan]:
        """
        Encode text and record the character range of every emitted id.

        A character belongs to the token holding its first UTF-8 byte, so
        spans within a chunk are consecutive and cover it exactly. Span text
        is empty when a token's bytes are not valid UTF-8 on their own.

        :param text: Text to encode.
        :returns: One span per id, in the same order as :meth:`encode`.
        """
        spans: list[TokenSpan] = []
        for chunk in self.pretokenizer.split(text):
            # byte offset of the first byte of every character in the chunk
            char_starts = list(
                accumulate((len(text_to_bytes(c)) for c in chunk.text), initial=0)
            )[:-1]

            byte_pos = 0
            for piece, tok_id in self._tokenize_chunk(chunk.text):
                raw = chars_to_bytes(piece)
                start = chunk.start + bisect_left(char_starts, byte_pos)
                byte_pos += len(raw)
                end = chunk.start + bisect_left(char_starts, byte_pos)
                spans.append(TokenSpan(_span_text(raw), tok_id, start, end))
        return spans

    @override
    def decode(self, ids: list[TokenId]) -> str:
        """
        Decode token ids into text.

        PAD, BOS and EOS ids are dropped; UNK decodes to its vocabulary string
        and ids outside the vocabulary contribute nothing. If the bytes are not
        valid UTF-8 the byte-encoded symbol text is returned instead.
        """
        skipped = self.vocab.special.skipped_on_decode()
        decoder = self.vocab.decoder
        symbols = "".join(decoder.get(i, "") for i in ids if i not in skipped)

        try:
            return chars_to_bytes(symbols).decode("utf-8")
        except UnicodeDecodeError:
            log.debug("decoded bytes are not valid UTF-8, returning symbol text")
            return symbols

    def token_to_id(self, token: Symbol) -> TokenId | None:
        return self.vocab.token_to_id(token)

    def id_to_token(self, tok_id: TokenId) -> Symbol | None:
        return self.vocab.id_to_token(tok_id)

    def _tokenize_chunk(self, chunk: str) -> list[tuple[Symbol, TokenId]]:
        """Return ``(symbol, id)`` pairs for one pretokenized chunk."""
        encoder = self.vocab.encoder
        unk = self.vocab.special.unk
        out: list[tuple[Symbol, TokenId]] = []

        for symbol in self.engine.merge(text_to_chars(chunk)):
            tok_id = encoder.get(symbol)
            if tok_id is not None:
                out.append((symbol, tok_id))
                continue
            # per-character lookup only, no search for shorter known subwords
            log.debug(f"symbol {symbol!r} not in vocabulary, emitting per character")
            for ch in symbol:
                out.append((ch, encoder.get(ch, unk)))
        return out


def _span_text(raw: bytes) -> str:
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError:
        return ""
