"""
Vocabulary and merge tables parsed from a ``tokenizer.json`` artifact.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Final

from . import config
from ._fetch import read_document
from .errors import LoadError
from .types import Fetcher, MergeRanks, Symbol, SymbolPair, TokenId

log = logging.getLogger(__name__)

BPE_MODEL_TYPE: Final[str] = "BPE"


@dataclass(frozen=True)
class SpecialIds:
    """Ids with fixed roles outside ordinary content."""

    pad: TokenId = config.DEFAULT_PAD_ID
    unk: TokenId = config.DEFAULT_UNK_ID
    bos: TokenId = config.DEFAULT_BOS_ID
    eos: TokenId = config.DEFAULT_EOS_ID

    def skipped_on_decode(self) -> frozenset[TokenId]:
        """Ids dropped by the decoder (UNK is kept)."""
        return frozenset((self.pad, self.bos, self.eos))


@dataclass(frozen=True)
class VocabularyTable:
    """Injective token -> id map, its inverse and the special ids."""

    encoder: Mapping[Symbol, TokenId]
    decoder: Mapping[TokenId, Symbol]
    special: SpecialIds = field(default_factory=SpecialIds)

    @classmethod
    def build(
        cls, vocab: Mapping[Symbol, TokenId], special: SpecialIds | None = None
    ) -> "VocabularyTable":
        """
        Build read-only encoder/decoder maps from ``vocab``.

        :raises LoadError: If two tokens share an id.
        """
        decoder: dict[TokenId, Symbol] = {}
        for tok, tok_id in vocab.items():
            if tok_id in decoder:
                raise LoadError(
                    f"duplicate token id {tok_id} for {decoder[tok_id]!r} and {tok!r}",
                    field="model.vocab",
                )
            decoder[tok_id] = tok
        return cls(
            encoder=MappingProxyType(dict(vocab)),
            decoder=MappingProxyType(decoder),
            special=special or SpecialIds(),
        )

    @property
    def size(self) -> int:
        """Return the number of tokens in the vocabulary."""
        return len(self.encoder)

    def token_to_id(self, token: Symbol) -> TokenId | None:
        return self.encoder.get(token)

    def id_to_token(self, tok_id: TokenId) -> Symbol | None:
        return self.decoder.get(tok_id)


@dataclass(frozen=True)
class MergeRules:
    """Ordered merge pairs: pair -> rank (lower merges first) and pair -> merged symbol."""

    ranks: Mapping[SymbolPair, int]
    merged: Mapping[SymbolPair, Symbol]

    @classmethod
    def build(cls, pairs: list[SymbolPair]) -> "MergeRules":
        """Assign ranks by list position; a repeated pair keeps its first rank."""
        ranks: MergeRanks = {}
        merged: dict[SymbolPair, Symbol] = {}
        for rank, pair in enumerate(pairs):
            if pair in ranks:
                log.warning(f"duplicate merge {pair!r} at rank {rank} ignored")
                continue
            ranks[pair] = rank
            merged[pair] = pair[0] + pair[1]
        return cls(ranks=MappingProxyType(ranks), merged=MappingProxyType(merged))

    def __len__(self) -> int:
        return len(self.ranks)


def parse_artifact(document: Any) -> tuple[VocabularyTable, MergeRules]:
    """
    Build vocabulary and merge tables from a decoded ``tokenizer.json`` document.

    :param document: Parsed JSON object with ``model.vocab``, ``model.merges``
                     and optionally ``added_tokens``.
    :raises LoadError: If a required field is missing or has the wrong shape,
                       or if token ids are not unique.
    """
    if not isinstance(document, Mapping):
        raise LoadError("artifact must be a JSON object")

    model = document.get("model")
    if not isinstance(model, Mapping):
        raise LoadError("missing or invalid model section", field="model")

    model_type = model.get("type")
    if model_type is not None and model_type != BPE_MODEL_TYPE:
        raise LoadError(
            f"unsupported tokenizer model type {model_type!r}", field="model.type"
        )

    vocab = _parse_vocab(model.get("vocab"))
    pairs = _parse_merges(model.get("merges"))
    special = _parse_special_ids(document.get("added_tokens", []), vocab)

    log.debug(f"parsed {len(vocab)} tokens and {len(pairs)} merges")

    return VocabularyTable.build(vocab, special), MergeRules.build(pairs)


def load_artifact(
    source: str, fetcher: Fetcher | None = None
) -> tuple[VocabularyTable, MergeRules]:
    """
    Fetch ``source``, decode it as JSON and parse the tables.

    :raises LoadError: On fetch failure, invalid JSON or an invalid artifact.
    """
    return parse_artifact(read_document(source, fetcher))


def _parse_vocab(raw: Any) -> dict[Symbol, TokenId]:
    if not isinstance(raw, Mapping):
        raise LoadError("missing or invalid vocabulary", field="model.vocab")

    vocab: dict[Symbol, TokenId] = {}
    for tok, tok_id in raw.items():
        # bool is an int subclass, reject it explicitly
        if (
            not isinstance(tok, str)
            or isinstance(tok_id, bool)
            or not isinstance(tok_id, int)
            or tok_id < 0
        ):
            raise LoadError(
                f"invalid vocabulary entry {tok!r}: {tok_id!r}", field="model.vocab"
            )
        vocab[tok] = tok_id
    return vocab


def _parse_merges(raw: Any) -> list[SymbolPair]:
    if not isinstance(raw, list):
        raise LoadError("missing or invalid merge list", field="model.merges")

    pairs: list[SymbolPair] = []
    for idx, entry in enumerate(raw):
        # legacy layout stores each merge as a single "left right" string
        if isinstance(entry, str):
            parts = entry.split(" ")
        elif isinstance(entry, list | tuple):
            parts = list(entry)
        else:
            parts = []
        if len(parts) != 2 or not all(isinstance(p, str) and p for p in parts):
            raise LoadError(
                f"invalid merge at index {idx}: {entry!r}", field="model.merges"
            )
        pairs.append((parts[0], parts[1]))
    return pairs


_RESERVED: Final[dict[str, str]] = {
    config.PAD_TOKEN: "pad",
    config.UNK_TOKEN: "unk",
    config.BOS_TOKEN: "bos",
    config.EOS_TOKEN: "eos",
}


def _parse_special_ids(raw: Any, vocab: Mapping[Symbol, TokenId]) -> SpecialIds:
    if not isinstance(raw, list):
        raise LoadError("invalid added tokens list", field="added_tokens")

    overrides: dict[str, TokenId] = {}
    for entry in raw:
        if not isinstance(entry, Mapping):
            raise LoadError(f"invalid added token {entry!r}", field="added_tokens")
        content = entry.get("content")
        tok_id = entry.get("id")
        if (
            not isinstance(content, str)
            or isinstance(tok_id, bool)
            or not isinstance(tok_id, int)
        ):
            raise LoadError(f"invalid added token {entry!r}", field="added_tokens")
        if content not in _RESERVED:
            continue
        if vocab.get(content) != tok_id:
            log.warning(f"added token {content!r} (id {tok_id}) is not in the vocabulary")
        overrides[_RESERVED[content]] = tok_id

    return SpecialIds(**overrides)
