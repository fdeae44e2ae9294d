"""
Explicit load-once tokenizer session.

A session owns the artifact location and, after :meth:`TokenizerSession.load`
succeeds, an immutable :class:`BPETokenizer`. Callers construct one session
and pass it to whatever needs to encode or decode.
"""

import logging
import threading
from typing import Any

from . import config
from ._decorators import measure_time
from ._models.base import TokenSpan
from ._models.bpe import BPETokenizer
from .errors import NotLoadedError
from .types import Fetcher, TokenId
from .vocab import MergeRules, VocabularyTable, load_artifact, parse_artifact

log = logging.getLogger(__name__)


class TokenizerSession:
    """Loads a ``tokenizer.json`` artifact once and exposes encode/decode."""

    def __init__(self, source: str | None = None, *, fetcher: Fetcher | None = None) -> None:
        """
        :param source: Artifact path or ``http(s)`` URL; defaults to
                       :func:`codetok.config.default_source`.
        :param fetcher: Optional callable returning the raw artifact bytes for
                        ``source``, used instead of the built-in file/URL reader.
        """
        self.source: str = source if source is not None else config.default_source()
        self._fetcher = fetcher
        self._lock = threading.Lock()
        self._tokenizer: BPETokenizer | None = None

    @classmethod
    def from_document(cls, document: Any, source: str = "<memory>") -> "TokenizerSession":
        """Build an already loaded session from a decoded artifact document."""
        session = cls(source)
        session._tokenizer = _build_tokenizer(*parse_artifact(document))
        return session

    @property
    def is_loaded(self) -> bool:
        return self._tokenizer is not None

    @property
    def tokenizer(self) -> BPETokenizer:
        """
        Return the loaded tokenizer.

        :raises NotLoadedError: If :meth:`load` has not succeeded yet.
        """
        tokenizer = self._tokenizer
        if tokenizer is None:
            raise NotLoadedError(
                "tokenizer not loaded, call TokenizerSession.load() first"
            )
        return tokenizer

    def load(self) -> BPETokenizer:
        """
        Fetch and parse the artifact unless already loaded.

        Concurrent callers wait for a single in-flight load. State is published
        only after a fully successful parse, so a failed load leaves the
        session unloaded and a later call may try again.

        :raises LoadError: If fetching or parsing the artifact fails.
        """
        tokenizer = self._tokenizer
        if tokenizer is not None:
            return tokenizer

        with self._lock:
            # another thread may have finished loading while we waited
            if self._tokenizer is None:
                self._tokenizer = self._load()
            return self._tokenizer

    @measure_time
    def _load(self) -> BPETokenizer:
        log.info(f"loading tokenizer from {self.source}")
        return _build_tokenizer(*load_artifact(self.source, self._fetcher))

    def encode(self, text: str) -> list[TokenId]:
        return self.tokenizer.encode(text)

    def encode_with_spans(self, text: str) -> list[TokenSpan]:
        return self.tokenizer.encode_with_spans(text)

    def decode(self, ids: list[TokenId]) -> str:
        return self.tokenizer.decode(ids)

    def encode_batch(
        self, texts: list[str], num_workers: int | None = None
    ) -> list[list[TokenId]]:
        return self.tokenizer.encode_batch(texts, num_workers=num_workers)

    def decode_batch(
        self, batch: list[list[TokenId]], num_workers: int | None = None
    ) -> list[str]:
        return self.tokenizer.decode_batch(batch, num_workers=num_workers)


def _build_tokenizer(vocab: VocabularyTable, merges: MergeRules) -> BPETokenizer:
    special = vocab.special
    log.info(
        f"tokenizer loaded: {vocab.size} tokens, {len(merges)} merge rules, "
        f"special ids pad={special.pad} unk={special.unk} bos={special.bos} eos={special.eos}"
    )
    return BPETokenizer(vocab, merges)
