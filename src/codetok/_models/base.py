"""
Base tokenizer interface for byte-level tokenization implementations.
"""

import logging
import os
from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

from ..types import TokenId

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class TokenSpan:
    """A token id and the ``[start, end)`` character range it was read from."""

    text: str
    token_id: TokenId
    start: int
    end: int


class Tokenizer(ABC):
    """
    Abstract base class for loaded, immutable tokenizers.

    Subclasses implement single-text encode/decode; batch helpers are shared.
    """

    @abstractmethod
    def encode(self, text: str) -> list[TokenId]:
        """Encode text into a sequence of token ids."""
        ...

    @abstractmethod
    def encode_with_spans(self, text: str) -> list[TokenSpan]:
        """Encode text and annotate each token id with its source range."""
        ...

    @abstractmethod
    def decode(self, ids: list[TokenId]) -> str:
        """Decode a sequence of token ids back into text."""
        ...

    @abstractmethod
    def vocab_size(self) -> int:
        """Return the number of tokens in the vocabulary."""
        ...

    def encode_batch(
        self, texts: list[str], num_workers: int | None = None
    ) -> list[list[TokenId]]:
        """
        Encode many texts, in worker threads when more than one worker is used.

        :param num_workers: Thread count; ``None`` uses the CPU count and
                            ``0`` is treated as 1.
        :returns: Encoded id sequences in input order.
        """
        if not texts:
            return []
        return self._map(self.encode, texts, num_workers)

    def decode_batch(
        self, batch: list[list[TokenId]], num_workers: int | None = None
    ) -> list[str]:
        """Decode many id sequences; output order follows input order."""
        if not batch:
            return []
        return self._map(self.decode, batch, num_workers)

    @staticmethod
    def _map(func, items: list, num_workers: int | None) -> list:
        if num_workers is None:
            workers = os.cpu_count() or 1
        else:
            workers = max(1, num_workers)  # "0" interpreted as 1 worker

        if workers == 1 or len(items) <= 1:
            return [func(item) for item in items]

        log.debug(f"running {len(items)} items on {workers} threads")
        # tokenizer state is read-only, workers share it without locking
        with ThreadPoolExecutor(max_workers=workers) as pool:
            return list(pool.map(func, items))
