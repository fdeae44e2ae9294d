"""
Core Byte Pair Encoding (BPE) merge operation.
"""

from collections.abc import Mapping

from .types import Symbol, SymbolPair


class BPEEngine:
    """
    Greedy rank-ordered merging of adjacent symbols within one chunk.

    The engine only reads its merge table, so one instance can be shared by
    concurrent callers.
    """

    def __init__(
        self, ranks: Mapping[SymbolPair, int], merged: Mapping[SymbolPair, Symbol]
    ) -> None:
        # pair -> rank, lower merges first
        self.ranks = ranks
        # pair -> merged symbol
        self.merged = merged

    def merge(self, word: Symbol) -> list[Symbol]:
        """
        Split ``word`` into surrogate characters and apply merges until none apply.

        Each pass scans every adjacent pair, merges the leftmost occurrence of
        the lowest ranked pair, then rescans. Cost is quadratic in the word
        length, which is fine for word-sized chunks.

        :param word: A byte-encoded chunk (see ``codetok._bytes``).
        :return: Symbols in order; their concatenation equals ``word``.
        """
        if len(word) <= 1:
            return [word]

        symbols: list[Symbol] = list(word)

        while len(symbols) > 1:
            best_idx = -1
            best_rank: int | None = None
            for i in range(len(symbols) - 1):
                rank = self.ranks.get((symbols[i], symbols[i + 1]))
                # strict comparison keeps the leftmost occurrence on ties
                if rank is not None and (best_rank is None or rank < best_rank):
                    best_rank = rank
                    best_idx = i

            if best_rank is None:
                break

            pair = (symbols[best_idx], symbols[best_idx + 1])
            symbols[best_idx : best_idx + 2] = [self.merged[pair]]

        return symbols
