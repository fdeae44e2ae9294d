"""
Core types for tokenization.
"""

from collections.abc import Callable

type TokenId = int
# a run of byte surrogates, see codetok._bytes
type Symbol = str
type SymbolPair = tuple[Symbol, Symbol]
type MergeRanks = dict[SymbolPair, int]
# artifact location -> raw artifact bytes
type Fetcher = Callable[[str], bytes]
