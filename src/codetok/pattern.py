"""
Pretokenization: splitting text into word-like chunks before BPE.

The split is driven by an ordered list of matcher rules. At every scan
position the rules are tried in priority order and the first one that
matches consumes its (maximal) run. Letter and numeral classes use the full
Unicode general categories; whitespace is an explicit character set so the
result does not change with the matcher engine's own idea of ``\\s``.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Final, NamedTuple

import regex as re

from .errors import TokenizationError

# ECMAScript ``\s``: the whitespace set the vocabulary was trained against
WHITESPACE_CLASS: Final[str] = (
    r"\t\n\x0b\x0c\r \xa0\u1680\u2000-\u200a\u2028\u2029\u202f\u205f\u3000\ufeff"
)


class MatchRule(str, Enum):
    """
    Pretokenizer rules, declared in priority order.

    Each value is a pattern anchored at the current scan position.
    """

    CONTRACTION = r"'(?:s|t|re|ve|m|ll|d)"
    LETTERS = r" ?\p{L}+"
    NUMBERS = r" ?\p{N}+"
    PUNCTUATION = rf" ?[^{WHITESPACE_CLASS}\p{{L}}\p{{N}}]+"
    WHITESPACE = rf"[{WHITESPACE_CLASS}]+"


class Chunk(NamedTuple):
    """A pretokenized chunk and its ``[start, end)`` range in the source text."""

    text: str
    start: int
    end: int


@dataclass(frozen=True)
class _CompiledRule:
    rule: MatchRule
    pattern: re.Pattern


class Pretokenizer:
    """Split text into chunks using :class:`MatchRule` in priority order."""

    def __init__(self, rules: list[MatchRule] | None = None) -> None:
        if rules is None:
            rules = list(MatchRule)
        self.rules: tuple[_CompiledRule, ...] = tuple(
            _CompiledRule(rule, re.compile(rule.value)) for rule in rules
        )

    def split(self, text: str) -> list[Chunk]:
        """
        Split ``text`` into ordered chunks that concatenate back to ``text``.

        :raises TokenizationError: If no rule matches at some position.
        """
        chunks: list[Chunk] = []
        pos = 0
        n = len(text)
        while pos < n:
            end = self._match_at(text, pos)
            chunks.append(Chunk(text[pos:end], pos, end))
            pos = end
        return chunks

    def _match_at(self, text: str, pos: int) -> int:
        """Return the end offset of the highest priority rule matching at ``pos``."""
        for compiled in self.rules:
            m = compiled.pattern.match(text, pos)
            # every rule consumes at least one character, guard anyway so the
            # scan can never stall
            if m is not None and m.end() > pos:
                return m.end()
        raise TokenizationError("no pretokenizer rule matched", position=pos)


DEFAULT_PRETOKENIZER: Final[Pretokenizer] = Pretokenizer()
