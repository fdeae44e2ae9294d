"""Unit tests for rule-based pretokenization."""

import pytest
import regex

from codetok.errors import TokenizationError
from codetok.pattern import Chunk, MatchRule, Pretokenizer


# composed reference pattern the rules must agree with on ordinary text
REFERENCE = regex.compile(r"'s|'t|'re|'ve|'m|'ll|'d| ?\p{L}+| ?\p{N}+| ?[^\s\p{L}\p{N}]+|\s+")

SAMPLES = [
    "Hello world",
    "def fibonacci(n):\n    if n <= 1:\n        return n\n",
    'print("Hello, World!")',
    "const x = arr.map((v) => v * 2);",
    "fn main() {\n\tlet s: &str = \"héllo\";\n}",
    "it's they're I'll we've I'm you'd don't",
    "naïve café 変数 = 42 # コメント",
    "SELECT * FROM users WHERE id=7;   \n\n",
    "x²+y³ == ½",
]


@pytest.fixture
def pretok():
    return Pretokenizer()


def chunk_texts(pretok: Pretokenizer, text: str) -> list[str]:
    return [c.text for c in pretok.split(text)]


# Basic segmentation
# ---------------------------------------------------------------------------


def test_words_keep_single_leading_space(pretok):
    assert chunk_texts(pretok, "Hello world") == ["Hello", " world"]


def test_contractions_are_separate_chunks(pretok):
    assert chunk_texts(pretok, "don't") == ["don", "'t"]
    assert chunk_texts(pretok, "they're") == ["they", "'re"]
    assert chunk_texts(pretok, "we'll") == ["we", "'ll"]


def test_whitespace_run_is_maximal(pretok):
    """Only one leading space attaches to a word; the rest is a whitespace run."""
    assert chunk_texts(pretok, "x  = 42;\n") == ["x", "  ", "=", " 42", ";", "\n"]


def test_punctuation_run(pretok):
    assert chunk_texts(pretok, "a->b") == ["a", "->", "b"]
    assert chunk_texts(pretok, "f() {") == ["f", "()", " {"]


def test_unicode_letters_and_numbers(pretok):
    assert chunk_texts(pretok, "naïve café") == ["naïve", " café"]
    assert chunk_texts(pretok, "变量 = 1") == ["变量", " =", " 1"]
    assert chunk_texts(pretok, "x²") == ["x", "²"]


def test_whitespace_set_is_explicit(pretok):
    """U+FEFF counts as whitespace; U+0085 does not."""
    assert chunk_texts(pretok, "a\ufeffb") == ["a", "\ufeff", "b"]
    assert chunk_texts(pretok, "a \x85b") == ["a", " \x85", "b"]


def test_empty_text(pretok):
    assert pretok.split("") == []


# Coverage
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("text", SAMPLES)
def test_chunks_cover_text_exactly(pretok, text):
    chunks = pretok.split(text)
    assert "".join(c.text for c in chunks) == text
    assert chunks[0].start == 0
    assert chunks[-1].end == len(text)
    for prev, cur in zip(chunks, chunks[1:]):
        assert prev.end == cur.start
    for c in chunks:
        assert text[c.start : c.end] == c.text


@pytest.mark.parametrize("text", SAMPLES)
def test_rules_agree_with_composed_pattern(pretok, text):
    assert chunk_texts(pretok, text) == REFERENCE.findall(text)


def test_rule_subset_raises_when_nothing_matches():
    letters_only = Pretokenizer([MatchRule.LETTERS])
    assert letters_only.split("ab") == [Chunk("ab", 0, 2)]
    with pytest.raises(TokenizationError):
        letters_only.split("ab1")
