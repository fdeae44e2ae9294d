"""Shared fixtures: small tokenizer.json documents and sessions built from them."""

import json

import pytest

import codetok as ctok


HELLO_VOCAB = {"h": 10, "e": 11, "l": 12, "o": 13, "he": 14, "ll": 15, "hell": 16, "hello": 17}
HELLO_MERGES = [["h", "e"], ["l", "l"], ["he", "ll"], ["hell", "o"]]

# merges for a byte-complete vocabulary; " return" and "def" become single tokens
CODE_MERGES = [
    ["d", "e"],
    ["de", "f"],
    ["Ġ", "r"],
    ["e", "t"],
    ["u", "r"],
    ["Ġr", "et"],
    ["Ġret", "ur"],
    ["Ġretur", "n"],
    ["Ġ", "x"],
]

SPECIAL_TOKENS = ["<pad>", "<unk>", "<bos>", "<eos>"]


def make_document(
    vocab: dict[str, int],
    merges: list,
    added_tokens: list[dict] | None = None,
) -> dict:
    """Return a minimal HuggingFace style tokenizer.json document."""
    doc: dict = {
        "version": "1.0",
        "model": {"type": "BPE", "vocab": vocab, "merges": merges},
    }
    if added_tokens is not None:
        doc["added_tokens"] = added_tokens
    return doc


def make_code_document() -> dict:
    """Specials at 0-3, all 256 byte symbols at 4-259, then one id per merge."""
    vocab = {tok: idx for idx, tok in enumerate(SPECIAL_TOKENS)}
    for b, ch in sorted(ctok.bytes_to_unicode().items()):
        vocab[ch] = 4 + b
    for left, right in CODE_MERGES:
        vocab.setdefault(left + right, len(vocab))
    added = [{"id": idx, "content": tok, "special": True} for idx, tok in enumerate(SPECIAL_TOKENS)]
    return make_document(vocab, CODE_MERGES, added)


# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def hello_document():
    """The eight-token ``hello`` vocabulary without added tokens."""
    return make_document(dict(HELLO_VOCAB), [list(m) for m in HELLO_MERGES])


@pytest.fixture
def hello_session(hello_document):
    return ctok.TokenizerSession.from_document(hello_document)


@pytest.fixture
def code_document():
    return make_code_document()


@pytest.fixture
def code_session(code_document):
    return ctok.TokenizerSession.from_document(code_document)


@pytest.fixture
def code_artifact(tmp_path, code_document):
    """Path to ``tokenizer.json`` holding the byte-complete code vocabulary."""
    path = tmp_path / "tokenizer.json"
    path.write_text(json.dumps(code_document), encoding="utf-8")
    return path
