"""Package-wide constants and environment overrides."""

import os
from typing import Final

# reserved added-token contents and the ids used when the artifact has none
PAD_TOKEN: Final[str] = "<pad>"
UNK_TOKEN: Final[str] = "<unk>"
BOS_TOKEN: Final[str] = "<bos>"
EOS_TOKEN: Final[str] = "<eos>"

DEFAULT_PAD_ID: Final[int] = 0
DEFAULT_UNK_ID: Final[int] = 1
DEFAULT_BOS_ID: Final[int] = 2
DEFAULT_EOS_ID: Final[int] = 3

DEFAULT_TOKENIZER_PATH: Final[str] = "model/tokenizer.json"
DEFAULT_FETCH_TIMEOUT: Final[float] = 30.0

TOKENIZER_ENV: Final[str] = "CODETOK_TOKENIZER"
FETCH_TIMEOUT_ENV: Final[str] = "CODETOK_FETCH_TIMEOUT"


def default_source() -> str:
    """Return the artifact location, honouring the ``CODETOK_TOKENIZER`` env var."""
    return os.environ.get(TOKENIZER_ENV, "").strip() or DEFAULT_TOKENIZER_PATH


def fetch_timeout() -> float:
    """Return the URL fetch timeout in seconds (env var override, else default)."""
    raw = os.environ.get(FETCH_TIMEOUT_ENV, "").strip()
    if not raw:
        return DEFAULT_FETCH_TIMEOUT
    try:
        timeout = float(raw)
    except ValueError:
        return DEFAULT_FETCH_TIMEOUT
    return timeout if timeout > 0 else DEFAULT_FETCH_TIMEOUT
