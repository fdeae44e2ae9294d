"""
Fetching and decoding the raw tokenizer artifact.
"""

import http.client
import json
import logging
import urllib.error
import urllib.request
from pathlib import Path
from typing import Any

from . import config
from .errors import LoadError
from .types import Fetcher

log = logging.getLogger(__name__)


def _is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def fetch(source: str) -> bytes:
    """
    Return the raw artifact bytes from a local path or an ``http(s)`` URL.

    :raises LoadError: If the file is missing or the request fails.
    """
    if _is_url(source):
        log.debug(f"fetching artifact from {source}")
        try:
            with urllib.request.urlopen(source, timeout=config.fetch_timeout()) as resp:
                return resp.read()
        # malformed URLs raise InvalidURL (a ValueError), broken transfers HTTPException
        except (
            urllib.error.URLError,
            OSError,
            ValueError,
            http.client.HTTPException,
        ) as e:
            raise LoadError("failed to fetch tokenizer artifact", source=source) from e

    path = Path(source)
    if not path.is_file():
        raise LoadError("tokenizer artifact does not exist", source=str(path))
    log.debug(f"reading artifact from {path}")
    try:
        return path.read_bytes()
    except OSError as e:
        raise LoadError("failed to read tokenizer artifact", source=str(path)) from e


def read_document(source: str, fetcher: Fetcher | None = None) -> Any:
    """
    Fetch ``source`` and decode it as JSON.

    :param fetcher: Callable used instead of :func:`fetch`; any exception it
                    raises is wrapped in :class:`LoadError`.
    :raises LoadError: On fetch failure or invalid JSON.
    """
    if fetcher is None:
        raw = fetch(source)
    else:
        try:
            raw = fetcher(source)
        except LoadError:
            raise
        except Exception as e:
            raise LoadError("failed to fetch tokenizer artifact", source=source) from e

    try:
        return json.loads(raw)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise LoadError("tokenizer artifact is not valid JSON", source=source) from e
