"""Fixed-length inputs for the downstream sequence classifier."""

from typing import NamedTuple

from . import config
from .types import TokenId


class ClassifierInputs(NamedTuple):
    input_ids: list[TokenId]
    attention_mask: list[int]


def prepare_inputs(
    ids: list[TokenId], max_length: int, pad_id: TokenId = config.DEFAULT_PAD_ID
) -> ClassifierInputs:
    """
    Truncate or right-pad ``ids`` to exactly ``max_length``.

    The attention mask is 1 for real tokens and 0 for padding.

    :raises ValueError: If ``max_length`` is not positive.
    """
    if max_length <= 0:
        raise ValueError(f"max_length must be positive, got {max_length}")

    kept = list(ids[:max_length])
    n_pad = max_length - len(kept)
    return ClassifierInputs(
        input_ids=kept + [pad_id] * n_pad,
        attention_mask=[1] * len(kept) + [0] * n_pad,
    )
