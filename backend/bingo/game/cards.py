from __future__ import annotations

import random
from typing import Sequence

from .models import CARD_SIZE, FREE_SPACE_INDEX
from .phrases import CLICHES, FREE_SPACE

PHRASES_PER_CARD = CARD_SIZE - 1


def generate_card(pool: Sequence[str] = CLICHES, rng: random.Random | None = None) -> list[str]:
    """Deal a 5x5 card: 24 distinct phrases from ``pool`` around a centre FREE SPACE."""
    if len(pool) < PHRASES_PER_CARD:
        raise ValueError(f"phrase pool needs at least {PHRASES_PER_CARD} entries, got {len(pool)}")

    card = (rng or random).sample(list(pool), PHRASES_PER_CARD)
    card.insert(FREE_SPACE_INDEX, FREE_SPACE)
    return card
