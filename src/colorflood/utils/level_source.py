from __future__ import annotations

import random
from typing import Optional, Tuple

from colorflood.components.level_spec import LevelSpec
from colorflood.persistence.level_store import LevelStore
from colorflood.systems.level_generator import LevelGenerator, LevelStrategy

SOURCE_STORED = "stored"
SOURCE_GENERATED = "generated"


def load_or_generate(
    store: Optional[LevelStore],
    generator: LevelGenerator,
    strategy: LevelStrategy | str = LevelStrategy.CROSS,
    *,
    rng: random.Random | None = None,
) -> Tuple[LevelSpec, str]:
    """Prefer a stored custom level; otherwise build one with ``strategy``."""
    if store is not None:
        level = store.load()
        if level is not None:
            return level, SOURCE_STORED
    return generator.generate(strategy, rng), SOURCE_GENERATED
