import random
from typing import Optional

from esper import World
from .events.bus import EventBus, EVENT_LEVEL_LOADED
from colorflood.constants import GRID_COLS, GRID_ROWS, MOVE_BUDGET, PLAY_PALETTE
from colorflood.components.level_spec import LevelSpec
from colorflood.persistence.level_store import LevelStore
from colorflood.systems.game_session import GameSession
from colorflood.systems.level_generator import LevelGenerator, LevelStrategy
from colorflood.utils.level_source import load_or_generate


def create_world(
    event_bus: EventBus,
    *,
    level: Optional[LevelSpec] = None,
    store: Optional[LevelStore] = None,
    strategy: LevelStrategy | str = LevelStrategy.CROSS,
    rows: int = GRID_ROWS,
    cols: int = GRID_COLS,
    move_budget: int = MOVE_BUDGET,
    rng: random.Random | None = None,
) -> World:
    """Build a world holding one ready-to-play GameSession.

    An explicit ``level`` wins; otherwise a stored custom level is used when
    ``store`` has one, falling back to ``strategy``. The session, generator
    and random source are attached to the world as attributes.
    """
    world = World()
    world_rng = rng or random.Random()
    setattr(world, "random", world_rng)

    generator = LevelGenerator(rows, cols, PLAY_PALETTE, rng=world_rng)
    setattr(world, "level_generator", generator)

    if level is not None:
        source = "explicit"
    else:
        level, source = load_or_generate(store, generator, strategy)

    session = GameSession(world, event_bus, level, move_budget=move_budget)
    setattr(world, "session", session)
    event_bus.emit(EVENT_LEVEL_LOADED, source=source, target_color=level.target_color)
    return world
