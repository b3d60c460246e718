from colorflood.components.color import Color

GRID_ROWS = 20
GRID_COLS = 10

# Flood operations a player gets before the level counts as lost.
MOVE_BUDGET = 3

# Colors a player may pick during play. Order matters for level generation:
# the deterministic patterns and the fixed quadrants read colors by index.
PLAY_PALETTE = (Color.RED, Color.GREEN, Color.YELLOW)

# The editor may paint with one extra color that is never selectable in play.
EDITOR_PALETTE = (Color.RED, Color.GREEN, Color.YELLOW, Color.BLUE)

EDITOR_DEFAULT_TARGET = Color.RED

# Key under which a custom level is kept in key-value storage.
STORAGE_KEY = "customLevel"

# Pattern geometry (reference values for a 20x10 board).
CORNER_BLOCK_SIZE = 2
CENTER_BLOCK_HEIGHT = 6
CENTER_BLOCK_WIDTH = 6
STRIPE_PERIOD = 4
