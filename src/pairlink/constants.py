GRID_ROWS = 8
GRID_COLS = 10
TILE_KINDS_COUNT = 6

# Kind index reserved for a cell without a tile.
EMPTY_KIND = 0

# Render-space geometry (pixels). Board is scaled down, never up, to fit the window.
TILE_SIZE = 80
TILE_SPACING = 10
BOARD_PADDING = 50
MIN_TILE_SIZE = 16

# Path animation timings (seconds) for the default path animator.
PATH_DRAW_DURATION = 0.3
PATH_FADE_DURATION = 0.2
PATH_LINE_WIDTH = 4
PATH_LINE_COLOR = (255, 215, 0)

# Shuffle-on-deadlock retry bound; compaction can reproduce a deadlock.
MAX_SHUFFLE_ATTEMPTS = 10
