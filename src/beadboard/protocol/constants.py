# Message type constants (stringly-typed protocol; canonical list lives here)

T_HELLO = "hello"

# client -> relay, and relay -> every other client
T_PLACE = "place"

# Board defaults (64x36 pegboard)
DEFAULT_COLS = 64
DEFAULT_ROWS = 36
DEFAULT_BOARD = "lobby"

CHANNEL_MAX = 255
