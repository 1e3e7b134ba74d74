from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

from beadboard.protocol.constants import DEFAULT_BOARD, DEFAULT_COLS, DEFAULT_ROWS


class Settings(BaseSettings):
    """
    Runtime config (relay).

    - Loaded from environment variables (`BEADBOARD_*`)
    - Also reads `.env` if present (via pydantic-settings + python-dotenv)
    """

    model_config = SettingsConfigDict(env_file=".env", env_prefix="BEADBOARD_", extra="ignore")

    # Declared board bounds; placements outside them are dropped by the relay.
    grid_cols: int = DEFAULT_COLS
    grid_rows: int = DEFAULT_ROWS

    # Board used by the bare `/ws` endpoint
    default_board: str = DEFAULT_BOARD

    # Per-peer outbox; a peer that falls this far behind starts losing events.
    peer_queue_max: int = 1024

    # Bootstrap
    host: str = "127.0.0.1"
    port: int = 8000

    # Debugging
    debug_log_msgs: bool = False


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
