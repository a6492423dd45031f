"""Runtime configuration.

Settings are read once from the environment (and a local ``.env`` file,
if present) so the rest of the code never touches ``os.environ``.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv

# When installed in editable mode the project root is the repo root.
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    data_dir: Path
    products_file: Path
    mongo_url: str
    mongo_database: str
    carts_collection: str
    log_level: str


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    load_dotenv()

    data_dir = Path(os.getenv("CATALOG_DATA_DIR") or _DEFAULT_DATA_DIR)
    products_file = os.getenv("CATALOG_PRODUCTS_FILE")

    return Settings(
        data_dir=data_dir,
        products_file=Path(products_file) if products_file else data_dir / "products.json",
        mongo_url=os.getenv("MONGO_URL", "mongodb://localhost:27017"),
        mongo_database=os.getenv("MONGO_DB", "catalog"),
        carts_collection=os.getenv("MONGO_CARTS_COLLECTION", "carts"),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
    )
