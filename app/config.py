# app/config.py
import os
from pathlib import Path
from typing import Dict, FrozenSet, List, Tuple

# --- SERVICE METADATA ---
API_NAME: str = "Stranger Things API"
API_VERSION: str = "1.0.0"
ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development").lower().strip()
IS_PRODUCTION: bool = ENVIRONMENT == "production"


# --- DATASET CONFIGURATION ---
DATA_DIR: Path = Path(os.getenv("DATA_DIR", Path(__file__).resolve().parent.parent / "data"))

# Entity kind -> source file inside DATA_DIR. Order is the search/category order.
COLLECTION_FILES: Dict[str, str] = {
    "characters": "characters.json",
    "creatures": "creatures.json",
    "episodes": "episodes.json",
    "locations": "locations.json",
    "quotes": "quotes.json",
}
ENTITY_KINDS: Tuple[str, ...] = tuple(COLLECTION_FILES)

# Kinds whose source file is re-read before each list read.
RELOAD_ON_READ: FrozenSet[str] = frozenset({"characters"})

SEASON_RANGE: Tuple[int, int] = (1, 4)


# --- QUERY ENGINE LIMITS ---
DEFAULT_PAGE: int = 1
DEFAULT_PAGE_LIMIT: int = 20
MAX_PAGE_LIMIT: int = 50
RESERVED_QUERY_PARAMS: FrozenSet[str] = frozenset({"page", "limit"})

SEARCH_MIN_QUERY_LENGTH: int = 2
SEARCH_DEFAULT_LIMIT: int = 5
SEARCH_MAX_LIMIT: int = 20
SEARCH_ALL: str = "all"


# --- REQUEST ADMISSION ---
QUERY_VALUE_MAX_LENGTH: int = 100

RATE_LIMIT_ENABLED: bool = os.getenv("RATE_LIMIT_ENABLED", "1").strip() != "0"
RATE_LIMIT_STORAGE_URI: str = os.getenv("REDIS_URL", "").strip() or "memory://"
GENERAL_RATE_LIMITS: List[str] = ["100 per 15 minutes", "1000 per hour"]
RANDOM_RATE_LIMIT: str = "30 per minute"

CORS_ALLOW_ORIGINS: List[str] = ["*"]
CORS_ALLOW_METHODS: List[str] = ["GET", "HEAD", "OPTIONS"]
CORS_ALLOW_HEADERS: List[str] = ["Content-Type", "Authorization", "X-API-Key"]
CORS_EXPOSE_HEADERS: List[str] = ["X-API-Version", "X-Request-ID", "Retry-After"]
CORS_MAX_AGE: int = 86400

GZIP_MINIMUM_SIZE: int = 1000
