# app/services/entities/quote.py
from typing import Dict, Any, Tuple

KIND = "quotes"
LABEL = "Quote"

SEARCH_FIELDS: Tuple[str, ...] = ("quote", "character", "context")

DOCUMENTED_FILTERS: Tuple[str, ...] = ("character", "season")

# Foreign key pointing at the quoted character's id.
CHARACTER_FOREIGN_KEY = "character_id"

def to_search_result(quote: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "id": quote.get("id"),
        "quote": quote.get("quote"),
        "type": "quote",
        "character": quote.get("character"),
        "season": quote.get("season"),
    }
