# app/services/entities/character.py
from typing import Dict, Any, Tuple

KIND = "characters"
LABEL = "Character"

# Text fields scanned by the cross-entity search.
SEARCH_FIELDS: Tuple[str, ...] = ("name", "real_name", "nickname", "description", "occupation", "portrayed_by")

# Filters advertised in the /api catalogue. Any record field is filterable.
DOCUMENTED_FILTERS: Tuple[str, ...] = ("name", "status", "gender", "occupation", "seasons", "powers")

def to_search_result(character: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "id": character.get("id"),
        "name": character.get("name"),
        "type": "character",
        "status": character.get("status"),
        "portrayed_by": character.get("portrayed_by"),
        "portrait_path": character.get("portrait_path"),
    }
