# app/services/entities/creature.py
from typing import Dict, Any, Tuple

KIND = "creatures"
LABEL = "Creature"

SEARCH_FIELDS: Tuple[str, ...] = ("name", "description", "origin", "classification")

DOCUMENTED_FILTERS: Tuple[str, ...] = ("name", "origin", "status", "threat_level")

def to_search_result(creature: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "id": creature.get("id"),
        "name": creature.get("name"),
        "type": "creature",
        "threat_level": creature.get("threat_level"),
        "origin": creature.get("origin"),
        "image_path": creature.get("image_path"),
    }
