# app/services/entities/location.py
from typing import Dict, Any, Tuple

KIND = "locations"
LABEL = "Location"

SEARCH_FIELDS: Tuple[str, ...] = ("name", "description", "type", "significance")

DOCUMENTED_FILTERS: Tuple[str, ...] = ("name", "type", "status")

def to_search_result(location: Dict[str, Any]) -> Dict[str, Any]:
    # "type" is the search tag here, so the record's own type moves to location_type.
    return {
        "id": location.get("id"),
        "name": location.get("name"),
        "type": "location",
        "location_type": location.get("type"),
        "status": location.get("status"),
    }
