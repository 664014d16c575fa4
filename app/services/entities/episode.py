# app/services/entities/episode.py
from typing import Dict, Any, Tuple

KIND = "episodes"
LABEL = "Episode"

SEARCH_FIELDS: Tuple[str, ...] = ("title", "synopsis", "directed_by")

DOCUMENTED_FILTERS: Tuple[str, ...] = ("season", "title", "directed_by")

def to_search_result(episode: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "id": episode.get("id"),
        "title": episode.get("title"),
        "type": "episode",
        "season": episode.get("season"),
        "episode": episode.get("episode"),
        "air_date": episode.get("air_date"),
    }
