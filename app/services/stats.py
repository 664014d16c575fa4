# app/services/stats.py
from datetime import datetime, timezone
from typing import Dict, Any, List, Mapping, Sequence

from app.config import (
    API_NAME, API_VERSION, DEFAULT_PAGE_LIMIT, ENTITY_KINDS, GENERAL_RATE_LIMITS,
    MAX_PAGE_LIMIT, RANDOM_RATE_LIMIT, SEASON_RANGE,
)
from app.exceptions import NotFound
from app.services.entities.registry import ENTITY_MODULES

Record = Mapping[str, Any]

RATE_LIMITS_INFO: Dict[str, str] = {
    "general": GENERAL_RATE_LIMITS[0],
    "random_endpoints": RANDOM_RATE_LIMIT,
    "heavy_usage": GENERAL_RATE_LIMITS[1],
}


def build_stats(collections: Mapping[str, Sequence[Record]]) -> Dict[str, Any]:
    """
    Aggregate counts over the current snapshot.
    """
    characters = collections.get("characters", ())
    episodes = collections.get("episodes", ())
    first_season, last_season = SEASON_RANGE

    stats: Dict[str, Any] = {f"total_{kind}": len(collections.get(kind, ())) for kind in ENTITY_KINDS}
    stats["seasons"] = {
        "total": last_season - first_season + 1,
        "episodes_per_season": {
            str(season): sum(1 for e in episodes if e.get("season") == season)
            for season in range(first_season, last_season + 1)
        },
    }
    stats["characters_by_status"] = {
        "alive": sum(1 for c in characters if c.get("status") == "Alive"),
        "deceased": sum(1 for c in characters if c.get("status") == "Deceased"),
        "unknown": sum(1 for c in characters if c.get("status") not in ("Alive", "Deceased")),
    }
    stats["api_version"] = API_VERSION
    stats["last_updated"] = datetime.now(timezone.utc).isoformat()
    return stats


def season_episodes(episodes: Sequence[Record], season: int) -> Dict[str, Any]:
    """
    Lists the episodes of one season in collection order.
    The caller validates that the season number is within SEASON_RANGE.
    """
    matching = [e for e in episodes if e.get("season") == season]
    if not matching:
        raise NotFound("Season not found")
    return {"season": season, "episode_count": len(matching), "episodes": matching}


def service_descriptor() -> Dict[str, Any]:
    """Payload for GET /."""
    return {
        "name": API_NAME,
        "version": API_VERSION,
        "description": (
            "Free API providing comprehensive data about Stranger Things characters, "
            "episodes, locations, creatures, and quotes."
        ),
        "documentation": {
            "interactive": "/api/docs",
            "openapi_spec": "/api/openapi.json",
        },
        "endpoints": {
            **{kind: f"/api/{kind}" for kind in ENTITY_KINDS},
            "search": "/api/search",
            "stats": "/api/stats",
            "health": "/api/health",
            "random": {ENTITY_MODULES[kind].LABEL.lower(): f"/api/{kind}/random" for kind in ENTITY_KINDS},
        },
        "rate_limits": RATE_LIMITS_INFO,
    }


def api_catalogue() -> Dict[str, Any]:
    """Payload for GET /api: every endpoint with its documented filters."""
    endpoints: List[Dict[str, Any]] = []
    for kind in ENTITY_KINDS:
        entity = ENTITY_MODULES[kind]
        endpoints.extend([
            {
                "endpoint": f"/api/{kind}",
                "description": f"Get all {kind}",
                "methods": ["GET"],
                "filters": list(entity.DOCUMENTED_FILTERS),
            },
            {"endpoint": f"/api/{kind}/:id", "description": f"Get {entity.LABEL.lower()} by ID", "methods": ["GET"]},
            {"endpoint": f"/api/{kind}/random", "description": f"Get a random {entity.LABEL.lower()}", "methods": ["GET"]},
        ])
    endpoints.extend([
        {"endpoint": "/api/characters/:id/quotes", "description": "Get all quotes of a character", "methods": ["GET"]},
        {"endpoint": "/api/seasons/:season/episodes", "description": "Get all episodes of a season", "methods": ["GET"]},
        {"endpoint": "/api/search", "description": "Search across all data", "methods": ["GET"]},
        {"endpoint": "/api/stats", "description": "Dataset statistics", "methods": ["GET"]},
    ])

    return {
        "message": f"Welcome to the {API_NAME}!",
        "version": API_VERSION,
        "documentation": "/api/docs",
        "available_endpoints": endpoints,
        "pagination": {
            "description": "All list endpoints support pagination",
            "parameters": {
                "page": "Page number (default: 1)",
                "limit": f"Items per page (default: {DEFAULT_PAGE_LIMIT}, max: {MAX_PAGE_LIMIT})",
            },
        },
        "rate_limits": RATE_LIMITS_INFO,
    }
