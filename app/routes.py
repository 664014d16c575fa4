# app/routes.py

import time
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Query, Request

from app.config import API_VERSION, ENVIRONMENT, RANDOM_RATE_LIMIT, SEARCH_ALL, SEARCH_DEFAULT_LIMIT, SEARCH_MAX_LIMIT
from app.exceptions import NotFound, ServiceUnavailable
from app.models import (
    CharacterQuotes, ERROR_RESPONSES, HealthStatus, PageResult, SearchResult, SeasonEpisodes,
)
from app.security import limiter, parse_limit, parse_page, parse_positive_id, parse_season
from app.services import data_loader, query, search, stats
from app.services.entities import quote
from app.services.entities.registry import get_entity
from app.store import store

router = APIRouter()

STARTED_AT = time.monotonic()

def require_ready():
    if not store.is_ready:
        raise ServiceUnavailable("Data is still being loaded. Please try again later.")


# --- SERVICE METADATA ---

@router.get("/", tags=["Info"])
@limiter.exempt
def get_service_descriptor():
    """
    Service name, version, documentation links and the main endpoints.
    """
    return stats.service_descriptor()

@router.get("/api", tags=["Info"])
def get_api_catalogue():
    """
    Every endpoint with its documented filters and the pagination parameters.
    """
    return stats.api_catalogue()

@router.get("/api/health", response_model=HealthStatus, tags=["Health"])
def get_health():
    return {
        "status": "healthy" if store.is_ready else "loading",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "uptime": int(time.monotonic() - STARTED_AT),
        "version": API_VERSION,
        "environment": ENVIRONMENT,
        "ready": store.is_ready,
    }

@router.get("/api/stats", tags=["Info"])
def get_stats():
    require_ready()
    return stats.build_stats(store.snapshot())


# --- SEARCH ---

@router.get("/api/search", response_model=SearchResult, responses=ERROR_RESPONSES, tags=["Search"])
def search_everything(
    q: Optional[str] = None,
    category: str = Query(SEARCH_ALL, alias="type"),
    limit: Optional[str] = None,
    page: Optional[str] = None,
):
    """
    Case-insensitive substring search across every kind, or one kind via `type`.
    `limit` is results per category (default 5, at most 20).
    """
    require_ready()
    parse_page(page)
    per_category_limit = min(parse_limit(limit, SEARCH_DEFAULT_LIMIT), SEARCH_MAX_LIMIT)
    return search.run_search(store.snapshot(), q or "", category, per_category_limit)


# --- RELATIONS ---

@router.get(
    "/api/characters/{record_id}/quotes",
    response_model=CharacterQuotes,
    responses=ERROR_RESPONSES,
    tags=["Characters"],
)
def get_character_quotes(record_id: str):
    require_ready()
    character_id = parse_positive_id(record_id)
    return query.quotes_for_character(
        store.collection("characters"),
        store.collection("quotes"),
        character_id,
        quote.CHARACTER_FOREIGN_KEY,
    )

@router.get(
    "/api/seasons/{season}/episodes",
    response_model=SeasonEpisodes,
    responses=ERROR_RESPONSES,
    tags=["Episodes"],
)
def get_season_episodes(season: str):
    require_ready()
    return stats.season_episodes(store.collection("episodes"), parse_season(season))


# --- GENERIC ENTITY ROUTES ---
# Registered last so the specific paths above take precedence.

@router.get("/api/{kind}", response_model=PageResult, responses=ERROR_RESPONSES, tags=["Entities"])
def list_records(request: Request, kind: str):
    """
    Filtered, paginated listing. Every query parameter other than `page` and
    `limit` is matched as a case-insensitive substring of the record field.
    """
    get_entity(kind)
    require_ready()
    page = parse_page(request.query_params.get("page"))
    limit = parse_limit(request.query_params.get("limit"))

    records = data_loader.current_collection(kind)
    filtered = query.filter_records(records, dict(request.query_params))
    return query.paginate(filtered, page, limit)

@router.get("/api/{kind}/random", responses=ERROR_RESPONSES, tags=["Entities"])
@limiter.limit(RANDOM_RATE_LIMIT, override_defaults=False)
def get_random_record(request: Request, kind: str):
    """
    One record chosen uniformly at random. The random limit is shared by every kind
    and the calls also count toward the general limits.
    """
    get_entity(kind)
    require_ready()
    return query.pick_random(store.collection(kind))

@router.get("/api/{kind}/{record_id}", responses=ERROR_RESPONSES, tags=["Entities"])
def get_record(kind: str, record_id: str):
    entity = get_entity(kind)
    require_ready()
    record = query.find_by_id(store.collection(kind), parse_positive_id(record_id))
    if record is None:
        raise NotFound(f"{entity.LABEL} not found")
    return record
