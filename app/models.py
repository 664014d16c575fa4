from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field

# Records are served as stored, so their schema is left open.
Record = Dict[str, Any]

# --- ERRORS ---
class ErrorResponse(BaseModel):
    error: str = Field(..., examples=["Not Found"])
    message: str = Field(..., examples=["Character not found"])
    code: int = Field(..., examples=[404])

class NotFoundResponse(ErrorResponse):
    documentation: Optional[str] = None
    available_endpoints: Optional[List[str]] = None

# Shared `responses=` declarations for the OpenAPI schema.
ERROR_RESPONSES: Dict[int, Dict[str, Any]] = {
    400: {"model": ErrorResponse, "description": "Invalid request parameters"},
    404: {"model": NotFoundResponse, "description": "Resource not found"},
    429: {"model": ErrorResponse, "description": "Rate limit exceeded"},
}

# --- LISTING ---
class PageResult(BaseModel):
    count: int
    pages: int
    current_page: int
    per_page: int
    next: Optional[int] = None
    prev: Optional[int] = None
    results: List[Record] = Field(default_factory=list)

# --- SEARCH ---
class SearchResult(BaseModel):
    query: str
    type: str
    total_results: int
    results_per_category: int
    results: Dict[str, List[Record]]

# --- RELATIONS ---
class CharacterQuotes(BaseModel):
    character: Optional[str] = None
    character_id: int
    quote_count: int
    quotes: List[Record]

class SeasonEpisodes(BaseModel):
    season: int
    episode_count: int
    episodes: List[Record]

# --- HEALTH ---
class HealthStatus(BaseModel):
    status: str = Field(..., examples=["healthy", "loading"])
    timestamp: str
    uptime: int = Field(..., description="Whole seconds since the process started")
    version: str
    environment: str
    ready: bool
