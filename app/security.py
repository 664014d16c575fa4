# app/security.py
"""
Request admission: everything that runs around a route handler without
changing the shape of a successful response.

Rate limiting, query sanitization, security headers, optional
API key tracking and the validation of path/query parameters.
"""
import re
from typing import Dict, Optional
from urllib.parse import parse_qsl, urlencode

from fastapi import Request
from slowapi import Limiter
from slowapi.util import get_remote_address
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp, Receive, Scope, Send

from app.config import (
    API_NAME, API_VERSION, DEFAULT_PAGE, DEFAULT_PAGE_LIMIT, GENERAL_RATE_LIMITS,
    MAX_PAGE_LIMIT, QUERY_VALUE_MAX_LENGTH, RATE_LIMIT_ENABLED, RATE_LIMIT_STORAGE_URI,
    SEASON_RANGE,
)
from app.exceptions import BadRequest
from app.logging_setup import logger

# --- RATE LIMITING ---
# Default limits cover every routed endpoint through SlowAPIMiddleware;
# routes decorated with limiter.limit() are checked against their own limit.
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=GENERAL_RATE_LIMITS,
    storage_uri=RATE_LIMIT_STORAGE_URI,
    strategy="fixed-window",
    enabled=RATE_LIMIT_ENABLED,
)


# --- QUERY SANITIZATION ---
HTML_TAG_RE = re.compile(r"<[^>]*>")
UNSAFE_CHARS_RE = re.compile(r"[<>'\"]")

def sanitize_value(value: str) -> str:
    """
    Strips HTML tags and quote/angle characters, trims and caps the length.
    """
    value = HTML_TAG_RE.sub("", value)
    value = UNSAFE_CHARS_RE.sub("", value)
    return value.strip()[:QUERY_VALUE_MAX_LENGTH]

def sanitize_query_string(raw: bytes) -> bytes:
    """
    Rebuilds a query string with sanitized values. Repeated keys collapse to
    their last occurrence, so handlers only ever see one value per key.
    """
    if not raw:
        return raw
    collapsed: Dict[str, str] = {}
    for key, value in parse_qsl(raw.decode("latin-1"), keep_blank_values=True):
        collapsed.pop(key, None)
        collapsed[key] = sanitize_value(value)
    return urlencode(collapsed).encode("ascii")


class QuerySanitizerMiddleware:
    """
    Pure ASGI middleware rewriting scope["query_string"] before routing.
    """
    def __init__(self, app: ASGIApp):
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http" and scope.get("query_string"):
            scope = dict(scope)
            scope["query_string"] = sanitize_query_string(scope["query_string"])
        await self.app(scope, receive, send)


# --- SECURITY HEADERS ---
SECURITY_HEADERS: Dict[str, str] = {
    "Cache-Control": "no-store, no-cache, must-revalidate, proxy-revalidate",
    "Pragma": "no-cache",
    "Expires": "0",
    "X-Content-Type-Options": "nosniff",
    "X-API-Version": API_VERSION,
    "X-Powered-By": API_NAME,
}

class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        for name, value in SECURITY_HEADERS.items():
            response.headers[name] = value
        return response


# --- OPTIONAL API KEY TRACKING ---
class ApiKeyTrackingMiddleware(BaseHTTPMiddleware):
    """
    The API is public; a supplied X-API-Key is only recorded for usage tracking.
    Only the first characters of the key ever reach the logs.
    """
    async def dispatch(self, request: Request, call_next):
        api_key = request.headers.get("x-api-key")
        request.state.has_api_key = bool(api_key)
        if api_key:
            logger.info(
                "API key usage",
                extra={"api_key_prefix": f"{api_key[:8]}...", "path": request.url.path},
            )
        return await call_next(request)


# --- REQUEST VALIDATION ---
# Leading-integer parsing: "3", " 3", "3abc" all read as 3.
LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")

def _leading_int(value: str) -> Optional[int]:
    match = LEADING_INT_RE.match(value)
    return int(match.group(1)) if match else None

def parse_page(value: Optional[str]) -> int:
    if not value:
        return DEFAULT_PAGE
    page = _leading_int(value)
    if page is None or page < 1:
        raise BadRequest("Invalid page parameter. Must be a positive integer.")
    return page

def parse_limit(value: Optional[str], default: int = DEFAULT_PAGE_LIMIT) -> int:
    if not value:
        return default
    limit = _leading_int(value)
    if limit is None or not 1 <= limit <= MAX_PAGE_LIMIT:
        raise BadRequest(f"Invalid limit parameter. Must be between 1 and {MAX_PAGE_LIMIT}.")
    return limit

def parse_positive_id(value: str) -> int:
    record_id = _leading_int(value)
    if record_id is None or record_id < 1:
        raise BadRequest("Invalid ID parameter. Must be a positive integer.")
    return record_id

def parse_season(value: str) -> int:
    first_season, last_season = SEASON_RANGE
    season = _leading_int(value)
    if season is None or not first_season <= season <= last_season:
        raise BadRequest(
            f"Invalid season parameter. Must be between {first_season} and {last_season}."
        )
    return season
