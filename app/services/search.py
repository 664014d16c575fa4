from typing import Dict, Any, List, Mapping, Sequence

from app.config import ENTITY_KINDS, SEARCH_ALL, SEARCH_DEFAULT_LIMIT, SEARCH_MIN_QUERY_LENGTH
from app.exceptions import InvalidQuery
from app.services.entities.registry import ENTITY_MODULES


def _record_matches(record: Mapping[str, Any], fields: Sequence[str], needle: str) -> bool:
    """
    True if any of the given text fields contains the (already lower-cased) needle.
    Missing and non-string fields never match.
    """
    for field in fields:
        value = record.get(field)
        if isinstance(value, str) and needle in value.lower():
            return True
    return False


def search_collection(
    kind: str,
    records: Sequence[Mapping[str, Any]],
    needle: str,
    limit: int,
) -> List[Dict[str, Any]]:
    """
    Scans one collection in order and returns at most `limit` projected hits.
    """
    entity = ENTITY_MODULES[kind]
    hits: List[Dict[str, Any]] = []
    for record in records:
        if len(hits) >= limit:
            break
        if _record_matches(record, entity.SEARCH_FIELDS, needle):
            hits.append(entity.to_search_result(record))
    return hits


def enabled_categories(category: str) -> List[str]:
    """
    Expands a category selector into the list of kinds to search. An
    unrecognised selector searches nothing.
    """
    category = (category or SEARCH_ALL).lower()
    if category == SEARCH_ALL:
        return list(ENTITY_KINDS)
    if category in ENTITY_KINDS:
        return [category]
    return []


def run_search(
    collections: Mapping[str, Sequence[Mapping[str, Any]]],
    query: str,
    category: str = SEARCH_ALL,
    per_category_limit: int = SEARCH_DEFAULT_LIMIT,
) -> Dict[str, Any]:
    """
    Substring search across the enabled categories.

    Each category is searched independently over its own fixed field list;
    results keep collection order (no scoring) and are capped per category.
    `total_results` counts what is returned, not every possible match.
    """
    if not query or len(query.strip()) < SEARCH_MIN_QUERY_LENGTH:
        raise InvalidQuery(f"Search query must be at least {SEARCH_MIN_QUERY_LENGTH} characters")

    needle = query.strip().lower()
    kinds = enabled_categories(category)

    results: Dict[str, List[Dict[str, Any]]] = {}
    total_results = 0
    for kind in kinds:
        results[kind] = search_collection(kind, collections.get(kind, ()), needle, per_category_limit)
        total_results += len(results[kind])

    return {
        "query": query,
        "type": (category or SEARCH_ALL).lower(),
        "total_results": total_results,
        "results_per_category": per_category_limit,
        "results": results,
    }
