# app/services/query.py
"""
Generic query engine shared by every entity kind.

Records are plain field mappings; nothing here knows about a specific kind.
All functions are pure: they never log, mutate their inputs or keep state
between calls. Failures are signalled with the exceptions in app.exceptions.
"""
import math
import random
from typing import Any, Dict, List, Mapping, Optional, Sequence

from app.config import DEFAULT_PAGE, DEFAULT_PAGE_LIMIT, RESERVED_QUERY_PARAMS
from app.exceptions import EmptyCollection, NotFound

Record = Mapping[str, Any]


def _stringify(value: Any) -> str:
    """
    Renders a field value the way it is compared during filtering.
    """
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _field_matches(field_value: Any, expected: str) -> bool:
    needle = expected.lower()
    if isinstance(field_value, (list, tuple)):
        return any(needle in _stringify(v).lower() for v in field_value)
    return needle in _stringify(field_value).lower()


def filter_records(records: Sequence[Record], constraints: Mapping[str, Any]) -> List[Record]:
    """
    Returns the records satisfying every constraint, in their original order.

    A constraint matches when its string form is a case-insensitive substring
    of the field's string form (or of any element, for list fields). A record
    that does not carry the constrained field is kept. Pagination controls
    are not constraints.
    """
    active = {
        key: _stringify(value)
        for key, value in constraints.items()
        if key not in RESERVED_QUERY_PARAMS
    }
    if not active:
        return list(records)

    return [
        record for record in records
        if all(key not in record or _field_matches(record[key], value) for key, value in active.items())
    ]


def paginate(records: Sequence[Record], page: int = DEFAULT_PAGE, limit: int = DEFAULT_PAGE_LIMIT) -> Dict[str, Any]:
    """
    Slices one 1-indexed page out of records and attaches navigation metadata.
    The caller guarantees page >= 1 and a sane limit; out-of-range pages
    simply come back empty.
    """
    count = len(records)
    start = (page - 1) * limit
    end = start + limit

    return {
        "count": count,
        "pages": math.ceil(count / limit),
        "current_page": page,
        "per_page": limit,
        "next": page + 1 if end < count else None,
        "prev": page - 1 if page > 1 else None,
        "results": list(records[start:end]),
    }


def pick_random(records: Sequence[Record], rng: Optional[random.Random] = None) -> Record:
    """
    Returns one record chosen uniformly over the whole collection.
    """
    if not records:
        raise EmptyCollection("Cannot pick a random record from an empty collection")
    rng = rng or random
    return records[rng.randrange(len(records))]


def find_by_id(records: Sequence[Record], record_id: int) -> Optional[Record]:
    return next((r for r in records if r.get("id") == record_id), None)


def find_related(records: Sequence[Record], foreign_key_field: str, record_id: int) -> List[Record]:
    """
    Returns every record whose foreign key points at record_id, preserving order.
    """
    return [r for r in records if r.get(foreign_key_field) == record_id]


def quotes_for_character(
    characters: Sequence[Record],
    quotes: Sequence[Record],
    character_id: int,
    foreign_key_field: str = "character_id",
) -> Dict[str, Any]:
    """
    Resolves a character and all quotes attributed to it.
    Raises NotFound before scanning quotes if the character does not exist.
    """
    character = find_by_id(characters, character_id)
    if character is None:
        raise NotFound("Character not found")

    character_quotes = find_related(quotes, foreign_key_field, character_id)
    return {
        "character": character.get("name"),
        "character_id": character_id,
        "quote_count": len(character_quotes),
        "quotes": character_quotes,
    }
