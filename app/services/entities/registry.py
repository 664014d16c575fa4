# app/services/entities/registry.py
from types import ModuleType
from typing import Dict

from app.exceptions import UnknownEndpoint
from app.services.entities import character, creature, episode, location, quote

# Entity kind -> descriptor module (search fields, projection, labels).
ENTITY_MODULES: Dict[str, ModuleType] = {
    module.KIND: module for module in (character, creature, episode, location, quote)
}

def get_entity(kind: str) -> ModuleType:
    """
    Returns the descriptor for a kind. Raises UnknownEndpoint for unknown kinds so
    that /api/<unknown> behaves like any other missing endpoint.
    """
    module = ENTITY_MODULES.get(kind)
    if module is None:
        raise UnknownEndpoint()
    return module
