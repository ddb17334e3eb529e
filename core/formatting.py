# =============================================================================
# core/formatting.py  —  Port.io JSON → human-readable text
# =============================================================================
#
# Every tool answers with plain text.  The formatters below pick the fields
# an assistant cares about, pretty-print nested JSON (properties, relations,
# triggers) with two-space indentation and join items with blank lines.
#
# Output is text only; there is no structured result mode.
# =============================================================================

import json
from typing import Any, Iterable

from core.errors import ResponseFormatError
from core.models import Action, Blueprint, Entity


def pretty_json(value: Any) -> str:
    """Two-space indented JSON; non-JSON values fall back to ``str``."""
    return json.dumps(value, indent=2, ensure_ascii=False, default=str)


def extract_list(data: Any, key: str, fall_back_to_payload: bool = False) -> list[Any]:
    """Pull the item list out of a Port.io response.

    Port.io wraps lists as ``{"entities": [...]}``.  Some callers also accept
    a bare list (``fall_back_to_payload``).  Anything that is not a list ends
    up as an empty list.
    """
    items = data.get(key) if isinstance(data, dict) else None
    if items is None and fall_back_to_payload:
        items = data
    return items if isinstance(items, list) else []


def _dicts(items: Iterable[Any]) -> list[dict[str, Any]]:
    return [item for item in items if isinstance(item, dict)]


def format_entity_list(entities: list[Entity]) -> str:
    blocks = [
        f"• {entity.display_name} ({entity.blueprint})\n"
        f"  Properties: {pretty_json(entity.properties)}"
        for entity in entities
    ]
    return f"Found {len(entities)} entities:\n\n" + "\n\n".join(blocks)


def format_entity_detail(data: Any) -> str:
    raw = data.get("entity") if isinstance(data, dict) else None
    if not isinstance(raw, dict):
        raise ResponseFormatError("Port API response did not contain an entity")
    entity = Entity.from_api(raw)
    return (
        "Entity Details:\n\n"
        f"Identifier: {entity.identifier}\n"
        f"Title: {entity.title}\n"
        f"Blueprint: {entity.blueprint}\n\n"
        f"Properties:\n{pretty_json(entity.properties)}\n\n"
        f"Relations:\n{pretty_json(entity.relations)}"
    )


def format_scorecards(data: Any) -> str:
    return f"Scorecard Results:\n\n{pretty_json(data)}"


def format_blueprints(blueprints: list[Blueprint]) -> str:
    blocks = [
        f"• {bp.title or bp.identifier}\n"
        f"  Description: {bp.description or 'No description'}\n"
        f"  Properties: {', '.join(bp.property_names)}"
        for bp in blueprints
    ]
    return f"Available Blueprints ({len(blueprints)}):\n\n" + "\n\n".join(blocks)


def format_search_results(query: str, entities: list[Entity]) -> str:
    blocks = [
        f"• {entity.display_name} ({entity.blueprint})\n"
        f"  {pretty_json(entity.properties)}"
        for entity in entities
    ]
    return f'Search Results for "{query}" ({len(entities)} found):\n\n' + "\n\n".join(blocks)


def format_actions(actions: list[Action]) -> str:
    blocks = [
        f"• {action.title or action.identifier}\n"
        f"  Blueprint: {action.blueprint}\n"
        f"  Description: {action.description or 'No description'}\n"
        f"  Trigger: {pretty_json(action.trigger)}"
        for action in actions
    ]
    return f"Available Actions ({len(actions)}):\n\n" + "\n\n".join(blocks)


def parse_entities(items: Iterable[Any]) -> list[Entity]:
    return [Entity.from_api(raw) for raw in _dicts(items)]


def parse_blueprints(items: Iterable[Any]) -> list[Blueprint]:
    return [Blueprint.from_api(raw) for raw in _dicts(items)]


def parse_actions(items: Iterable[Any]) -> list[Action]:
    return [Action.from_api(raw) for raw in _dicts(items)]
