# =============================================================================
# core/catalog.py  —  The six catalog tools as declarative descriptors
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Describes each tool as a CatalogTool: a name, a description, a label used
#   in error messages, a function that builds the endpoint from the call's
#   parameters, and a function that turns the JSON response into text.
#   run_catalog_tool() is the single pipeline every tool goes through:
#
#     params → build_path → PortClient.request("GET") → format_result → text
#
#   Any exception on the way becomes a ToolOutcome whose text starts with
#   "Error <action>: ...".  Nothing is retried and nothing is returned
#   partially.
#
# PARAMETER VALIDATION:
#   Types and required fields are enforced by the MCP schema in
#   tools/mcp_server.py before a call gets here.  Descriptors only deal
#   with optional parameters being None.
# =============================================================================

import logging
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional
from urllib.parse import quote, urlencode

from core.errors import PortError
from core.formatting import (
    extract_list,
    format_actions,
    format_blueprints,
    format_entity_detail,
    format_entity_list,
    format_scorecards,
    format_search_results,
    parse_actions,
    parse_blueprints,
    parse_entities,
)
from core.gateway import PortClient
from core.models import Entity, ToolOutcome

logger = logging.getLogger(__name__)

MAX_ENTITY_LIMIT = 500
DEFAULT_ENTITY_LIMIT = 50

Params = Mapping[str, Any]


@dataclass(frozen=True)
class CatalogTool:
    """Everything that distinguishes one catalog tool from another."""

    name: str
    description: str
    action: str                                     # "fetching entities" → "Error fetching entities: ..."
    build_path: Callable[[Params], str]
    format_result: Callable[[Any, Params], str]


# -----------------------------------------------------------------------------
# Endpoint helpers
# -----------------------------------------------------------------------------
def _segment(value: str) -> str:
    return quote(str(value), safe="")


def _with_query(path: str, query: list[tuple[str, Any]]) -> str:
    return f"{path}?{urlencode(query)}" if query else path


def clamp_limit(limit: Optional[float]) -> Optional[float]:
    """Cap ``limit`` at 500; a falsy limit means "let Port.io decide".

    Whole numbers come back as ``int`` so ``50.0`` is sent as ``limit=50``;
    fractional limits are passed through unchanged.
    """
    if not limit:
        return None
    limit = min(limit, MAX_ENTITY_LIMIT)
    return int(limit) if float(limit).is_integer() else limit


def values_equal(expected: Any, actual: Any) -> bool:
    """Exact equality for JSON values.

    Python treats ``True == 1``; JSON does not, so booleans only match
    booleans.  Containers are compared element-wise under the same rule.
    """
    if isinstance(expected, bool) or isinstance(actual, bool):
        return type(expected) is type(actual) and expected == actual
    if isinstance(expected, dict) and isinstance(actual, dict):
        return expected.keys() == actual.keys() and all(
            values_equal(value, actual[key]) for key, value in expected.items()
        )
    if isinstance(expected, list) and isinstance(actual, list):
        return len(expected) == len(actual) and all(
            values_equal(a, b) for a, b in zip(expected, actual)
        )
    if isinstance(expected, (dict, list)) or isinstance(actual, (dict, list)):
        return False
    return expected == actual


def filter_by_properties(entities: list[Entity], properties: Optional[Mapping[str, Any]]) -> list[Entity]:
    """Keep entities whose properties match every key in ``properties`` exactly.

    Only the page Port.io returned is filtered; matches beyond it are not
    fetched.  An empty or missing filter keeps everything.
    """
    if not properties:
        return list(entities)
    return [
        entity
        for entity in entities
        if all(
            key in entity.properties and values_equal(value, entity.properties[key])
            for key, value in properties.items()
        )
    ]


# -----------------------------------------------------------------------------
# get_entities
# -----------------------------------------------------------------------------
def _entities_path(params: Params) -> str:
    query: list[tuple[str, Any]] = []
    limit = clamp_limit(params.get("limit", DEFAULT_ENTITY_LIMIT))
    if limit:
        query.append(("limit", limit))
    if params.get("search"):
        query.append(("search", params["search"]))

    blueprint = params.get("blueprint")
    path = f"/v1/blueprints/{_segment(blueprint)}/entities" if blueprint else "/v1/entities"
    return _with_query(path, query)


def _entities_text(data: Any, params: Params) -> str:
    return format_entity_list(parse_entities(extract_list(data, "entities", fall_back_to_payload=True)))


# -----------------------------------------------------------------------------
# get_entity
# -----------------------------------------------------------------------------
def _entity_path(params: Params) -> str:
    return f"/v1/blueprints/{_segment(params['blueprint'])}/entities/{_segment(params['entity'])}"


def _entity_text(data: Any, params: Params) -> str:
    return format_entity_detail(data)


# -----------------------------------------------------------------------------
# get_scorecard_results
# -----------------------------------------------------------------------------
# ``entity`` narrows the result only when a scorecard is named as well.
# -----------------------------------------------------------------------------
def _scorecards_path(params: Params) -> str:
    path = f"/v1/blueprints/{_segment(params['blueprint'])}/scorecards"
    scorecard = params.get("scorecard")
    if scorecard:
        path += f"/{_segment(scorecard)}"
        entity = params.get("entity")
        if entity:
            path += f"/entities/{_segment(entity)}"
    return path


def _scorecards_text(data: Any, params: Params) -> str:
    return format_scorecards(data)


# -----------------------------------------------------------------------------
# get_blueprints
# -----------------------------------------------------------------------------
def _blueprints_path(params: Params) -> str:
    search = params.get("search")
    return _with_query("/v1/blueprints", [("search", search)] if search else [])


def _blueprints_text(data: Any, params: Params) -> str:
    return format_blueprints(parse_blueprints(extract_list(data, "blueprints")))


# -----------------------------------------------------------------------------
# search_entities
# -----------------------------------------------------------------------------
def _search_path(params: Params) -> str:
    query: list[tuple[str, Any]] = [("search", params["query"])]
    if params.get("blueprint"):
        query.append(("blueprint", params["blueprint"]))
    return _with_query("/v1/entities", query)


def _search_text(data: Any, params: Params) -> str:
    entities = parse_entities(extract_list(data, "entities"))
    matches = filter_by_properties(entities, params.get("properties"))
    return format_search_results(params["query"], matches)


# -----------------------------------------------------------------------------
# get_actions
# -----------------------------------------------------------------------------
def _actions_path(params: Params) -> str:
    blueprint = params.get("blueprint")
    return f"/v1/blueprints/{_segment(blueprint)}/actions" if blueprint else "/v1/actions"


def _actions_text(data: Any, params: Params) -> str:
    return format_actions(parse_actions(extract_list(data, "actions", fall_back_to_payload=True)))


# =============================================================================
# Registry
# =============================================================================
CATALOG_TOOLS: dict[str, CatalogTool] = {
    tool.name: tool
    for tool in (
        CatalogTool(
            name="get_entities",
            description="Get entities from Port.io software catalog with optional filtering",
            action="fetching entities",
            build_path=_entities_path,
            format_result=_entities_text,
        ),
        CatalogTool(
            name="get_entity",
            description="Get a specific entity by its identifier and blueprint",
            action="fetching entity",
            build_path=_entity_path,
            format_result=_entity_text,
        ),
        CatalogTool(
            name="get_scorecard_results",
            description="Get scorecard evaluation results for entities",
            action="fetching scorecard results",
            build_path=_scorecards_path,
            format_result=_scorecards_text,
        ),
        CatalogTool(
            name="get_blueprints",
            description="Get available blueprints in the software catalog",
            action="fetching blueprints",
            build_path=_blueprints_path,
            format_result=_blueprints_text,
        ),
        CatalogTool(
            name="search_entities",
            description="Search entities across all blueprints with advanced filtering",
            action="searching entities",
            build_path=_search_path,
            format_result=_search_text,
        ),
        CatalogTool(
            name="get_actions",
            description="Get available self-service actions in Port.io",
            action="fetching actions",
            build_path=_actions_path,
            format_result=_actions_text,
        ),
    )
}


async def run_catalog_tool(tool: CatalogTool, client: PortClient, **params: Any) -> ToolOutcome:
    """Run one catalog tool end to end; never raises."""
    try:
        path = tool.build_path(params)
        data = await client.request("GET", path)
        return ToolOutcome.success(tool.format_result(data, params))
    except PortError as exc:
        return ToolOutcome.failure(tool.action, exc)
    except Exception as exc:
        logger.exception("Unexpected failure in %s", tool.name)
        return ToolOutcome.failure(tool.action, exc)
