# =============================================================================
# core/models.py  —  Data Models (the "nouns" of the catalog)
# =============================================================================
#
# These dataclasses describe the parts of Port.io payloads that the tools
# render.  They are read-only views: nothing here is ever sent back
# upstream, and nothing outlives a single tool call.
#
# Each catalog model has a ``from_api`` constructor that tolerates missing
# keys.  Port.io omits empty fields freely, and a formatter should print
# "None" rather than fail on an entity that has no title.
#
# ToolOutcome is the internal result of one tool call: the text that goes
# back to the caller, plus the exception (if any) that produced it.
# =============================================================================

from dataclasses import dataclass, field
from typing import Any, Optional


# -----------------------------------------------------------------------------
# Blueprint — a catalog entity type
# -----------------------------------------------------------------------------
@dataclass
class Blueprint:
    """Schema definition for one kind of catalog entity."""

    identifier: Optional[str]
    title: Optional[str] = None
    description: Optional[str] = None
    schema: dict[str, Any] = field(default_factory=dict)

    @property
    def property_names(self) -> list[str]:
        properties = self.schema.get("properties") or {}
        return list(properties.keys()) if isinstance(properties, dict) else []

    @classmethod
    def from_api(cls, raw: dict[str, Any]) -> "Blueprint":
        return cls(
            identifier=raw.get("identifier"),
            title=raw.get("title"),
            description=raw.get("description"),
            schema=raw.get("schema") or {},
        )


# -----------------------------------------------------------------------------
# Entity — one record in the software catalog
# -----------------------------------------------------------------------------
# ``properties`` and ``relations`` are kept exactly as Port.io returns them;
# the formatters pretty-print them rather than interpret them.
# -----------------------------------------------------------------------------
@dataclass
class Entity:
    """An instance of a blueprint."""

    identifier: Optional[str]
    title: Optional[str] = None
    blueprint: Optional[str] = None
    properties: dict[str, Any] = field(default_factory=dict)
    relations: dict[str, Any] = field(default_factory=dict)

    @property
    def display_name(self) -> str:
        return self.title or str(self.identifier)

    @classmethod
    def from_api(cls, raw: dict[str, Any]) -> "Entity":
        return cls(
            identifier=raw.get("identifier"),
            title=raw.get("title"),
            blueprint=raw.get("blueprint"),
            properties=raw.get("properties") or {},
            relations=raw.get("relations") or {},
        )


# -----------------------------------------------------------------------------
# Action — a self-service operation
# -----------------------------------------------------------------------------
@dataclass
class Action:
    """A self-service action, optionally bound to a blueprint."""

    identifier: Optional[str]
    title: Optional[str] = None
    description: Optional[str] = None
    blueprint: Optional[str] = None
    trigger: Any = None                # Port.io sends an object; rendered as JSON

    @classmethod
    def from_api(cls, raw: dict[str, Any]) -> "Action":
        return cls(
            identifier=raw.get("identifier"),
            title=raw.get("title"),
            description=raw.get("description"),
            blueprint=raw.get("blueprint"),
            trigger=raw.get("trigger"),
        )


# -----------------------------------------------------------------------------
# ToolOutcome — what a catalog tool hands back to the MCP layer
# -----------------------------------------------------------------------------
# The caller only ever sees ``text``.  ``error`` is kept so tests (and the
# log line in tools/mcp_server.py) can tell an upstream 500 from a missing
# credential without matching on strings.
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class ToolOutcome:
    """Result of one catalog tool call."""

    text: str
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def error_kind(self) -> Optional[str]:
        return type(self.error).__name__ if self.error is not None else None

    @classmethod
    def success(cls, text: str) -> "ToolOutcome":
        return cls(text=text)

    @classmethod
    def failure(cls, action: str, error: Exception) -> "ToolOutcome":
        message = str(error) or "Unknown error"
        return cls(text=f"Error {action}: {message}", error=error)
