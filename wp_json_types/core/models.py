"""
Pydantic v2 models for REST API metadata and pipeline bookkeeping.

Route/schema payloads are kept loose (extra fields ignored) because only a
handful of keys are read; schemas themselves stay plain dicts since every
later step treats them as JSON trees.
"""

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# ---------------------------------------------------------------------------
# Contexts
# ---------------------------------------------------------------------------


class RestContext(StrEnum):
    """Visibility contexts a schema field can be restricted to."""

    view = "view"
    edit = "edit"
    embed = "embed"


class OutputContext(StrEnum):
    """Output directories: one per REST context plus the creation input."""

    view = "view"
    edit = "edit"
    embed = "embed"
    create = "create"

    @property
    def label(self) -> str:
        """Capitalized name used in namespaces and hoisted type names."""
        return self.value.capitalize()

    @property
    def namespace(self) -> str:
        return f"{self.label}Context"


# Order of namespace blocks in the bundle; view content is not wrapped.
NAMESPACED_CONTEXTS: tuple[OutputContext, ...] = (
    OutputContext.create,
    OutputContext.edit,
    OutputContext.embed,
)

# ---------------------------------------------------------------------------
# REST metadata
# ---------------------------------------------------------------------------


class RouteLevel(BaseModel):
    """One entry of the API index ``routes`` table."""

    model_config = ConfigDict(extra="ignore")

    namespace: str = ""
    methods: list[str] = Field(default_factory=list)
    endpoints: list[dict[str, Any]] = Field(default_factory=list)


class SchemaEnvelope(BaseModel):
    """OPTIONS response body for a single route."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    # ``schema`` shadows a BaseModel attribute, hence the alias
    resource_schema: dict[str, Any] | None = Field(default=None, alias="schema")


class Collection(BaseModel):
    """A route URI plus its optional creation-input schema."""

    uri: str
    post_schema: dict[str, Any] | None = None


# ---------------------------------------------------------------------------
# Bookkeeping
# ---------------------------------------------------------------------------


class ErrorLogEntry(BaseModel):
    """A resource whose generated type collapsed to an empty object."""

    context: str
    title: str


@dataclass
class EmitResult:
    """Files written and degenerate outputs recorded for one collection."""

    uri: str
    written: list[str] = field(default_factory=list)
    degenerate: list[ErrorLogEntry] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)
