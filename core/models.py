# =============================================================================
# core/models.py  -  Data Models (the "nouns" of the system)
# =============================================================================
#
# Three kinds of shapes live here:
#
#   1. ARGUMENT MODELS (pydantic)
#      One per tool input.  Each one is a CLOSED shape: unknown fields are
#      rejected, types are checked strictly, and defaults (page_size=20) are
#      filled in.  A typo like "frist_name" fails here, before any request
#      leaves the process.
#
#   2. REPLY (dataclass)
#      What every tool hands back: an ordered list of text content items.
#      Today each tool returns exactly one.
#
#   3. OPERATION DESCRIPTOR (frozen dataclass)
#      Binds a tool name to its metadata, argument model and handler.
#      The registry stores these and never changes them.
#
# WHAT IS NOT HERE:
#   Affinity's own entities (Person, Organization, ...).  Their JSON is owned
#   by Affinity and changes on Affinity's schedule, so we pass it through as
#   pretty-printed text instead of modelling it.
# =============================================================================

import json
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


ParentType = Literal["person", "organization", "opportunity"]

DEFAULT_PAGE_SIZE = 20


class ToolArgs(BaseModel):
    """Base for every tool's arguments: strict types, no unknown fields."""

    model_config = ConfigDict(extra="forbid", strict=True)

    def payload(self, *exclude: str) -> dict[str, Any]:
        """Only the fields the caller actually provided (None is dropped)."""
        return self.model_dump(exclude_none=True, exclude=set(exclude))


# -----------------------------------------------------------------------------
# Shared shapes
# -----------------------------------------------------------------------------
class NoArgs(ToolArgs):
    """For tools that take nothing (list all lists, list all fields)."""


class IdArgs(ToolArgs):
    id: int = Field(description="Affinity ID of the record")


class SearchArgs(ToolArgs):
    term: Optional[str] = Field(default=None, description="Name, domain or email to search for")
    page_size: int = Field(default=DEFAULT_PAGE_SIZE, description="Results per page")
    page_token: Optional[str] = Field(default=None, description="Token from a previous page")


# -----------------------------------------------------------------------------
# People
# -----------------------------------------------------------------------------
class CreatePersonArgs(ToolArgs):
    first_name: str
    last_name: str
    emails: Optional[list[str]] = None
    organization_ids: Optional[list[int]] = None


class UpdatePersonArgs(ToolArgs):
    person_id: int
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    emails: Optional[list[str]] = None
    organization_ids: Optional[list[int]] = None


# -----------------------------------------------------------------------------
# Organizations
# -----------------------------------------------------------------------------
class CreateOrganizationArgs(ToolArgs):
    name: str
    domain: Optional[str] = None
    person_ids: Optional[list[int]] = None


class UpdateOrganizationArgs(ToolArgs):
    organization_id: int
    name: Optional[str] = None
    domain: Optional[str] = None
    person_ids: Optional[list[int]] = None


# -----------------------------------------------------------------------------
# Opportunities
# -----------------------------------------------------------------------------
class SearchOpportunitiesArgs(ToolArgs):
    # No page_token here: the opportunities search is single-page.
    term: Optional[str] = None
    page_size: int = DEFAULT_PAGE_SIZE


class CreateOpportunityArgs(ToolArgs):
    name: str
    person_ids: Optional[list[int]] = None
    organization_ids: Optional[list[int]] = None


# -----------------------------------------------------------------------------
# Notes
# -----------------------------------------------------------------------------
class CreateNoteArgs(ToolArgs):
    parent_id: int
    parent_type: ParentType
    content: str


class GetNotesArgs(ToolArgs):
    parent_id: int
    parent_type: ParentType


# -----------------------------------------------------------------------------
# Lists
# -----------------------------------------------------------------------------
class GetListEntriesArgs(ToolArgs):
    list_id: int
    page_size: int = DEFAULT_PAGE_SIZE


class AddToListArgs(ToolArgs):
    list_id: int
    entity_id: int


class RemoveFromListArgs(ToolArgs):
    list_entry_id: int = Field(description="ID of the list entry (not the entity ID)")


# -----------------------------------------------------------------------------
# Fields
# -----------------------------------------------------------------------------
class GetFieldValuesArgs(ToolArgs):
    organization_id: Optional[int] = None
    person_id: Optional[int] = None
    opportunity_id: Optional[int] = None
    list_entry_id: Optional[int] = None


class UpdateFieldValueArgs(ToolArgs):
    field_id: int
    entity_id: int
    value: Any = Field(description="New value; any JSON value Affinity accepts for the field")
    list_entry_id: Optional[int] = Field(
        default=None,
        description="Required for list-specific fields: the list entry ID, not the entity ID",
    )
    entity_type: ParentType = Field(
        default="organization",
        description="Kind of record entity_id refers to; picks the lookup key",
    )


# =============================================================================
# Reply envelope
# =============================================================================
@dataclass
class TextContent:
    text: str
    type: str = "text"


@dataclass
class Reply:
    """What a handler returns.  Ordered; currently always one item."""

    content: list[TextContent] = field(default_factory=list)

    @classmethod
    def text(cls, text: str) -> "Reply":
        return cls(content=[TextContent(text=text)])

    @classmethod
    def json(cls, data: Any) -> "Reply":
        """Pretty-printed pass-through of an Affinity response body."""
        return cls.text(json.dumps(data, indent=2, ensure_ascii=False))


# =============================================================================
# Operation descriptor
# =============================================================================
@dataclass(frozen=True)
class Annotations:
    """Advisory hints for callers (e.g. whether to ask before running).

    Nothing in this server enforces them.
    """

    read_only: bool = False
    destructive: bool = False


READ_ONLY = Annotations(read_only=True, destructive=False)
WRITE = Annotations(read_only=False, destructive=False)
DESTRUCTIVE = Annotations(read_only=False, destructive=True)


Handler = Callable[[Any, Any], Awaitable[Reply]]


@dataclass(frozen=True)
class OperationDescriptor:
    name: str
    title: str
    description: str
    input_model: type[ToolArgs]
    handler: Handler
    annotations: Annotations = WRITE

    def input_schema(self) -> dict[str, Any]:
        return self.input_model.model_json_schema()
